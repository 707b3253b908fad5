#!/usr/bin/env python3
"""Tests for the hybrid closing-balance series with locked actuals."""

from decimal import Decimal

import pytest

from cashplan.projection import (
    HybridRow,
    build_hybrid_closing_balance_series,
    read_locked_actual_closing,
)


class TestReadLockedActualClosing:
    """Test actual-closing parsing."""

    @pytest.mark.parametrize("raw", [None, "", "   ", "n/a", float("nan"), float("inf")])
    def test_absent_or_invalid_is_none(self, raw):
        """Test that nothing recorded is None, not zero."""
        assert read_locked_actual_closing(raw) is None

    @pytest.mark.parametrize(
        "raw,expected",
        [
            (0, Decimal(0)),
            ("0", Decimal(0)),
            ("1.234,5", Decimal("1234.5")),
            ("1.234", Decimal("1234")),
            (-20, Decimal(-20)),
        ],
    )
    def test_values(self, raw, expected):
        """Test recorded values including zero."""
        assert read_locked_actual_closing(raw) == expected


class TestBuildHybridSeries:
    """Test build_hybrid_closing_balance_series."""

    @pytest.mark.projection
    def test_locked_actual_rebases(self):
        """Test an actual becomes the next month's opening."""
        rows = [
            {"month": "2025-01", "net": 100, "actualClosing": None},
            {"month": "2025-02", "net": 100, "actualClosing": 50},
            {"month": "2025-03", "net": 100, "actualClosing": None},
        ]
        points = build_hybrid_closing_balance_series(rows, 0)

        assert [p.closing for p in points] == [Decimal(100), Decimal(50), Decimal(150)]
        assert [p.planned_closing for p in points] == [Decimal(100), Decimal(200), Decimal(150)]
        assert [p.opening for p in points] == [Decimal(0), Decimal(100), Decimal(50)]
        assert [p.locked_actual for p in points] == [False, True, False]

    @pytest.mark.projection
    def test_zero_actual_locks(self):
        """Test a recorded zero is a real actual."""
        points = build_hybrid_closing_balance_series(
            [HybridRow("2025-01", 100, actual_closing=0), HybridRow("2025-02", 10)], 500
        )
        assert points[0].closing == Decimal(0)
        assert points[0].locked_actual
        assert points[0].actual_closing == Decimal(0)
        assert points[1].closing == Decimal(10)

    @pytest.mark.projection
    def test_blank_actual_does_not_lock(self):
        """Test empty strings are not actuals."""
        points = build_hybrid_closing_balance_series(
            [{"month": "2025-01", "net": 5, "actualClosing": ""}], 1
        )
        assert points[0].closing == Decimal(6)
        assert points[0].actual_closing is None
        assert not points[0].locked_actual

    @pytest.mark.projection
    def test_empty_rows(self):
        """Test empty input gives an empty series."""
        assert build_hybrid_closing_balance_series([], 100) == []
        assert build_hybrid_closing_balance_series(None, 100) == []

    @pytest.mark.projection
    def test_invalid_inputs_degrade(self):
        """Test garbage net and opening become zero."""
        points = build_hybrid_closing_balance_series(
            [{"month": "2025-01", "net": "abc"}, "not-a-row"], "xyz"
        )
        assert points[0].opening == Decimal(0)
        assert points[0].net == Decimal(0)
        assert points[1].month == ""
        assert points[1].closing == Decimal(0)

    @pytest.mark.projection
    def test_to_dict(self):
        """Test the row-oriented JSON shape."""
        point = build_hybrid_closing_balance_series(
            [{"month": "2025-01", "net": 10, "actualClosing": "7"}], 0
        )[0]
        assert point.to_dict() == {
            "month": "2025-01",
            "opening": 0.0,
            "net": 10.0,
            "plannedClosing": 10.0,
            "closing": 7.0,
            "actualClosing": 7.0,
            "lockedActual": True,
        }

    @pytest.mark.projection
    def test_accepts_generator(self):
        """Test rows may be any iterable."""
        rows = ({"month": f"2025-0{i}", "net": 1} for i in range(1, 4))
        points = build_hybrid_closing_balance_series(rows, 0)
        assert [p.closing for p in points] == [Decimal(1), Decimal(2), Decimal(3)]
