#!/usr/bin/env python3
"""Tests for projection reporting helpers."""

from decimal import Decimal

import pandas as pd
import pytest

from cashplan.projection import (
    actual_comparisons,
    build_hybrid_closing_balance_series,
    build_projection,
    format_table,
    render_balance_chart,
    series_to_dataframe,
    summarize_series,
)


@pytest.fixture
def points():
    rows = [
        {"month": "2025-01", "net": 100},
        {"month": "2025-02", "net": -300, "actualClosing": "-150"},
        {"month": "2025-03", "net": 400},
    ]
    return build_hybrid_closing_balance_series(rows, 0)


class TestSeriesToDataFrame:
    """Test DataFrame conversion."""

    def test_columns_and_index(self, points):
        """Test the frame is indexed by month with float amounts."""
        df = series_to_dataframe(points)

        assert list(df.index) == ["2025-01", "2025-02", "2025-03"]
        assert list(df.columns) == [
            "opening",
            "net",
            "planned_closing",
            "closing",
            "actual_closing",
            "locked_actual",
        ]
        assert df.loc["2025-02", "closing"] == -150.0
        assert pd.isna(df.loc["2025-01", "actual_closing"])
        assert bool(df.loc["2025-02", "locked_actual"])

    def test_empty(self):
        """Test an empty projection gives an empty frame."""
        assert series_to_dataframe([]).empty


class TestSummaries:
    """Test summary figures and comparisons."""

    def test_summarize(self, points):
        """Test lowest and first negative month detection."""
        summary = summarize_series(points)

        assert summary["months"] == 3
        assert summary["final_closing"] == 250.0
        assert summary["lowest_closing"] == -150.0
        assert summary["lowest_month"] == "2025-02"
        assert summary["first_negative_month"] == "2025-02"
        assert summary["locked_months"] == 1

    def test_summarize_empty(self):
        """Test an empty projection summary."""
        summary = summarize_series([])
        assert summary["months"] == 0
        assert summary["final_closing"] is None

    def test_actual_comparisons(self, points):
        """Test planned vs actual deltas for locked months."""
        assert actual_comparisons(points) == [
            {
                "month": "2025-02",
                "plannedClosing": -200.0,
                "actualClosing": -150.0,
                "closingDelta": 50.0,
            }
        ]

    def test_format_table(self, points):
        """Test the text table lists every month in German notation."""
        table = format_table(points)
        lines = table.splitlines()

        assert lines[0].startswith("Month")
        assert len(lines) == 5
        assert "-150,00 €" in lines[3]
        assert lines[3].rstrip().endswith("locked")


class TestRenderBalanceChart:
    """Test chart rendering."""

    def test_writes_png(self, points, temp_dir):
        """Test a PNG file is produced."""
        output = render_balance_chart(points, temp_dir / "charts")

        assert output.exists()
        assert output.suffix == ".png"
        assert output.parent == temp_dir / "charts"

    def test_empty_raises(self, temp_dir):
        """Test an empty projection cannot be charted."""
        with pytest.raises(ValueError):
            render_balance_chart([], temp_dir)

    def test_from_sample_state(self, sample_state, temp_dir):
        """Test charting a full projection."""
        output = render_balance_chart(build_projection(sample_state), temp_dir, figure_size=(6, 3), dpi=50)
        assert output.stat().st_size > 0
        assert Decimal(0) < build_projection(sample_state)[-1].closing
