#!/usr/bin/env python3
"""
Calendar Date and Month Utilities

Month keys ("YYYY-MM") drive the projection horizon; ISO dates ("YYYY-MM-DD")
drive order timelines and lead-time windows.

All helpers are tolerant: invalid input yields None (or 0 for overlaps)
instead of raising, so callers can feed raw snapshot values straight in.
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any


@dataclass(frozen=True)
class YearMonth:
    """
    Immutable calendar month used as a projection bucket.

    Examples:
        >>> ym = YearMonth.parse("2025-11")
        >>> str(ym.add_months(3))
        '2026-02'
        >>> YearMonth(2025, 12) < YearMonth(2026, 1)
        True
    """

    year: int
    month: int

    def __post_init__(self) -> None:
        if not 1 <= self.month <= 12:
            raise ValueError(f"Month out of range: {self.month}")

    @classmethod
    def parse(cls, value: str) -> "YearMonth":
        """
        Parse "YYYY-MM" (or "YYYY-MM-DD", day ignored).

        Raises:
            ValueError: If the string is not a valid year-month
        """
        parts = str(value).strip().split("-")
        if len(parts) < 2:
            raise ValueError(f"Invalid month key: {value!r}")
        try:
            year, month = int(parts[0]), int(parts[1])
        except ValueError as e:
            raise ValueError(f"Invalid month key: {value!r}") from e
        return cls(year=year, month=month)

    @classmethod
    def coerce(cls, value: Any, default: "YearMonth") -> "YearMonth":
        """Parse value, returning default for missing or malformed input."""
        if isinstance(value, YearMonth):
            return value
        if isinstance(value, date):
            return cls(year=value.year, month=value.month)
        if not value:
            return default
        try:
            return cls.parse(value)
        except ValueError:
            return default

    def add_months(self, months: int) -> "YearMonth":
        """Return the month `months` later (negative goes back), rolling years."""
        index = self.year * 12 + (self.month - 1) + months
        return YearMonth(year=index // 12, month=index % 12 + 1)

    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    def to_key(self) -> str:
        """Format as YYYY-MM."""
        return f"{self.year:04d}-{self.month:02d}"

    def _ordinal(self) -> int:
        return self.year * 12 + self.month

    def __lt__(self, other: "YearMonth") -> bool:
        return self._ordinal() < other._ordinal()

    def __le__(self, other: "YearMonth") -> bool:
        return self._ordinal() <= other._ordinal()

    def __gt__(self, other: "YearMonth") -> bool:
        return self._ordinal() > other._ordinal()

    def __ge__(self, other: "YearMonth") -> bool:
        return self._ordinal() >= other._ordinal()

    def __str__(self) -> str:
        return self.to_key()


def months_from(start: YearMonth | str, count: int) -> list[str]:
    """
    Generate `count` consecutive month keys beginning at `start`.

    Example:
        months_from("2025-11", 4) -> ["2025-11", "2025-12", "2026-01", "2026-02"]
    """
    first = start if isinstance(start, YearMonth) else YearMonth.parse(start)
    return [first.add_months(offset).to_key() for offset in range(max(0, count))]


def _is_date(value: Any) -> bool:
    return isinstance(value, date)


def _as_date(value: date) -> date:
    return value.date() if isinstance(value, datetime) else value


def parse_iso_date(value: Any) -> date | None:
    """
    Parse an ISO "YYYY-MM-DD" string (or pass a date through).

    Returns:
        date, or None if any component is missing, zero or non-numeric.
        Out-of-range months and days roll forward, so "2025-02-30" is
        2025-03-02 and "2025-13-01" is 2026-01-01.
    """
    if not value:
        return None
    if _is_date(value):
        return _as_date(value)

    parts = str(value).split("-")
    if len(parts) < 3:
        return None
    try:
        year, month, day = (int(part) for part in parts[:3])
    except ValueError:
        return None
    if not (year and month and day):
        return None
    try:
        first = YearMonth(year, 1).add_months(month - 1).first_day()
        return first + timedelta(days=day - 1)
    except (OverflowError, ValueError):
        return None


def add_days(value: Any, days: Any = 0) -> date | None:
    """Offset a date by whole days; None for invalid dates or offsets."""
    if not _is_date(value):
        return None
    try:
        return _as_date(value) + timedelta(days=int(days or 0))
    except (TypeError, ValueError, OverflowError):
        return None


def days_between(start: Any, end: Any) -> int | None:
    """Signed number of days from start to end; None if either is not a date."""
    if not _is_date(start) or not _is_date(end):
        return None
    return (_as_date(end) - _as_date(start)).days


def overlap_days(start_a: Any, end_a: Any, start_b: Any, end_b: Any) -> int:
    """
    Inclusive number of days shared by [start_a, end_a] and [start_b, end_b].

    Example:
        overlap_days(Jan 1, Jan 10, Jan 5, Jan 20) -> 6  # Jan 5..10
    """
    if not all(_is_date(d) for d in (start_a, end_a, start_b, end_b)):
        return 0
    start = max(_as_date(start_a), _as_date(start_b))
    end = min(_as_date(end_a), _as_date(end_b))
    if end < start:
        return 0
    return (end - start).days + 1
