#!/usr/bin/env python3
"""
Projection Data Models

Typed views over the plain-dict workspace snapshot, and the result types the
projection engine returns. Every model converts back to plain JSON through
to_dict() using the camelCase keys the dashboard expects.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any

from ..core.currency import parse_decimal, to_float, try_parse_decimal
from ..core.dates import YearMonth

DEFAULT_START_MONTH = "2025-02"
DEFAULT_HORIZON_MONTHS = 18
MAX_HORIZON_MONTHS = 120
DEFAULT_PAYOUT_PCT = Decimal("0.85")


@dataclass(frozen=True)
class MonthlyTransaction:
    """A one-off inflow (extra) or outflow (outgoing) booked to a month."""

    month: str
    amount: Decimal

    @classmethod
    def from_dict(cls, record: Any) -> "MonthlyTransaction":
        if not isinstance(record, dict):
            return cls(month="", amount=Decimal(0))
        return cls(
            month=str(record.get("month") or "").strip(),
            amount=parse_decimal(record.get("amountEur")),
        )


@dataclass(frozen=True)
class PlanSettings:
    """Resolved planning window and starting balance."""

    start: YearMonth
    horizon_months: int
    opening_balance: Decimal

    @classmethod
    def from_state(
        cls,
        state: dict[str, Any],
        default_start: str = DEFAULT_START_MONTH,
        default_horizon: int = DEFAULT_HORIZON_MONTHS,
    ) -> "PlanSettings":
        """
        Resolve settings with defaults for anything missing or invalid.

        A horizon outside 1..MAX_HORIZON_MONTHS falls back to the default.

        The explicit `openingEur` field wins over the locale-formatted
        `settings.openingBalance` text.
        """
        settings = state.get("settings") or {}
        if not isinstance(settings, dict):
            settings = {}

        start = YearMonth.coerce(settings.get("startMonth"), YearMonth.parse(default_start))

        horizon = try_parse_decimal(settings.get("horizonMonths"))
        if horizon.ok and 1 <= horizon.value <= MAX_HORIZON_MONTHS:
            horizon_months = int(horizon.value)
        else:
            horizon_months = default_horizon

        explicit_opening = try_parse_decimal(state.get("openingEur"))
        if explicit_opening.ok:
            opening = explicit_opening.value
        else:
            opening = parse_decimal(settings.get("openingBalance"))

        return cls(start=start, horizon_months=horizon_months, opening_balance=opening)


@dataclass(frozen=True)
class ProjectionPoint:
    """One month of the hybrid (planned + locked actual) balance series."""

    month: str
    opening: Decimal
    net: Decimal
    planned_closing: Decimal
    closing: Decimal
    actual_closing: Decimal | None = None
    locked_actual: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "opening": float(self.opening),
            "net": float(self.net),
            "plannedClosing": float(self.planned_closing),
            "closing": float(self.closing),
            "actualClosing": to_float(self.actual_closing),
            "lockedActual": self.locked_actual,
        }


@dataclass(frozen=True)
class HybridRow:
    """Input row for the hybrid series: a month's net and optional actual."""

    month: str
    net: Any
    actual_closing: Any = None

    @classmethod
    def from_dict(cls, record: Any) -> "HybridRow":
        if not isinstance(record, dict):
            return cls(month="", net=None)
        return cls(
            month=str(record.get("month") or ""),
            net=record.get("net"),
            actual_closing=record.get("actualClosing"),
        )


@dataclass(frozen=True)
class BalanceSeries:
    """Flat month-by-month running balance."""

    months: list[str]
    net: list[Decimal]
    closing: list[Decimal]
    opening_list: list[Decimal]
    opening: Decimal
    start: str
    horizon: int
    dropped: list[MonthlyTransaction] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "months": list(self.months),
            "net": [float(v) for v in self.net],
            "closing": [float(v) for v in self.closing],
            "openingList": [float(v) for v in self.opening_list],
            "opening": float(self.opening),
            "start": self.start,
            "horizon": self.horizon,
        }
