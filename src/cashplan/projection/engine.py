#!/usr/bin/env python3
"""
Balance Projection Engine

Turns a workspace snapshot into a month-by-month running balance.

Two entry points:
- build_series: plans every month from recurring revenue and one-off
  extras/outgoings
- build_hybrid_closing_balance_series: runs a precomputed net series and lets
  recorded actual closings override the plan; an actual becomes the opening of
  the following month, so everything after it is re-based

Both are pure: the snapshot is read, never modified, and no configuration or
I/O is consulted.
"""

import logging
from collections import defaultdict
from collections.abc import Iterable
from decimal import Decimal
from typing import Any

from ..core.currency import parse_decimal, try_parse_decimal
from ..core.dates import months_from
from .models import (
    DEFAULT_HORIZON_MONTHS,
    DEFAULT_PAYOUT_PCT,
    DEFAULT_START_MONTH,
    BalanceSeries,
    HybridRow,
    MonthlyTransaction,
    PlanSettings,
    ProjectionPoint,
)

logger = logging.getLogger(__name__)


def _records(state: dict[str, Any], key: str) -> list[MonthlyTransaction]:
    items = state.get(key) or []
    if not isinstance(items, list):
        return []
    return [MonthlyTransaction.from_dict(item) for item in items]


def aggregate_by_month(
    transactions: Iterable[MonthlyTransaction], magnitude: bool = False
) -> dict[str, Decimal]:
    """
    Sum transaction amounts per month key.

    Args:
        transactions: Transactions to aggregate
        magnitude: Sum absolute values (outgoings are stored with either sign)

    Returns:
        Mapping of month key to total; months without records are absent
    """
    totals: dict[str, Decimal] = defaultdict(Decimal)
    for transaction in transactions:
        amount = abs(transaction.amount) if magnitude else transaction.amount
        totals[transaction.month] += amount
    return dict(totals)


def _payout_factor(value: Any, default: Decimal) -> Decimal:
    parsed = try_parse_decimal(value)
    return parsed.value if parsed.ok else default


def build_series(
    state: dict[str, Any] | None,
    default_start: str = DEFAULT_START_MONTH,
    default_horizon: int = DEFAULT_HORIZON_MONTHS,
    default_payout_pct: Decimal = DEFAULT_PAYOUT_PCT,
) -> BalanceSeries:
    """
    Project the running balance over the planning horizon.

    Each month's net is the paid-out share of monthly revenue plus that month's
    extras minus that month's outgoings. Transactions booked to months outside
    the horizon are left out.

    Args:
        state: Workspace snapshot (settings, openingEur, monthlyAmazonEur,
            payoutPct, extras, outgoings); missing parts take defaults
        default_start: Start month when settings.startMonth is missing
        default_horizon: Horizon when settings.horizonMonths is missing
        default_payout_pct: Payout factor when payoutPct is missing

    Returns:
        BalanceSeries with one entry per month
    """
    state = state if isinstance(state, dict) else {}
    settings = PlanSettings.from_state(state, default_start, default_horizon)

    months = months_from(settings.start, settings.horizon_months)
    month_set = set(months)

    extras = _records(state, "extras")
    outgoings = _records(state, "outgoings")
    dropped = [t for t in extras + outgoings if t.month not in month_set]
    if dropped:
        logger.debug("Ignoring %d transactions outside %s..%s", len(dropped), months[0], months[-1])

    extra_totals = aggregate_by_month(extras)
    outgoing_totals = aggregate_by_month(outgoings, magnitude=True)

    revenue = parse_decimal(state.get("monthlyAmazonEur"))
    payout = _payout_factor(state.get("payoutPct"), default_payout_pct)
    base_inflow = revenue * payout

    net = [
        base_inflow + extra_totals.get(month, Decimal(0)) - outgoing_totals.get(month, Decimal(0))
        for month in months
    ]

    opening_list: list[Decimal] = []
    closing: list[Decimal] = []
    balance = settings.opening_balance
    for month_net in net:
        opening_list.append(balance)
        balance = balance + month_net
        closing.append(balance)

    return BalanceSeries(
        months=months,
        net=net,
        closing=closing,
        opening_list=opening_list,
        opening=settings.opening_balance,
        start=settings.start.to_key(),
        horizon=settings.horizon_months,
        dropped=dropped,
    )


def read_locked_actual_closing(value: Any) -> Decimal | None:
    """
    Read a recorded actual closing balance.

    Returns None for "nothing recorded" (None, blank, non-numeric), so that a
    recorded actual of zero still locks the month.
    """
    parsed = try_parse_decimal(value)
    return parsed.value if parsed.ok else None


def build_hybrid_closing_balance_series(
    rows: Iterable[HybridRow | dict[str, Any]] | None, initial_opening: Any = 0
) -> list[ProjectionPoint]:
    """
    Run a balance series where recorded actuals override planned closings.

    Example:
        nets 100, 100, 100 from 0 with an actual of 50 in the second month
        give closings 100, 50, 150

    Args:
        rows: HybridRow objects or dicts with month, net and optional actualClosing
        initial_opening: Opening balance of the first row (invalid -> 0)

    Returns:
        One ProjectionPoint per row; empty input gives an empty list
    """
    if not rows:
        return []

    running = try_parse_decimal(initial_opening).or_zero()
    points: list[ProjectionPoint] = []

    for raw_row in rows:
        row = raw_row if isinstance(raw_row, HybridRow) else HybridRow.from_dict(raw_row)
        opening = running
        net = try_parse_decimal(row.net).or_zero()
        actual = read_locked_actual_closing(row.actual_closing)
        planned = opening + net
        closing = actual if actual is not None else planned
        running = closing
        points.append(
            ProjectionPoint(
                month=row.month,
                opening=opening,
                net=net,
                planned_closing=planned,
                closing=closing,
                actual_closing=actual,
                locked_actual=actual is not None,
            )
        )

    return points


def actual_closings_by_month(state: dict[str, Any]) -> dict[str, Any]:
    """Map month key to the recorded closing balance from state["actuals"]."""
    result: dict[str, Any] = {}
    for record in state.get("actuals") or []:
        if not isinstance(record, dict):
            continue
        month = str(record.get("month") or "").strip()
        if month:
            result[month] = record.get("closingBalanceEur")
    return result


def build_projection(state: dict[str, Any] | None, **defaults: Any) -> list[ProjectionPoint]:
    """
    Plan the horizon and apply recorded actuals on top.

    Keyword arguments are passed through to build_series as defaults.
    """
    state = state if isinstance(state, dict) else {}
    series = build_series(state, **defaults)
    actuals = actual_closings_by_month(state)
    rows = [
        HybridRow(month=month, net=net, actual_closing=actuals.get(month))
        for month, net in zip(series.months, series.net)
    ]
    return build_hybrid_closing_balance_series(rows, series.opening)
