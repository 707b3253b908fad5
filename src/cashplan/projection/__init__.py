"""
Balance Projection Package

Month-by-month cash balance projection for the planning dashboard.

Key Components:
- engine: planned series and the hybrid series with locked actuals
- models: snapshot views and result types
- report: DataFrame, summary, text table and chart rendering
"""

from .engine import (
    aggregate_by_month,
    build_hybrid_closing_balance_series,
    build_projection,
    build_series,
    read_locked_actual_closing,
)
from .models import BalanceSeries, HybridRow, MonthlyTransaction, PlanSettings, ProjectionPoint
from .report import (
    actual_comparisons,
    format_table,
    render_balance_chart,
    series_to_dataframe,
    summarize_series,
)

__all__ = [
    "BalanceSeries",
    "HybridRow",
    "MonthlyTransaction",
    "PlanSettings",
    "ProjectionPoint",
    "actual_comparisons",
    "aggregate_by_month",
    "build_hybrid_closing_balance_series",
    "build_projection",
    "build_series",
    "format_table",
    "read_locked_actual_closing",
    "render_balance_chart",
    "series_to_dataframe",
    "summarize_series",
]
