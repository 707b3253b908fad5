#!/usr/bin/env python3
"""
Projection Reporting

Tabular and chart views of a projection for the dashboard and the CLI.
"""

import logging
from collections.abc import Sequence
from datetime import datetime
from pathlib import Path
from typing import Any

import matplotlib
import pandas as pd

matplotlib.use("Agg")  # Use non-interactive backend
import matplotlib.pyplot as plt  # noqa: E402

from ..core.currency import format_eur  # noqa: E402
from .models import ProjectionPoint  # noqa: E402

logger = logging.getLogger(__name__)

FRAME_COLUMNS = ["opening", "net", "planned_closing", "closing", "actual_closing", "locked_actual"]


def series_to_dataframe(points: Sequence[ProjectionPoint]) -> pd.DataFrame:
    """
    Convert projection points to a DataFrame indexed by month key.

    Amounts are floats; actual_closing is NaN where nothing was recorded.
    """
    records = [
        {
            "month": p.month,
            "opening": float(p.opening),
            "net": float(p.net),
            "planned_closing": float(p.planned_closing),
            "closing": float(p.closing),
            "actual_closing": float(p.actual_closing) if p.actual_closing is not None else None,
            "locked_actual": p.locked_actual,
        }
        for p in points
    ]
    df = pd.DataFrame(records, columns=["month", *FRAME_COLUMNS])
    df["actual_closing"] = df["actual_closing"].astype(float)
    return df.set_index("month")


def summarize_series(points: Sequence[ProjectionPoint]) -> dict[str, Any]:
    """
    Key figures of a projection.

    Returns:
        Dict with final closing, lowest closing and its month, the first month
        with a negative closing (or None), and the number of locked months
    """
    if not points:
        return {
            "months": 0,
            "final_closing": None,
            "lowest_closing": None,
            "lowest_month": None,
            "first_negative_month": None,
            "locked_months": 0,
        }

    lowest = min(points, key=lambda p: p.closing)
    first_negative = next((p.month for p in points if p.closing < 0), None)

    return {
        "months": len(points),
        "final_closing": float(points[-1].closing),
        "lowest_closing": float(lowest.closing),
        "lowest_month": lowest.month,
        "first_negative_month": first_negative,
        "locked_months": sum(1 for p in points if p.locked_actual),
    }


def actual_comparisons(points: Sequence[ProjectionPoint]) -> list[dict[str, Any]]:
    """Planned vs. actual closing for every month with a recorded actual."""
    return [
        {
            "month": p.month,
            "plannedClosing": float(p.planned_closing),
            "actualClosing": float(p.actual_closing),
            "closingDelta": float(p.actual_closing - p.planned_closing),
        }
        for p in points
        if p.locked_actual and p.actual_closing is not None
    ]


def format_table(points: Sequence[ProjectionPoint]) -> str:
    """Render projection points as a fixed-width text table."""
    header = f"{'Month':<8} {'Opening':>16} {'Net':>16} {'Closing':>16}  Actual"
    lines = [header, "-" * len(header)]
    for p in points:
        marker = "locked" if p.locked_actual else ""
        lines.append(
            f"{p.month:<8} {format_eur(p.opening):>16} {format_eur(p.net):>16} "
            f"{format_eur(p.closing):>16}  {marker}"
        )
    return "\n".join(lines)


def render_balance_chart(
    points: Sequence[ProjectionPoint],
    output_dir: Path,
    figure_size: tuple[int, int] = (12, 6),
    dpi: int = 150,
) -> Path:
    """
    Draw net cash flow bars and the closing balance line to a PNG file.

    Returns:
        Path to the generated chart

    Raises:
        ValueError: If there are no points to plot
    """
    if not points:
        raise ValueError("Nothing to plot: projection is empty")

    df = series_to_dataframe(points)
    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=figure_size)
    x = range(len(df))
    colors = ["green" if value >= 0 else "red" for value in df["net"]]

    ax.bar(x, df["net"], color=colors, alpha=0.4, label="Net")
    ax.plot(x, df["planned_closing"], color="gray", linestyle="--", linewidth=1, label="Planned Closing")
    ax.plot(x, df["closing"], color="#2E86AB", linewidth=2, label="Closing")

    locked = df[df["locked_actual"]]
    if not locked.empty:
        locked_x = [df.index.get_loc(month) for month in locked.index]
        ax.scatter(locked_x, locked["closing"], color="#A23B72", zorder=3, label="Locked Actual")

    ax.axhline(y=0, color="black", linestyle="-", linewidth=0.5)
    ax.set_xticks(list(x))
    ax.set_xticklabels(df.index, rotation=45, ha="right", fontsize=8)
    ax.set_title("Projected Closing Balance", fontsize=12, fontweight="bold")
    ax.set_ylabel("Balance (€)", fontsize=10)
    ax.legend(loc="best", fontsize=8)
    ax.grid(True, alpha=0.3)
    ax.yaxis.set_major_formatter(plt.FuncFormatter(lambda v, p: f"{v/1000:.0f}k €"))
    fig.tight_layout()

    timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
    output_file = output_dir / f"{timestamp}_balance_projection.png"
    fig.savefig(output_file, dpi=dpi, bbox_inches="tight")
    plt.close(fig)

    logger.info("Wrote balance chart to %s", output_file)
    return output_file
