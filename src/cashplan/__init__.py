"""
Cashplan - Cash-Flow Planning for an E-Commerce Seller

Projects monthly account balances from recurring marketplace revenue, one-off
inflows and outflows, and recorded actual closings.

Domain Packages:
- core: amount parsing, dates, configuration, snapshot document
- projection: balance projection engine and reporting
- leadtime: production lead-time resolution across master-data overrides
- cli: command-line interface

Example Usage:
    from cashplan.projection import build_series, build_hybrid_closing_balance_series
    from cashplan.leadtime import resolve_lead_time
    from cashplan.core.currency import parse_decimal, format_eur
"""

__version__ = "0.1.0"
__author__ = "Cashplan Contributors"

from .core.currency import format_eur, parse_decimal
from .leadtime import resolve_lead_time
from .projection import build_hybrid_closing_balance_series, build_series

__all__ = [
    "build_hybrid_closing_balance_series",
    "build_series",
    "format_eur",
    "parse_decimal",
    "resolve_lead_time",
]
