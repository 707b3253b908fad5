"""
Core Utilities Package

Shared building blocks for the planner:
- Locale-aware amount parsing and euro formatting
- Calendar month and ISO date helpers
- Environment-based configuration
- The versioned workspace snapshot document
"""

from .config import Config, Environment, get_config, reload_config
from .currency import ParsedDecimal, ParseStatus, format_eur, parse_decimal, try_parse_decimal
from .dates import YearMonth, add_days, days_between, months_from, overlap_days, parse_iso_date
from .document import (
    RevisionConflictError,
    SnapshotDocument,
    SnapshotFormatError,
    SnapshotStore,
)

__all__ = [
    # Configuration
    "Config",
    "Environment",
    "get_config",
    "reload_config",
    # Amounts
    "ParseStatus",
    "ParsedDecimal",
    "format_eur",
    "parse_decimal",
    "try_parse_decimal",
    # Dates
    "YearMonth",
    "add_days",
    "days_between",
    "months_from",
    "overlap_days",
    "parse_iso_date",
    # Snapshot document
    "RevisionConflictError",
    "SnapshotDocument",
    "SnapshotFormatError",
    "SnapshotStore",
]
