#!/usr/bin/env python3
"""
JSON Utilities Module

Central reading and writing of workspace JSON. Decimal amounts are written as
plain JSON numbers so snapshots stay readable by the browser dashboard.
"""

import json
from decimal import Decimal
from pathlib import Path
from typing import Any


def _default(value: Any) -> Any:
    """Serialize types json does not know about."""
    if isinstance(value, Decimal):
        return float(value)
    if hasattr(value, "to_dict"):
        return value.to_dict()
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def write_json(filepath: str | Path, data: Any, sort_keys: bool = False) -> None:
    """
    Write data to a JSON file with standard pretty-printing.

    Args:
        filepath: Path to the JSON file (parents are created)
        data: Data to write; Decimals and objects with to_dict() are converted
        sort_keys: If True, sort dictionary keys (default: False)
    """
    filepath = Path(filepath)
    filepath.parent.mkdir(parents=True, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, ensure_ascii=False, sort_keys=sort_keys, default=_default)


def read_json(filepath: str | Path) -> Any:
    """Read data from a JSON file."""
    with open(filepath, encoding="utf-8") as f:
        return json.load(f)


def format_json(data: Any, sort_keys: bool = False) -> str:
    """Format data as a pretty-printed JSON string."""
    return json.dumps(data, indent=2, ensure_ascii=False, sort_keys=sort_keys, default=_default)
