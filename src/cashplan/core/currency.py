#!/usr/bin/env python3
"""
Locale-Aware Currency Parsing and Formatting

Amounts in the planning workspace are typed by hand in German notation
("1.234,56") but may also arrive as plain numbers from imports or as
dot-decimal strings ("1234.56") from older snapshots.

All amounts are handled as Decimal to avoid floating-point drift in the
running balance.

Parsing rules:
- Numbers (int, float, Decimal) pass through unchanged
- Empty or whitespace-only input is zero
- Strings matching the grouped German pattern use '.' for thousands and
  ',' for decimals
- Anything else falls back to plain numeric coercion
- Garbage never raises; it becomes zero (parse_decimal) or an INVALID
  result (try_parse_decimal)
"""

import logging
import re
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)

# Optional sign, digit groups of 1-3 separated by '.', optional ',' decimals;
# or bare digits with optional ',' decimals.
GROUPED_DECIMAL_PATTERN = re.compile(r"^-?(?:\d{1,3}(?:\.\d{3})+|\d+)(?:,\d+)?$")

# What plain numeric coercion accepts: no digit separators, no words.
PLAIN_NUMBER_PATTERN = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")

CURRENCY_SUFFIX = " €"
MISSING_DISPLAY = "—"


class ParseStatus(Enum):
    """Outcome of parsing a user-entered amount."""

    OK = "ok"
    ABSENT = "absent"
    INVALID = "invalid"


@dataclass(frozen=True)
class ParsedDecimal:
    """
    Result of parsing an amount, keeping "zero" and "unparseable" apart.

    Examples:
        >>> try_parse_decimal("0").value
        Decimal('0')
        >>> try_parse_decimal("abc").status
        <ParseStatus.INVALID: 'invalid'>
    """

    value: Decimal | None
    status: ParseStatus

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.OK

    @property
    def is_absent(self) -> bool:
        return self.status is ParseStatus.ABSENT

    def or_zero(self) -> Decimal:
        """Value if parsed, otherwise Decimal(0)."""
        return self.value if self.value is not None else Decimal(0)


_ABSENT = ParsedDecimal(value=None, status=ParseStatus.ABSENT)
_INVALID = ParsedDecimal(value=None, status=ParseStatus.INVALID)


def _finite(value: Decimal) -> ParsedDecimal:
    if not value.is_finite():
        return _INVALID
    return ParsedDecimal(value=value, status=ParseStatus.OK)


def try_parse_decimal(value: Any) -> ParsedDecimal:
    """
    Parse a locale-formatted amount into a ParsedDecimal.

    Args:
        value: Number, string like "1.234,56" / "1234.56", or None

    Returns:
        ParsedDecimal with status OK, ABSENT (None/blank) or INVALID
    """
    if value is None:
        return _ABSENT
    if isinstance(value, Decimal):
        return _finite(value)
    if isinstance(value, bool):
        return ParsedDecimal(value=Decimal(int(value)), status=ParseStatus.OK)
    if isinstance(value, (int, float)):
        # str() keeps the shortest repr, so 0.1 stays Decimal('0.1')
        try:
            return _finite(Decimal(str(value)))
        except InvalidOperation:
            return _INVALID

    text = str(value).strip()
    if not text:
        return _ABSENT

    if GROUPED_DECIMAL_PATTERN.match(text):
        normalized = text.replace(".", "").replace(",", ".")
    elif PLAIN_NUMBER_PATTERN.match(text):
        normalized = text
    else:
        logger.debug("Unparseable amount %r", value)
        return _INVALID

    try:
        return _finite(Decimal(normalized))
    except (InvalidOperation, ValueError):
        logger.debug("Unparseable amount %r", value)
        return _INVALID


def parse_decimal(value: Any) -> Decimal:
    """
    Parse a locale-formatted amount, falling back to zero.

    Examples:
        parse_decimal("1.234,50") -> Decimal('1234.50')
        parse_decimal("12.5") -> Decimal('12.5')
        parse_decimal("") -> Decimal('0')
        parse_decimal("n/a") -> Decimal('0')
    """
    return try_parse_decimal(value).or_zero()


def format_eur(value: Any, decimals: int = 2) -> str:
    """
    Format an amount in German notation with a trailing euro sign.

    Args:
        value: Amount to format (number or locale string)
        decimals: Fixed number of fraction digits (default: 2)

    Returns:
        Formatted string like "1.234,50 €", or "—" for non-numeric input
    """
    parsed = try_parse_decimal(value)
    if not parsed.ok:
        return MISSING_DISPLAY

    quantum = Decimal(1).scaleb(-decimals)
    rounded = parsed.value.quantize(quantum, rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)

    # Render with US separators, then swap them
    us_style = f"{rounded:,.{decimals}f}"
    german = us_style.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{german}{CURRENCY_SUFFIX}"


def to_float(value: Decimal | None) -> float | None:
    """Convert a Decimal to float for JSON output, keeping None."""
    if value is None:
        return None
    return float(value)
