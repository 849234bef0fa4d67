"""
Price parsing and display formatting for tags.
"""

import math
import re
from typing import Optional

from .models import Currency

_NON_NUMERIC = re.compile(r"[^\d.]")
_LEADING_NUMBER = re.compile(r"\d*\.?\d+")


def _to_amount(text: str) -> Optional[float]:
    try:
        value = float(text)
    except ValueError:
        return None
    if not math.isfinite(value) or value < 0:
        return None
    return value


def _leading_amount(text: str) -> Optional[float]:
    match = _LEADING_NUMBER.match(_NON_NUMERIC.sub("", text))
    return float(match.group()) if match else None


def parse_price(text: Optional[str]) -> float:
    """
    Parse free-form price text into a non-negative number.

    Tries a direct parse first, then retries with everything except digits
    and '.' stripped out, reading the longest leading number
    (so "12.50.-" is 12.5). Anything still unparsable is 0.

    Example:
        >>> parse_price("6,250 den")
        6250.0
        >>> parse_price("abc")
        0.0
    """
    if not text:
        return 0.0

    value = _to_amount(text)
    if value is None:
        value = _leading_amount(text)
    return value if value is not None else 0.0


def format_amount(text: Optional[str]) -> str:
    """Parsed price with exactly two decimal places."""
    return f"{parse_price(text):.2f}"


def format_price(text: Optional[str], currency: Currency) -> str:
    """
    Display string for a price: '€12.50' for euro, '12.50 den' otherwise.
    """
    amount = format_amount(text)
    if currency == Currency.EURO:
        return f"€{amount}"
    return f"{amount} den"
