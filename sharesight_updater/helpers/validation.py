"""Argument parsing helpers shared by the command line front-end."""

from __future__ import annotations

import math
import re
from datetime import datetime

from ..errors import UsageError

# Plain ASCII decimal or exponent notation, no separators or padding
_PRICE_RE = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_MAX_INVESTMENT_ID = 2**32 - 1


def is_iso_date(value: str) -> bool:
    """Return ``True`` when ``value`` is a valid ISO ``YYYY-MM-DD`` string."""

    if not isinstance(value, str) or len(value) != 10:
        return False
    try:
        datetime.strptime(value, "%Y-%m-%d")
    except ValueError:
        return False
    return True


def validate_date(value: str) -> str:
    """Return ``value`` unchanged if it is a real ``YYYY-MM-DD`` calendar date.

    Raises:
        UsageError: for anything else (``2022-13-40``, ``01-01-2022``, ``""``).
    """
    if not is_iso_date(value):
        raise UsageError(
            f"Invalid date format, expecting YYYY-MM-DD, got '{value}'"
        )
    return value


def parse_price(value: str) -> float:
    """Return ``value`` parsed as a finite ``float``.

    Raises:
        UsageError: when ``value`` is not a plain ASCII number (``"abc"``,
            ``"1_000"``, non-ASCII digits, surrounding spaces) or overflows.
    """
    if not isinstance(value, str) or not _PRICE_RE.fullmatch(value):
        raise UsageError(f"Invalid price format, expecting float, got '{value}'")
    price = float(value)
    if not math.isfinite(price):
        raise UsageError(f"Price must be a finite number, got '{value}'")
    return price


def parse_investment_id(value: str) -> int:
    """Return ``value`` parsed as a Sharesight custom investment id."""
    if not (isinstance(value, str) and value.isascii() and value.isdigit()):
        raise UsageError(f"Invalid investment id, expecting an integer, got '{value}'")
    investment_id = int(value)
    if investment_id > _MAX_INVESTMENT_ID:
        raise UsageError(f"Invalid investment id, out of range: '{value}'")
    return investment_id


def format_price(price: float) -> str:
    """Render ``price`` for display; whole values print without ``.0``."""
    if price.is_integer():
        return str(int(price))
    return repr(price)
