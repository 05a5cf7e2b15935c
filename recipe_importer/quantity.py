"""Quantity token parsing: ranges, mixed numbers, fractions and decimals."""

import math
import re
from typing import Optional

_LEADING_NUMBER_RE = re.compile(r'^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
_MIXED_RE = re.compile(r'^(\d+)\s+(\d+)/(\d+)$')
_FRACTION_RE = re.compile(r'^(\d+)/(\d+)$')


def round_quantity(value: float) -> float:
    """Round half up to 2 decimal places."""
    return math.floor(value * 100 + 0.5) / 100


def leading_number(text: str) -> Optional[float]:
    """Return the number at the start of *text* ("25.5 g" -> 25.5), else None."""
    match = _LEADING_NUMBER_RE.match(text)
    if not match:
        return None
    return float(match.group(0))


def _parse_range(text: str) -> Optional[float]:
    if '-' not in text:
        return None
    parts = text.split('-')
    low, high = leading_number(parts[0]), leading_number(parts[1])
    if low is None or high is None:
        return None
    return (low + high) / 2


def _parse_mixed(text: str) -> Optional[float]:
    match = _MIXED_RE.match(text)
    if not match:
        return None
    whole, num, den = (int(g) for g in match.groups())
    return whole + num / den


def _parse_fraction(text: str) -> Optional[float]:
    match = _FRACTION_RE.match(text)
    if not match:
        return None
    num, den = (int(g) for g in match.groups())
    return num / den


# Tried in order; the first form that recognises the token wins.
_QUANTITY_FORMS = (_parse_range, _parse_mixed, _parse_fraction, leading_number)


def parse_quantity(token: str) -> Optional[float]:
    """Parse a quantity token into a number rounded to 2 decimal places.

    Handles "2-3" (mean of the range), "1 1/2", "1/2" and plain decimals.
    Returns None when the token holds no usable number, divides by zero or
    is too large to represent ("999...9" overflows to infinity), which
    callers treat as "no quantity" rather than an error.

    Unicode fraction glyphs must already be normalised to ASCII
    (see `recipe_importer.text.normalize_unicode_fractions`).
    """
    text = token.strip()
    for form in _QUANTITY_FORMS:
        try:
            value = form(text)
        except (ZeroDivisionError, OverflowError):
            return None
        if value is None:
            continue
        if not math.isfinite(value):
            return None
        return round_quantity(value)
    return None
