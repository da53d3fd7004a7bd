"""
Cell value normalizers.

Raw cells come from CSV text, spreadsheet cells or model output, so they may be
strings with currency symbols and thousands separators, plain numbers, or
missing markers. None of these helpers raise: anything unusable becomes None.
"""

from __future__ import annotations

import math
import re
from typing import Any, Optional

_NUMBER_NOISE = re.compile(r"[₹$,\s]")


def to_number(value: Any) -> Optional[float]:
    """Convert a raw cell to float, tolerating ₹/$ symbols, commas and spaces."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
        return number if math.isfinite(number) else None

    cleaned = _NUMBER_NOISE.sub("", str(value))
    if not cleaned:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def to_non_negative_number(value: Any) -> Optional[float]:
    """Same as to_number, but negative amounts are treated as unusable."""
    number = to_number(value)
    if number is None or number < 0:
        return None
    return number


def to_int(value: Any) -> Optional[int]:
    """Convert a raw cell to int, truncating toward zero."""
    number = to_number(value)
    if number is None:
        return None
    return int(number)


def to_text(value: Any) -> Optional[str]:
    """Trimmed string, or None for missing/blank cells."""
    if value is None:
        return None
    if isinstance(value, float) and math.isnan(value):
        return None
    text = str(value).strip()
    return text or None
