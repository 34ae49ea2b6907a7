"""Lenient converters for values read from the document store.

Stored records are written by spreadsheet uploads and older dashboard
versions, so numbers can arrive as strings with thousands separators and
text fields can hold blanks. Each helper returns None (or the documented
default) instead of raising.
"""

import math
from datetime import date, datetime
from typing import Any


def to_text(value: Any) -> str | None:
    """Non-blank string, stripped; anything else becomes None."""
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def to_number(value: Any) -> int | float | None:
    """Finite non-negative number; integral values are returned as int."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        cleaned = value.replace(",", "").strip()
        if not cleaned:
            return None
        try:
            value = float(cleaned)
        except ValueError:
            return None

    if isinstance(value, int):
        return value if value >= 0 else None

    if isinstance(value, float):
        if not math.isfinite(value) or value < 0:
            return None
        return int(value) if value.is_integer() else value

    return None


def to_count(value: Any) -> int | None:
    """Non-negative integer count (fractions truncated)."""
    number = to_number(value)
    if number is None:
        return None
    return int(number)


def to_flag(value: Any) -> bool:
    """True only for a real boolean True."""
    return value is True


def to_labels(value: Any) -> list[str]:
    """Ordered string tags; non-string entries are dropped."""
    if not isinstance(value, (list, tuple)):
        return []
    return [label for label in value if isinstance(label, str) and label.strip()]


def to_date(value: Any) -> date | None:
    """ISO date (or datetime) string to a date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None

    text = value.strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None
