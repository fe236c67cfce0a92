"""
Calendar date utilities for canonical "YYYY-MM-DD" strings.

This module provides centralized date handling so that every component
agrees on the canonical date format, quarter boundaries and the
lexicographic ordering the rest of the engine relies on.
"""

import calendar
import re
from datetime import date
from typing import Optional

_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}")
_MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


def is_canonical_date(value: object) -> bool:
    """
    Check that a value is a valid canonical "YYYY-MM-DD" date string.

    Args:
        value: Candidate date value

    Returns:
        True if the value is a 10 character ISO date naming a real calendar day
    """
    if not isinstance(value, str) or len(value) != 10 or not _DAY_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def to_canonical_date(raw: object) -> Optional[str]:
    """
    Convert a source date string to canonical form.

    Month-granularity strings ("YYYY-MM") are promoted to the first day of the
    month. Longer ISO-8601-like strings are truncated to their first 10
    characters.

    Args:
        raw: Raw date value from a source payload

    Returns:
        Canonical date string, or None if the value is not a usable date
    """
    if not isinstance(raw, str):
        return None

    text = raw.strip()
    if _MONTH_RE.match(text):
        text = f"{text}-01"

    candidate = text[:10]
    return candidate if is_canonical_date(candidate) else None


def quarter_bounds(iso_date: str) -> tuple[str, str]:
    """
    Get the first and last day of the calendar quarter enclosing a date.

    Args:
        iso_date: Canonical date string

    Returns:
        Tuple of (quarter_start, quarter_end) canonical date strings
    """
    day = date.fromisoformat(iso_date[:10])
    start_month = ((day.month - 1) // 3) * 3 + 1
    end_month = start_month + 2
    last_day = calendar.monthrange(day.year, end_month)[1]

    start = date(day.year, start_month, 1)
    end = date(day.year, end_month, last_day)
    return start.isoformat(), end.isoformat()


def partition_key(iso_date: str) -> str:
    """Coarse storage partition for a canonical date (its year)."""
    return iso_date[:4]


def year_span_label(start: str, end: str) -> str:
    """Human readable label for a date range, e.g. "2007–2009"."""
    return f"{start[:4]}–{end[:4]}"
