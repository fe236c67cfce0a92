"""
Date-range filtering and query parameter parsing for the query boundary.

Canonical dates compare lexicographically, so range checks are plain string
comparisons against the inclusive bounds.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Optional, Protocol, TypeVar

from ..errors import TemporalDataError
from ..utils.dates import is_canonical_date
from .models import QueryParams


class Dated(Protocol):
    date: str


T = TypeVar("T", bound=Dated)


def filter_date_range(items: Iterable[T],
                      date_from: Optional[str] = None,
                      date_to: Optional[str] = None) -> list[T]:
    """
    Keep items whose date lies within the inclusive [date_from, date_to] range.

    Args:
        items: Points, merged records or diagnostics carrying a canonical date
        date_from: Inclusive lower bound, None for unbounded
        date_to: Inclusive upper bound, None for unbounded

    Returns:
        Matching items in their original order
    """
    return [
        item for item in items
        if (date_from is None or item.date >= date_from)
        and (date_to is None or item.date <= date_to)
    ]


def _read_date(query: Mapping[str, Any], *keys: str) -> Optional[str]:
    for key in keys:
        value = query.get(key)
        if value is None or value == "":
            continue
        if not is_canonical_date(value):
            raise TemporalDataError(f"Invalid '{key}' date: {value!r}", date_value=str(value))
        return value
    return None


def _read_flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def parse_query_params(query: Optional[Mapping[str, Any]] = None) -> QueryParams:
    """
    Parse query boundary parameters.

    Accepts "from"/"to" (sunspot endpoints) or "start"/"end" (yield endpoint)
    date bounds and a "verbose" flag that is set only by the literal "true"
    (case-insensitive) or a boolean True.

    Raises:
        TemporalDataError: If a supplied date bound is not a canonical date
    """
    query = query or {}
    return QueryParams(
        date_from=_read_date(query, "from", "start"),
        date_to=_read_date(query, "to", "end"),
        verbose=_read_flag(query.get("verbose")),
    )
