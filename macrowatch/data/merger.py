"""
Outer-join of two canonical series on the date key.

Missing sides stay None; no interpolation or forward fill is applied, so a
differential exists only for dates present in both series.
"""

from collections.abc import Iterable
from typing import Optional

from .models import MergedRecord, Point


def _round(value: Optional[float], digits: Optional[int]) -> Optional[float]:
    if value is None or digits is None:
        return value
    return round(value, digits)


def merge_series(primary: Iterable[Point],
                 secondary: Iterable[Point],
                 round_digits: Optional[int] = 2) -> list[MergedRecord]:
    """
    Merge two canonical series into per-date records with a differential.

    Args:
        primary: Canonical series for the primary side (e.g. 10y yield)
        secondary: Canonical series for the secondary side (e.g. 2y yield)
        round_digits: Decimal places for values and differential, None to keep raw

    Returns:
        MergedRecord per date in the union of both series, ascending by date
    """
    primary_by_date = {p.date: p.value for p in primary}
    secondary_by_date = {p.date: p.value for p in secondary}

    records = []
    for date in sorted(primary_by_date.keys() | secondary_by_date.keys()):
        first = primary_by_date.get(date)
        second = secondary_by_date.get(date)

        differential = None
        if first is not None and second is not None:
            differential = _round(first - second, round_digits)

        records.append(MergedRecord(
            date=date,
            primary=_round(first, round_digits),
            secondary=_round(second, round_digits),
            differential=differential,
        ))

    return records
