"""Run detection over period-over-period growth (economic contractions)"""

from collections.abc import Sequence
from typing import Optional

from ..data.models import GrowthDiagnostic, Point, RecessionWindow, Run


def quarter_growth(values: Sequence[float]) -> list[Optional[float]]:
    """
    Calculate period-over-period growth.

    growth[i] = (values[i] - values[i-1]) / values[i-1]

    Args:
        values: Chronologically ordered values

    Returns:
        Growth per index; None at index 0 and wherever the prior value is 0
    """
    growth: list[Optional[float]] = [None] * len(values)

    for i in range(1, len(values)):
        prev = values[i - 1]
        if prev == 0:
            continue
        growth[i] = (values[i] - prev) / prev

    return growth


def negative_flags(values: Sequence[float]) -> list[bool]:
    """Flag indices whose growth is defined and negative."""
    return [g is not None and g < 0 for g in quarter_growth(values)]


def detect_runs(dates: Sequence[str],
                flags: Sequence[bool],
                min_length: int = 2) -> list[Run]:
    """
    Find maximal contiguous runs of flagged indices.

    Index 0 is never part of a run because it has no prior point. Runs shorter
    than min_length are dropped entirely.

    Args:
        dates: Date of each index
        flags: Predicate result of each index
        min_length: Minimum run length to report

    Returns:
        Runs in chronological order
    """
    runs = []
    n = len(flags)
    i = 1

    while i < n:
        if not flags[i]:
            i += 1
            continue

        start = i
        j = i + 1
        while j < n and flags[j]:
            j += 1

        length = j - start
        if length >= min_length:
            runs.append(Run(start_date=dates[start], end_date=dates[j - 1], length=length))
        i = j

    return runs


def detect_recession_windows(points: Sequence[Point],
                             min_length: int = 2,
                             min_points: int = 3) -> list[RecessionWindow]:
    """
    Derive recession windows from a GDP-like series.

    A window is a run of at least min_length consecutive quarters of negative
    growth, reported from the first to the last negative quarter.

    Args:
        points: Canonical series, ascending by date
        min_length: Minimum consecutive negative quarters
        min_points: Fewer points than this yields no windows

    Returns:
        RecessionWindow per qualifying run
    """
    if len(points) < min_points:
        return []

    flags = negative_flags([p.value for p in points])
    runs = detect_runs([p.date for p in points], flags, min_length)

    return [RecessionWindow(start=run.start_date, end=run.end_date) for run in runs]


def growth_diagnostics(points: Sequence[Point]) -> list[GrowthDiagnostic]:
    """
    Per-point growth and negative flag for verbose queries.

    Args:
        points: Canonical series, ascending by date

    Returns:
        GrowthDiagnostic per point, same order as input
    """
    growth = quarter_growth([p.value for p in points])
    return [
        GrowthDiagnostic(
            date=p.date,
            value=p.value,
            growth=g,
            negative=g is not None and g < 0,
        )
        for p, g in zip(points, growth)
    ]
