"""Trailing rolling mean used to smooth noisy display series (daily sunspots)"""

from collections import deque
from collections.abc import Sequence
from typing import Optional

from ..data.models import Point


def rolling_mean(points: Sequence[Point], window: int = 30,
                 round_digits: Optional[int] = 2) -> list[float]:
    """
    Calculate the trailing mean at every point.

    The first window-1 entries average over the points available so far
    instead of being left undefined.

    Args:
        points: Canonical series in ascending date order
        window: Lookback length in points
        round_digits: Decimal places of the result, None to keep raw

    Returns:
        Mean per point, same length as input
    """
    if window <= 0:
        raise ValueError(f"window must be positive, got {window}")

    recent: deque = deque(maxlen=window)
    means = []

    for point in points:
        recent.append(point.value)
        mean = sum(recent) / len(recent)
        means.append(round(mean, round_digits) if round_digits is not None else mean)

    return means
