"""
Projection of quarter-granularity recession windows onto display sequences.

Windows are widened to whole calendar quarters, clamped to the span the
display sequence covers and snapped to the nearest enclosed points, so a
renderer can shade bands by index without re-deriving dates.
"""

from bisect import bisect_left, bisect_right
from collections.abc import Iterable, Sequence

from ..data.filters import Dated
from ..data.models import AlignedBand, RecessionWindow, WindowLike
from ..utils.dates import quarter_bounds


def _as_window(window: WindowLike) -> RecessionWindow:
    if isinstance(window, RecessionWindow):
        return window
    return RecessionWindow.from_mapping(window)


def expand_to_quarter(window: WindowLike) -> tuple[str, str]:
    """
    Widen a window to the enclosing calendar quarters of its bounds.

    Args:
        window: RecessionWindow or {start, end} mapping

    Returns:
        Tuple of (first day of the start's quarter, last day of the end's quarter)
    """
    window = _as_window(window)
    start, _ = quarter_bounds(window.start)
    _, end = quarter_bounds(window.end)
    return start, end


def align_windows(windows: Iterable[WindowLike],
                  display: Sequence[Dated]) -> list[AlignedBand]:
    """
    Map recession windows onto the index space of a display sequence.

    Args:
        windows: RecessionWindows or {start, end[, label]} mappings
        display: Points or merged records in ascending date order

    Returns:
        AlignedBand per window overlapping the display span, in window order
    """
    if not display:
        return []

    dates = [item.date for item in display]
    first_date = dates[0]
    last_date = dates[-1]
    last_index = len(dates) - 1

    bands = []
    for raw_window in windows:
        window = _as_window(raw_window)
        start, end = expand_to_quarter(window)

        if start > last_date or end < first_date:
            continue

        # First index on or after the widened start
        start_index = bisect_left(dates, start)
        if start_index > last_index:
            start_index = 0

        # Last index on or before the widened end
        end_index = bisect_right(dates, end) - 1
        if end_index < 0:
            end_index = last_index

        if start_index > end_index:
            continue

        bands.append(AlignedBand(
            start_index=start_index,
            end_index=end_index,
            start_date=dates[start_index],
            end_date=dates[end_index],
            label=window.label,
        ))

    return bands


def in_recession(date: str, windows: Iterable[WindowLike]) -> bool:
    """Check whether a date falls inside any window's supplied (unwidened) bounds."""
    for raw_window in windows:
        window = _as_window(raw_window)
        if window.start <= date <= window.end:
            return True
    return False
