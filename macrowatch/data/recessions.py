"""
Authoritative recession windows and the loader that chooses between sources.

The built-in list holds NBER US recession ranges (inclusive, approximate
start/end months). Derived windows from the GDP series and an optional remote
list take precedence when they produce anything.
"""

from collections.abc import Callable, Iterable, Sequence
from typing import Any, Optional

import structlog

from ..errors import DataQualityError, SystemFailureError
from ..utils.dates import is_canonical_date
from .models import RecessionWindow

logger = structlog.get_logger(__name__)

NBER_RECESSIONS: tuple[RecessionWindow, ...] = (
    RecessionWindow(start="1973-11-01", end="1975-03-31"),
    RecessionWindow(start="1980-01-01", end="1980-07-31"),
    RecessionWindow(start="1981-07-01", end="1982-11-30"),
    RecessionWindow(start="1990-07-01", end="1991-03-31"),
    RecessionWindow(start="2001-03-01", end="2001-11-30"),
    RecessionWindow(start="2007-12-01", end="2009-06-30"),
    RecessionWindow(start="2020-02-01", end="2020-04-30"),
)

WindowSource = Callable[[], Iterable[Any]]


def windows_from_payload(payload: Any) -> list[RecessionWindow]:
    """
    Convert a decoded remote list of {start, end[, label]} objects to windows.

    Raises:
        DataQualityError: If the payload is not a list of window objects
            or a window bound is not a canonical date
    """
    if not isinstance(payload, (list, tuple)):
        raise DataQualityError("Recession list must be an array")

    windows = []
    for entry in payload:
        if isinstance(entry, RecessionWindow):
            window = entry
        else:
            try:
                window = RecessionWindow.from_mapping(entry)
            except (KeyError, TypeError, AttributeError) as e:
                raise DataQualityError(f"Invalid recession window {entry!r}: {e}")

        if not (is_canonical_date(window.start) and is_canonical_date(window.end)):
            raise DataQualityError(
                f"Invalid recession window dates: {window.start!r}..{window.end!r}",
                context={"start": window.start, "end": window.end},
            )
        windows.append(window)
    return windows


def load_recession_windows(derived: Optional[WindowSource] = None,
                           remote: Optional[WindowSource] = None,
                           fallback: Sequence[RecessionWindow] = NBER_RECESSIONS) -> list[RecessionWindow]:
    """
    Load recession windows from the first source that yields any.

    Order: windows derived from the GDP series, then the remote list, then the
    built-in list. A source that fails or returns nothing is skipped.

    Args:
        derived: Callable returning windows derived by the run detector
        remote: Callable returning a decoded remote window list
        fallback: Windows used when no other source produced any

    Returns:
        Recession windows
    """
    for name, source in (("derived", derived), ("remote", remote)):
        if source is None:
            continue
        try:
            windows = windows_from_payload(source())
        except (DataQualityError, SystemFailureError) as e:
            logger.warning("Recession source failed, falling back", source=name, error=str(e))
            continue

        if windows:
            logger.debug("Recession windows loaded", source=name, count=len(windows))
            return windows

    logger.debug("Using built-in recession windows", count=len(fallback))
    return list(fallback)
