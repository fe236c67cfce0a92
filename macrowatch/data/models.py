"""
Canonical data models for normalized time series and derived signals.

This module defines immutable data structures that represent clean, validated
series data after normalization from raw source formats, and the signals
derived from them. Every model renders to JSON-safe plain values.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Optional, Union

from ..utils.dates import year_span_label


@dataclass(frozen=True)
class Point:
    """Canonical (date, value) observation."""
    date: str           # "YYYY-MM-DD"
    value: float

    def to_dict(self) -> dict[str, Any]:
        return {"date": self.date, "value": self.value}


@dataclass(frozen=True)
class MergedRecord:
    """Per-date outer-join of two series."""
    date: str
    primary: Optional[float]          # e.g. 10y yield
    secondary: Optional[float]        # e.g. 2y yield
    differential: Optional[float]     # primary - secondary, both sides present only

    @property
    def is_complete(self) -> bool:
        """True when both sides carry a value."""
        return self.primary is not None and self.secondary is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "primary": self.primary,
            "secondary": self.secondary,
            "differential": self.differential,
        }


@dataclass(frozen=True)
class Run:
    """Maximal contiguous block of flagged points."""
    start_date: str
    end_date: str
    length: int

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start_date, "end": self.end_date, "length": self.length}


@dataclass(frozen=True)
class InversionStreak:
    """Trailing run of negative differentials."""
    count: int = 0
    start_date: Optional[str] = None

    @property
    def is_inverted(self) -> bool:
        return self.count > 0

    def to_dict(self) -> dict[str, Any]:
        return {"count": self.count, "start_date": self.start_date}


@dataclass(frozen=True)
class RecessionWindow:
    """Quarter-granularity recession range with inclusive bounds."""
    start: str
    end: str
    label: str = ""

    def __post_init__(self):
        """Default the label to the year span of the bounds."""
        if not self.label:
            object.__setattr__(self, "label", year_span_label(self.start, self.end))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RecessionWindow":
        """Build a window from a plain {start, end[, label]} mapping."""
        return cls(start=data["start"], end=data["end"], label=data.get("label") or "")

    def to_dict(self) -> dict[str, Any]:
        return {"start": self.start, "end": self.end, "label": self.label}


WindowLike = Union[RecessionWindow, Mapping[str, Any]]


@dataclass(frozen=True)
class AlignedBand:
    """Recession window projected onto a display sequence's index space."""
    start_index: int
    end_index: int
    start_date: str
    end_date: str
    label: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "start_index": self.start_index,
            "end_index": self.end_index,
            "start_date": self.start_date,
            "end_date": self.end_date,
            "label": self.label,
        }


@dataclass(frozen=True)
class GrowthDiagnostic:
    """Per-point growth detail returned for verbose recession queries."""
    date: str
    value: float
    growth: Optional[float]
    negative: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date,
            "value": self.value,
            "growth": self.growth,
            "negative": self.negative,
        }


@dataclass(frozen=True)
class SkippedElement:
    """Payload element excluded during normalization."""
    index: int
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "reason": self.reason}


@dataclass(frozen=True)
class NormalizationResult:
    """Result of normalizing one raw payload."""

    points: tuple[Point, ...] = ()
    skipped: tuple[SkippedElement, ...] = ()
    source: Optional[str] = None

    @property
    def dates(self) -> list[str]:
        return [p.date for p in self.points]

    @property
    def is_empty(self) -> bool:
        return not self.points

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "points": [p.to_dict() for p in self.points],
            "skipped": [s.to_dict() for s in self.skipped],
        }


@dataclass(frozen=True)
class QueryParams:
    """Parameters accepted by the query boundary."""
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    verbose: bool = False
