"""
Point normalization pipeline for converting raw source payloads to canonical series.

This module provides the PointNormalizer class that orchestrates element
decoding, last-wins deduplication by date and chronological ordering. The
transform is pure: it holds configuration only, never previously seen points.
"""

from typing import Any, Optional, Union

import structlog

from ..config.defaults import NormalizerParams
from ..errors import MalformedDataError
from .models import NormalizationResult, Point, SkippedElement
from .parsers import ParseError, decode_element, parse_json_payload, unwrap_payload

logger = structlog.get_logger(__name__)


class PointNormalizer:
    """
    Normalizes one raw payload into a canonical, date-unique, ascending series.

    Individual elements that cannot be decoded are skipped and, when enabled,
    reported as SkippedElement diagnostics. Only a payload that is not an
    element array fails the batch.
    """

    def __init__(self, params: Optional[NormalizerParams] = None):
        """
        Initialize the normalizer.

        Args:
            params: Normalizer parameters (missing-value markers, diagnostics)
        """
        self.params = params or NormalizerParams()

    def normalize(self, payload: Any, source: Optional[str] = None) -> NormalizationResult:
        """
        Normalize a decoded payload.

        Args:
            payload: Decoded payload, an element array or a FRED-style envelope
            source: Optional identifier of the series, used for logging

        Returns:
            NormalizationResult with the canonical points and skip diagnostics

        Raises:
            MalformedDataError: If the payload is not an element array
        """
        try:
            elements = unwrap_payload(payload)
        except ParseError as e:
            raise MalformedDataError(
                f"Invalid shape: {e}",
                raw_data=repr(payload)[:100],
                expected_format="array",
                context={"source": source},
            )

        by_date: dict[str, float] = {}
        skipped: list[SkippedElement] = []

        for index, element in enumerate(elements):
            try:
                date, value = decode_element(element, self.params.missing_markers)
            except ParseError as e:
                if self.params.record_skipped:
                    skipped.append(SkippedElement(index=index, reason=str(e)))
                continue

            # Last occurrence wins for repeated dates
            by_date[date] = value

        points = tuple(Point(date=d, value=by_date[d]) for d in sorted(by_date))

        if skipped:
            logger.debug(
                "Skipped payload elements",
                source=source,
                skipped_count=len(skipped),
                first_reason=skipped[0].reason,
            )

        logger.debug(
            "Normalized payload",
            source=source,
            element_count=len(elements),
            point_count=len(points),
        )

        return NormalizationResult(points=points, skipped=tuple(skipped), source=source)

    def normalize_json(self, raw_data: Union[str, bytes],
                       source: Optional[str] = None) -> NormalizationResult:
        """
        Decode raw JSON text and normalize it.

        Raises:
            MalformedDataError: If the text is not JSON or has no element array
        """
        if not raw_data:
            raise MalformedDataError("Empty payload", expected_format="array",
                                     context={"source": source})
        try:
            elements = parse_json_payload(raw_data)
        except ParseError as e:
            raise MalformedDataError(
                f"Invalid shape: {e}",
                raw_data=str(raw_data[:100]),
                expected_format="array",
                context={"source": source},
            )
        return self.normalize(elements, source=source)


def normalize_points(payload: Any, source: Optional[str] = None,
                     params: Optional[NormalizerParams] = None) -> list[Point]:
    """
    Normalize a decoded payload and return only the canonical points.

    Args:
        payload: Decoded element array
        source: Optional identifier of the series
        params: Optional normalizer parameters

    Returns:
        Canonical points in ascending date order
    """
    return list(PointNormalizer(params).normalize(payload, source=source).points)

