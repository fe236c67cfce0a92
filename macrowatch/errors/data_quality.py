"""
Data quality error classifications for time-series ingestion.

These exceptions describe problems with a whole payload or query. Problems
with a single element of a payload are never raised; the normalizer records
them as skipped elements instead.
"""

from typing import Any, Dict, Optional


class DataQualityError(Exception):
    """Base class for data quality issues that fail a single batch."""

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.context = context or {}
        self.recoverable = True


class TemporalDataError(DataQualityError):
    """Date strings that cannot be interpreted as canonical calendar dates."""

    def __init__(self, message: str, date_value: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.date_value = date_value


class MalformedDataError(DataQualityError):
    """Payload exists but does not have a recognizable shape."""

    def __init__(self, message: str, raw_data: Optional[str] = None,
                 expected_format: Optional[str] = None, **kwargs):
        super().__init__(message, **kwargs)
        self.raw_data = raw_data
        self.expected_format = expected_format
