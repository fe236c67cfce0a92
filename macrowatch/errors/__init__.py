"""
Error classification system for the normalization and signal engine.

This module provides a structured exception hierarchy separating recoverable
data quality problems from system-level failures at the retrieval and
persistence boundaries.
"""

from .data_quality import (
    DataQualityError,
    MalformedDataError,
    TemporalDataError,
)
from .system_failures import (
    ConfigurationError,
    PersistenceError,
    SourceFetchError,
    SystemFailureError,
)

__all__ = [
    # Data Quality Errors
    "DataQualityError",
    "MalformedDataError",
    "TemporalDataError",
    # System Failures
    "SystemFailureError",
    "ConfigurationError",
    "PersistenceError",
    "SourceFetchError",
]
