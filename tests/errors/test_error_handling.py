"""Tests for the error classification hierarchy."""

import pytest

from macrowatch.errors import (
    ConfigurationError,
    DataQualityError,
    MalformedDataError,
    PersistenceError,
    SourceFetchError,
    SystemFailureError,
    TemporalDataError,
)


class TestDataQualityErrors:
    """Test recoverable data quality errors."""

    @pytest.mark.parametrize("error_cls", [MalformedDataError, TemporalDataError])
    def test_subclasses_are_recoverable(self, error_cls):
        """Test every data quality error is recoverable."""
        error = error_cls("bad batch", context={"source": "DGS10"})

        assert isinstance(error, DataQualityError)
        assert error.recoverable is True
        assert error.context == {"source": "DGS10"}
        assert str(error) == "bad batch"

    def test_malformed_data_attributes(self):
        """Test MalformedDataError carries its raw data and expected format."""
        error = MalformedDataError("Invalid shape", raw_data="{}", expected_format="array")

        assert error.raw_data == "{}"
        assert error.expected_format == "array"

    def test_temporal_data_attributes(self):
        """Test TemporalDataError carries the offending date."""
        error = TemporalDataError("Invalid 'from' date", date_value="2024-13-01")

        assert error.date_value == "2024-13-01"

    def test_default_context(self):
        """Test context defaults to an empty dict."""
        assert MalformedDataError("nothing").context == {}


class TestSystemFailureErrors:
    """Test unrecoverable system failures."""

    @pytest.mark.parametrize("error_cls", [SourceFetchError, ConfigurationError, PersistenceError])
    def test_subclasses_are_not_recoverable(self, error_cls):
        """Test every system failure is unrecoverable."""
        error = error_cls("failure")

        assert isinstance(error, SystemFailureError)
        assert not isinstance(error, DataQualityError)
        assert error.recoverable is False

    def test_source_fetch_attributes(self):
        """Test SourceFetchError carries URL and status."""
        error = SourceFetchError("HTTP 503", url="https://example.org/x", status_code=503)

        assert error.url == "https://example.org/x"
        assert error.status_code == 503

    def test_configuration_attributes(self):
        """Test ConfigurationError names its setting."""
        assert ConfigurationError("missing", setting="fred_api_key").setting == "fred_api_key"

    def test_persistence_attributes(self):
        """Test PersistenceError names operation and target."""
        error = PersistenceError("locked", operation="query", target="points.db")

        assert (error.operation, error.target) == ("query", "points.db")
