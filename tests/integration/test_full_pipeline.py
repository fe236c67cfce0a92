"""Integration tests for the full retrieval to signal pipeline."""

from typing import Any, Dict, List, Optional

import pytest

from macrowatch.data.models import GrowthDiagnostic, MergedRecord, RecessionWindow
from macrowatch.data.recessions import NBER_RECESSIONS
from macrowatch.errors import (
    ConfigurationError,
    MalformedDataError,
    SourceFetchError,
    TemporalDataError,
)
from macrowatch.persistence.point_store import PointStore
from macrowatch.service import MacroSignalService


def _observations(dates: List[str], values: List[str]) -> List[Dict[str, str]]:
    return [{"date": d, "value": v} for d, v in zip(dates, values)]


class FakeFred:
    """In-memory FRED source keyed by series id."""

    def __init__(self, payloads: Dict[str, Any], error: Optional[Exception] = None):
        self.payloads = payloads
        self.error = error
        self.calls: List[tuple] = []

    def observations(self, series_id: str, start: Optional[str] = None,
                     end: Optional[str] = None) -> Any:
        self.calls.append((series_id, start, end))
        if self.error is not None:
            raise self.error
        return self.payloads[series_id]


class FakeSwpc:
    """In-memory SWPC source."""

    def __init__(self, observed: Any):
        self.observed = observed

    def observed_indices(self) -> Any:
        return self.observed


@pytest.fixture
def fred() -> FakeFred:
    days = ["2024-01-02", "2024-01-03", "2024-01-04", "2024-01-05"]
    quarters = ["2019-01-01", "2019-04-01", "2019-07-01", "2019-10-01", "2020-01-01", "2020-04-01"]
    return FakeFred({
        "DGS10": _observations(days, ["3.95", "3.91", "3.99", "."]),
        "DGS2": _observations(days, ["4.33", "4.33", "4.38", "4.40"]),
        "GDPC1": _observations(quarters, ["100.0", "101.0", "100.5", "99.8", "100.2", "101.0"]),
    })


@pytest.fixture
def store(tmp_path) -> PointStore:
    return PointStore(str(tmp_path / "points.db"))


@pytest.mark.integration
class TestFullPipeline:
    """Integration tests for the complete signal pipeline."""

    def test_yield_spread(self, fred: FakeFred) -> None:
        """Test both maturities are fetched, merged and differenced."""
        service = MacroSignalService(fred=fred)

        records = service.yield_spread()

        assert records == [
            MergedRecord("2024-01-02", 3.95, 4.33, -0.38),
            MergedRecord("2024-01-03", 3.91, 4.33, -0.42),
            MergedRecord("2024-01-04", 3.99, 4.38, -0.39),
            MergedRecord("2024-01-05", None, 4.4, None),
        ]
        assert sorted(call[0] for call in fred.calls) == ["DGS10", "DGS2"]

    def test_yield_spread_date_range(self, fred: FakeFred) -> None:
        """Test from/to bounds are forwarded and applied."""
        service = MacroSignalService(fred=fred)

        records = service.yield_spread({"from": "2024-01-03", "to": "2024-01-04"})

        assert [r.date for r in records] == ["2024-01-03", "2024-01-04"]
        assert ("DGS10", "2024-01-03", "2024-01-04") in fred.calls

    def test_invalid_query_date(self, fred: FakeFred) -> None:
        """Test malformed query dates fail before retrieval."""
        service = MacroSignalService(fred=fred)

        with pytest.raises(TemporalDataError):
            service.yield_spread({"from": "01/03/2024"})

        assert fred.calls == []

    def test_retrieval_failure_aborts(self) -> None:
        """Test retrieval errors propagate without partial output."""
        service = MacroSignalService(fred=FakeFred({}, error=SourceFetchError("HTTP 500", status_code=500)))

        with pytest.raises(SourceFetchError):
            service.yield_spread()

    def test_inversion_streak(self, fred: FakeFred) -> None:
        """Test the trailing streak stops at a missing differential."""
        service = MacroSignalService(fred=fred)
        records = service.yield_spread()

        assert service.inversion(records).count == 0

        streak = service.inversion(records[:3])
        assert streak.count == 3
        assert streak.start_date == "2024-01-02"

    def test_recessions(self, fred: FakeFred) -> None:
        """Test recession windows derived from GDP."""
        service = MacroSignalService(fred=fred)

        windows = service.recessions()

        assert windows == [RecessionWindow("2019-07-01", "2019-10-01", "2019–2019")]

    def test_recessions_verbose(self, fred: FakeFred) -> None:
        """Test verbose queries return growth diagnostics instead of windows."""
        service = MacroSignalService(fred=fred)

        diagnostics = service.recessions({"verbose": "true", "from": "2019-04-01", "to": "2019-10-01"})

        assert all(isinstance(d, GrowthDiagnostic) for d in diagnostics)
        assert [d.negative for d in diagnostics] == [False, True, True]
        assert diagnostics[0].growth == pytest.approx(0.01)

    def test_fred_error_envelope_is_shape_error(self, fred: FakeFred) -> None:
        """Test a FRED response without observations fails instead of yielding an empty series."""
        fred.payloads["DGS10"] = {"error_code": 400, "error_message": "Bad Request. Variable api_key is not set."}
        service = MacroSignalService(fred=fred)

        with pytest.raises(MalformedDataError, match="Invalid shape"):
            service.yield_spread()

    def test_fred_envelope_unwrapped(self, fred: FakeFred) -> None:
        """Test a FRED envelope carrying observations is normalized."""
        fred.payloads["GDPC1"] = {"count": 6, "observations": fred.payloads["GDPC1"]}
        service = MacroSignalService(fred=fred)

        assert service.recessions() == [RecessionWindow("2019-07-01", "2019-10-01")]

    def test_recessions_too_few_points(self, fred: FakeFred) -> None:
        """Test a short GDP series yields nothing, verbose or not."""
        fred.payloads["GDPC1"] = fred.payloads["GDPC1"][:2]
        service = MacroSignalService(fred=fred)

        assert service.recessions() == []
        assert service.recessions({"verbose": "true"}) == []

    def test_recession_windows_after_error_envelope(self, fred: FakeFred) -> None:
        """Test a GDP error envelope falls back to the built-in list."""
        fred.payloads["GDPC1"] = {"error_code": 500}
        service = MacroSignalService(fred=fred)

        assert service.recession_windows() == list(NBER_RECESSIONS)

    def test_recession_windows_fall_back(self) -> None:
        """Test the built-in list is used when GDP retrieval fails."""
        service = MacroSignalService(fred=FakeFred({}, error=ConfigurationError("FRED_API_KEY not configured")))

        assert service.recession_windows() == list(NBER_RECESSIONS)

    def test_bands_on_spread(self, fred: FakeFred) -> None:
        """Test recession bands align to the merged spread sequence."""
        service = MacroSignalService(fred=fred)
        records = service.yield_spread()

        bands = service.bands(records, [{"start": "2024-01-03", "end": "2024-01-03"}])

        assert len(bands) == 1
        assert (bands[0].start_index, bands[0].end_index) == (0, 3)

    def test_bands_default_windows(self, fred: FakeFred) -> None:
        """Test bands use derived windows when none are supplied."""
        service = MacroSignalService(fred=fred)
        display = service.normalizer.normalize(fred.payloads["GDPC1"]).points

        bands = service.bands(display)

        assert [(b.start_date, b.end_date) for b in bands] == [("2019-07-01", "2019-10-01")]

    def test_sunspot_refresh_and_smoothing(self, store: PointStore, solar_cycle_payload) -> None:
        """Test sunspot ingestion followed by the smoothed display series."""
        service = MacroSignalService(store=store, swpc=FakeSwpc(solar_cycle_payload))

        result = service.refresh_sunspots()
        series = service.sunspots("sunspots-monthly")

        assert len(result.points) == 3
        assert [row["date"] for row in series] == ["2024-03-01", "2024-04-01", "2024-05-01"]
        assert series[0]["mean"] == 104.9
        assert series[1]["mean"] == 120.7
        assert series[-1]["value"] == 172.1

    def test_ingest_is_idempotent(self, store: PointStore, fred_observations) -> None:
        """Test ingesting the same payload twice leaves one row per date."""
        service = MacroSignalService(store=store)

        service.ingest("DGS10", fred_observations)
        service.ingest("DGS10", fred_observations)

        assert store.get_stats()["points_by_series"] == {"DGS10": 3}

    def test_sunspots_require_store(self) -> None:
        """Test the smoothed series needs a point store."""
        with pytest.raises(ConfigurationError):
            MacroSignalService().sunspots()
