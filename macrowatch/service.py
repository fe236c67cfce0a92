"""
Query boundary coordinator.

Orchestrates the signal pipeline for the HTTP layer:
Source Retrieval → Normalization → Merge → Signal Derivation → Band Alignment

Retrieval failures abort the batch before any core component runs, so a
caller never receives partially derived output.
"""

from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Optional, Union

import structlog

from .config.loader import ConfigLoader
from .data.filters import Dated, filter_date_range, parse_query_params
from .data.merger import merge_series
from .data.models import (
    AlignedBand,
    GrowthDiagnostic,
    InversionStreak,
    MergedRecord,
    NormalizationResult,
    QueryParams,
    RecessionWindow,
    WindowLike,
)
from .data.normalizer import PointNormalizer
from .data.recessions import load_recession_windows
from .errors import ConfigurationError
from .logging.config import get_signal_logger, log_signal_derivation
from .metrics.rolling import rolling_mean
from .persistence.point_store import PointStore
from .signals.alignment import align_windows
from .signals.inversion import inversion_streak
from .signals.runs import detect_recession_windows, growth_diagnostics
from .sources.client import JsonSourceClient
from .sources.fred import FredSource
from .sources.swpc import SwpcSource

logger = structlog.get_logger(__name__)
signal_logger = get_signal_logger(__name__)

QueryLike = Union[QueryParams, Mapping[str, Any], None]


def _as_query(query: QueryLike) -> QueryParams:
    if isinstance(query, QueryParams):
        return query
    return parse_query_params(query)


class MacroSignalService:
    """
    Main coordinator for series ingestion and signal derivation.

    Components are stateless apart from the optional point store; every call
    recomputes its result from freshly retrieved or stored series.
    """

    def __init__(self,
                 config_dir: Optional[Union[str, Path]] = None,
                 store: Optional[PointStore] = None,
                 fred: Optional[FredSource] = None,
                 swpc: Optional[SwpcSource] = None,
                 client: Optional[JsonSourceClient] = None) -> None:
        """Initialize the service."""
        self.config_loader = ConfigLoader.create(Path(config_dir) if config_dir else None)
        self.config = self.config_loader.load()

        sources = self.config.sources
        self.client = client or JsonSourceClient(
            timeout_seconds=sources.timeout_seconds,
            user_agent=sources.user_agent,
        )
        self.fred = fred or FredSource(sources, self.client)
        self.swpc = swpc or SwpcSource(sources, self.client)
        self.store = store
        self.normalizer = PointNormalizer(self.config.normalizer)

        logger.info("Macro signal service initialized", has_store=store is not None)

    def ingest(self, series: str, payload: Any) -> NormalizationResult:
        """
        Normalize a raw payload and upsert the canonical points into the store.

        Raises:
            MalformedDataError: If the payload has no element array
        """
        result = self.normalizer.normalize(payload, source=series)

        if self.store is not None and result.points:
            self.store.upsert_points(series, result.points)

        logger.info(
            "Series ingested",
            series=series,
            point_count=len(result.points),
            skipped_count=len(result.skipped),
        )
        return result

    def refresh_sunspots(self, series: str = "sunspots-monthly") -> NormalizationResult:
        """Fetch observed monthly sunspot numbers and ingest them."""
        return self.ingest(series, self.swpc.observed_indices())

    def yield_spread(self, query: QueryLike = None) -> list[MergedRecord]:
        """
        Long-minus-short treasury yield spread per date.

        Both maturities are retrieved concurrently; merging waits for both.

        Raises:
            SourceFetchError: If either retrieval fails
            ConfigurationError: If no FRED API key is configured
        """
        params = _as_query(query)
        sources = self.config.sources

        with ThreadPoolExecutor(max_workers=2) as pool:
            long_future = pool.submit(
                self.fred.observations, sources.long_series_id, params.date_from, params.date_to)
            short_future = pool.submit(
                self.fred.observations, sources.short_series_id, params.date_from, params.date_to)
            long_payload = long_future.result()
            short_payload = short_future.result()

        long_points = self.normalizer.normalize(long_payload, source=sources.long_series_id).points
        short_points = self.normalizer.normalize(short_payload, source=sources.short_series_id).points

        records = merge_series(long_points, short_points, round_digits=self.config.merge.round_digits)
        return filter_date_range(records, params.date_from, params.date_to)

    def recessions(self, query: QueryLike = None) -> Union[list[RecessionWindow], list[GrowthDiagnostic]]:
        """
        Recession windows derived from the GDP series.

        With the verbose flag set the run detector is bypassed and the per-point
        growth diagnostics are returned instead. A series shorter than the
        configured minimum yields nothing in either mode.
        """
        params = _as_query(query)
        series_id = self.config.sources.gdp_series_id
        signal_params = self.config_loader.load(series_id).signals

        points = self.normalizer.normalize(self.fred.observations(series_id), source=series_id).points

        if len(points) < signal_params.min_points:
            return []

        if params.verbose:
            return filter_date_range(growth_diagnostics(points), params.date_from, params.date_to)

        windows = detect_recession_windows(
            points,
            min_length=signal_params.min_run_length,
            min_points=signal_params.min_points,
        )
        log_signal_derivation(signal_logger, "recession_windows", series_id, len(points), len(windows))
        return windows

    def recession_windows(self) -> list[RecessionWindow]:
        """Recession windows from the GDP series, a remote list or the built-in list."""
        remote_url = self.config.sources.recessions_url
        remote = (lambda: self.client.fetch_json(remote_url)) if remote_url else None
        return load_recession_windows(derived=self.recessions, remote=remote)

    def inversion(self, records: Sequence[MergedRecord]) -> InversionStreak:
        """Trailing inversion streak of merged spread records."""
        streak = inversion_streak(records)
        log_signal_derivation(
            signal_logger, "inversion_streak", self.config.sources.long_series_id,
            len(records), streak.count, context={"start_date": streak.start_date},
        )
        return streak

    def bands(self, display: Sequence[Dated],
              windows: Optional[Sequence[WindowLike]] = None) -> list[AlignedBand]:
        """Recession bands aligned to a display sequence."""
        if windows is None:
            windows = self.recession_windows()
        return align_windows(windows, display)

    def sunspots(self, series: str = "sunspots-daily", query: QueryLike = None) -> list[dict[str, Any]]:
        """
        Stored sunspot numbers with their rolling mean for display.

        Raises:
            ConfigurationError: If the service has no point store
        """
        if self.store is None:
            raise ConfigurationError("Point store not configured", setting="store")

        params = _as_query(query)
        rolling = self.config_loader.load(series).rolling

        points = self.store.get_points(series, params.date_from, params.date_to)
        means = rolling_mean(points, window=rolling.window, round_digits=rolling.round_digits)

        return [
            {"date": p.date, "value": p.value, "mean": mean}
            for p, mean in zip(points, means)
        ]
