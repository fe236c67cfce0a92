"""Default configuration parameters for the normalization and signal engine."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class NormalizerParams:
    """Point normalizer parameters."""
    missing_markers: tuple[str, ...] = (".", "")      # Sentinel strings meaning "no value"
    record_skipped: bool = True                      # Keep SkippedElement diagnostics


@dataclass(frozen=True)
class MergeParams:
    """Series merger parameters."""
    round_digits: int = 2                            # Rounding for values and differential


@dataclass(frozen=True)
class SignalParams:
    """Signal derivation parameters."""
    min_run_length: int = 2                          # Min consecutive negative quarters
    min_points: int = 3                              # Below this no runs are reported


@dataclass(frozen=True)
class RollingParams:
    """Display smoothing parameters."""
    window: int = 30                                 # Rolling mean lookback in points
    round_digits: int = 2


@dataclass(frozen=True)
class SourceParams:
    """External source endpoints and retrieval settings."""
    fred_base_url: str = "https://api.stlouisfed.org/fred"
    fred_api_key: str = ""                           # Falls back to FRED_API_KEY env var
    swpc_base_url: str = "https://services.swpc.noaa.gov/json/solar-cycle"
    recessions_url: str = ""                         # Optional remote recession list
    timeout_seconds: int = 30
    long_series_id: str = "DGS10"
    short_series_id: str = "DGS2"
    gdp_series_id: str = "GDPC1"
    user_agent: str = "macrowatch/0.1"


@dataclass(frozen=True)
class DefaultConfig:
    """Complete default configuration."""
    normalizer: NormalizerParams = field(default_factory=NormalizerParams)
    merge: MergeParams = field(default_factory=MergeParams)
    signals: SignalParams = field(default_factory=SignalParams)
    rolling: RollingParams = field(default_factory=RollingParams)
    sources: SourceParams = field(default_factory=SourceParams)


def get_default_config() -> DefaultConfig:
    """Get the default configuration instance."""
    return DefaultConfig(
        normalizer=NormalizerParams(),
        merge=MergeParams(),
        signals=SignalParams(),
        rolling=RollingParams(),
        sources=SourceParams(),
    )
