"""FRED series observations source."""

import os
from typing import Any, Optional

from ..config.defaults import SourceParams
from ..errors import ConfigurationError
from .client import JsonSourceClient


class FredSource:
    """Fetches raw FRED observation arrays ({date, value} elements)."""

    def __init__(self, params: Optional[SourceParams] = None,
                 client: Optional[JsonSourceClient] = None):
        self.params = params or SourceParams()
        self.client = client or JsonSourceClient(
            timeout_seconds=self.params.timeout_seconds,
            user_agent=self.params.user_agent,
        )

    @property
    def api_key(self) -> str:
        """API key from configuration, else the FRED_API_KEY environment variable."""
        key = self.params.fred_api_key or os.environ.get("FRED_API_KEY", "")
        if not key:
            raise ConfigurationError("FRED_API_KEY not configured", setting="fred_api_key")
        return key

    def observations(self, series_id: str, start: Optional[str] = None,
                     end: Optional[str] = None) -> Any:
        """
        Fetch observations for one series.

        Args:
            series_id: FRED series identifier (DGS10, DGS2, GDPC1, ...)
            start: Optional observation_start date
            end: Optional observation_end date

        Returns:
            Decoded FRED response, normally an envelope carrying an
            "observations" array; unwrapping is left to the normalizer

        Raises:
            ConfigurationError: If no API key is available
            SourceFetchError: If retrieval fails
        """
        return self.client.fetch_json(
            f"{self.params.fred_base_url}/series/observations",
            {
                "series_id": series_id,
                "file_type": "json",
                "api_key": self.api_key,
                "observation_start": start,
                "observation_end": end,
            },
        )
