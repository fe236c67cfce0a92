"""NOAA SWPC solar cycle indices source."""

from typing import Any, Optional

from ..config.defaults import SourceParams
from .client import JsonSourceClient


class SwpcSource:
    """Fetches observed and predicted sunspot number arrays ({time-tag, ssn} elements)."""

    def __init__(self, params: Optional[SourceParams] = None,
                 client: Optional[JsonSourceClient] = None):
        self.params = params or SourceParams()
        self.client = client or JsonSourceClient(
            timeout_seconds=self.params.timeout_seconds,
            user_agent=self.params.user_agent,
        )

    def observed_indices(self) -> Any:
        """Monthly observed sunspot numbers."""
        return self.client.fetch_json(f"{self.params.swpc_base_url}/observed-solar-cycle-indices.json")

    def predicted_indices(self) -> Any:
        """Monthly predicted sunspot numbers."""
        return self.client.fetch_json(f"{self.params.swpc_base_url}/predicted-solar-cycle.json")
