"""Single-attempt JSON retrieval over HTTP."""

import socket
from typing import Any, Optional
from urllib.error import HTTPError, URLError
from urllib.parse import urlencode, urlparse
from urllib.request import Request, urlopen

import orjson
import structlog

from ..errors import SourceFetchError


class JsonSourceClient:
    """HTTP GET client returning decoded JSON payloads."""

    def __init__(self, timeout_seconds: int = 30, user_agent: str = "macrowatch/0.1"):
        self.timeout_seconds = timeout_seconds
        self.user_agent = user_agent
        self.logger = structlog.get_logger(__name__)

    def build_url(self, url: str, params: Optional[dict[str, Any]] = None) -> str:
        """Append non-empty query parameters to a URL."""
        query = {k: v for k, v in (params or {}).items() if v not in (None, "")}
        if not query:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{urlencode(query)}"

    def fetch_json(self, url: str, params: Optional[dict[str, Any]] = None) -> Any:
        """
        Fetch and decode a JSON document with a single attempt.

        Args:
            url: Absolute endpoint URL
            params: Query parameters; None or empty values are dropped

        Returns:
            Decoded JSON payload

        Raises:
            SourceFetchError: On invalid URL, HTTP error, network error or invalid JSON
        """
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise SourceFetchError(f"Invalid URL: {url}", url=url)

        full_url = self.build_url(url, params)
        # Never log query strings, they may carry API keys
        log = self.logger.bind(host=parsed.netloc, path=parsed.path)

        req = Request(
            full_url,
            headers={
                'Accept': 'application/json',
                'User-Agent': self.user_agent,
            },
            method="GET"
        )

        try:
            with urlopen(req, timeout=self.timeout_seconds) as response:
                status = response.getcode()
                body = response.read()

        except HTTPError as e:
            log.warning("Source HTTP error", status_code=e.code, reason=str(e.reason))
            raise SourceFetchError(f"HTTP {e.code}: {e.reason}", url=url, status_code=e.code)

        except (OSError, URLError, socket.timeout) as e:
            log.warning("Source network error", error=str(e))
            raise SourceFetchError(f"Network error: {e}", url=url)

        if not 200 <= status < 300:
            log.warning("Source returned non-success status", status_code=status)
            raise SourceFetchError(f"HTTP {status}", url=url, status_code=status)

        try:
            payload = orjson.loads(body)
        except orjson.JSONDecodeError as e:
            log.warning("Source returned invalid JSON", error=str(e))
            raise SourceFetchError(f"Invalid JSON from source: {e}", url=url, status_code=status)

        log.debug("Source payload fetched", status_code=status, size=len(body))
        return payload
