# ABOUTME: HTTP client abstraction for Open Library API calls.
# ABOUTME: Single JSON GET with fixed headers, retry with backoff, injectable transport for testing.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

from olmeta import __version__

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


class MetadataFetchError(Exception):
    """Raised when an HTTP request to Open Library fails or returns unusable data."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for JSON GET requests against metadata APIs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class OlmetaHttpClient:
    """HTTP client with retry for Open Library API calls.

    Wraps httpx.Client with retry logic for transient failures (429, 5xx).
    Any 2xx response is parsed as JSON.
    """

    def __init__(
        self,
        *,
        timeout: float = 30.0,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {
                "User-Agent": f"olmeta/{__version__}",
                "Accept": "application/json",
            },
            "timeout": timeout,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._max_retries = max_retries
        self._retry_delay = retry_delay

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request with retry.

        Args:
            url: The URL to request.
            params: Optional query parameters.

        Returns:
            Parsed JSON response body.

        Raises:
            MetadataFetchError: On transport errors, non-retryable HTTP errors,
                exhausted retries, or a body that is not a JSON object.
        """
        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except httpx.HTTPError as exc:
                logger.error("Open Library request failed: %s: %s", url, exc)
                raise MetadataFetchError(f"Request failed: {url}: {exc}") from exc

            if response.is_success:
                return self._parse_json(url, response)

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                logger.error("Open Library HTTP error %d: %s", response.status_code, url)
                raise MetadataFetchError(f"HTTP {response.status_code} from {url}")

            if attempt < attempts - 1:
                delay = self._retry_delay * (2**attempt)
                logger.warning(
                    "HTTP %d from %s, retrying in %.1fs (attempt %d/%d)",
                    response.status_code,
                    url,
                    delay,
                    attempt + 1,
                    self._max_retries,
                )
                time.sleep(delay)

        raise MetadataFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _parse_json(url: str, response: httpx.Response) -> dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Open Library JSON parse error: %s: %s", url, exc)
            raise MetadataFetchError(f"Invalid JSON from {url}: {exc}") from exc
        if not isinstance(data, dict):
            raise MetadataFetchError(f"Expected a JSON object from {url}")
        return data
