# ABOUTME: HTTP client abstraction for cover lookups and image downloads.
# ABOUTME: Provides rate limiting, retry with backoff, and injectable transport for testing.

import logging
import threading
import time
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}

USER_AGENT = "bookcover/0.1.0"


class CoverFetchError(Exception):
    """Raised when an HTTP request for cover data fails."""


@runtime_checkable
class HttpClient(Protocol):
    """Protocol for the HTTP operations the cover pipeline needs."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...

    def get_text(self, url: str, params: dict[str, str] | None = None) -> str: ...

    def download(self, url: str, dest: Path) -> Path: ...


class CoverHttpClient:
    """HTTP client with rate limiting and retry for cover lookups.

    Wraps httpx.Client with configurable request intervals and retry logic
    for transient failures (429, 5xx). One instance is shared by all resolver
    threads, so the rate limiter is guarded by a lock.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        client_kwargs: dict[str, Any] = {
            "headers": {"User-Agent": USER_AGENT},
            "timeout": 30.0,
            "follow_redirects": True,
        }
        if transport is not None:
            client_kwargs["transport"] = transport
        self._client = httpx.Client(**client_kwargs)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_request_time: float = 0.0
        self._lock = threading.Lock()

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """Send a GET request and return the parsed JSON body.

        Raises:
            CoverFetchError: On HTTP errors, exhausted retries, or invalid JSON.
        """
        response = self._send(url, params)
        try:
            return response.json()
        except ValueError as exc:
            raise CoverFetchError(f"Invalid JSON from {url}: {exc}") from exc

    def get_text(self, url: str, params: dict[str, str] | None = None) -> str:
        """Send a GET request and return the decoded body text."""
        return self._send(url, params).text

    def download(self, url: str, dest: Path) -> Path:
        """Fetch url and store the body at dest.

        The body lands in a sibling ``.part`` file first and is renamed over
        dest once complete, so an interrupted download never looks cached.

        Raises:
            CoverFetchError: On HTTP errors or an empty body.
        """
        response = self._send(url)
        if not response.content:
            raise CoverFetchError(f"Empty body from {url}")

        dest.parent.mkdir(parents=True, exist_ok=True)
        partial = dest.with_name(dest.name + ".part")
        try:
            partial.write_bytes(response.content)
            partial.replace(dest)
        except OSError as exc:
            partial.unlink(missing_ok=True)
            raise CoverFetchError(f"Cannot write {dest}: {exc}") from exc
        return dest

    def close(self) -> None:
        self._client.close()

    def _send(self, url: str, params: dict[str, str] | None = None) -> httpx.Response:
        """Send a GET request with rate limiting and retry.

        Raises:
            CoverFetchError: On transport errors, invalid URLs, non-retryable HTTP
                errors or exhausted retries.
        """
        self._rate_limit()

        attempts = 1 + self._max_retries
        last_status = 0
        for attempt in range(attempts):
            try:
                response = self._client.get(url, params=params)
                last_status = response.status_code
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise CoverFetchError(f"Request failed: {url}: {exc}") from exc

            if response.status_code == 200:
                return response

            if response.status_code not in _RETRYABLE_STATUS_CODES:
                raise CoverFetchError(f"HTTP {response.status_code} from {url}")

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

        raise CoverFetchError(f"HTTP {last_status} from {url} after {attempts} attempts")

    def _rate_limit(self) -> None:
        """Sleep if needed to maintain minimum interval between requests."""
        if self._min_interval <= 0:
            return
        with self._lock:
            now = time.monotonic()
            elapsed = now - self._last_request_time
            if elapsed < self._min_interval and self._last_request_time > 0:
                time.sleep(self._min_interval - elapsed)
            self._last_request_time = time.monotonic()
