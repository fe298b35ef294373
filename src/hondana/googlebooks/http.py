# ABOUTME: Throttled, retrying JSON transport for the Google Books API.
# ABOUTME: Failed requests surface as CatalogFetchError carrying the HTTP status.

import logging
import time
from typing import Any, Protocol, runtime_checkable

import httpx

logger = logging.getLogger(__name__)

USER_AGENT = "hondana/0.1.0"

# Google Books answers quota exhaustion with 429 and has brief 5xx outages.
_TRANSIENT_STATUSES = frozenset({429, 500, 502, 503, 504})


class CatalogFetchError(Exception):
    """A catalog request failed; status_code is None when no response arrived."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@runtime_checkable
class HttpClient(Protocol):
    """Anything that can GET a URL and hand back decoded JSON."""

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]: ...


class HondanaHttpClient:
    """Catalog transport over httpx.Client.

    Requests are spaced at least min_request_interval seconds apart. A
    transient status is retried up to max_retries times, doubling the wait
    from retry_delay each time. Usable as a context manager so the pooled
    connections are released when a command finishes.
    """

    def __init__(
        self,
        *,
        min_request_interval: float = 0.1,
        max_retries: int = 3,
        retry_delay: float = 1.0,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        options: dict[str, Any] = {"headers": {"User-Agent": USER_AGENT}, "timeout": timeout}
        if transport is not None:
            options["transport"] = transport
        self._client = httpx.Client(**options)
        self._min_interval = min_request_interval
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._last_sent: float | None = None

    def __enter__(self) -> "HondanaHttpClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    @property
    def closed(self) -> bool:
        return self._client.is_closed

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        """GET url and decode the JSON body.

        Raises:
            CatalogFetchError: On a non-transient error status, a transport
                failure, or when every retry came back transient.
        """
        self._throttle()

        total = self._max_retries + 1
        status = 0
        for attempt in range(1, total + 1):
            try:
                response = self._client.get(url, params=params)
            except httpx.HTTPError as exc:
                raise CatalogFetchError(f"Request failed: {url}: {exc}") from exc

            status = response.status_code
            if status == 200:
                return response.json()
            if status not in _TRANSIENT_STATUSES:
                raise CatalogFetchError(f"HTTP {status} from {url}", status_code=status)
            if attempt < total:
                wait = self._retry_delay * 2 ** (attempt - 1)
                logger.warning(
                    "Catalog returned %d for %s; retry %d/%d in %.1fs",
                    status,
                    url,
                    attempt,
                    self._max_retries,
                    wait,
                )
                time.sleep(wait)

        raise CatalogFetchError(
            f"HTTP {status} from {url} after {total} attempts", status_code=status
        )

    def close(self) -> None:
        self._client.close()

    def _throttle(self) -> None:
        if self._min_interval > 0 and self._last_sent is not None:
            remaining = self._min_interval - (time.monotonic() - self._last_sent)
            if remaining > 0:
                time.sleep(remaining)
        self._last_sent = time.monotonic()
