# ABOUTME: Google Books catalog client used to look up books before adding them.
# ABOUTME: Searches volumes by free text, ISBN, or title/author with a short-lived cache.

import logging
import time
from collections.abc import Callable
from typing import Any

from hondana.books.types import CandidateBook
from hondana.googlebooks.http import CatalogFetchError, HttpClient
from hondana.googlebooks.parser import SearchPage, parse_search_response, parse_volume

logger = logging.getLogger(__name__)

_GB_BASE = "https://www.googleapis.com/books/v1"
_DEFAULT_CACHE_TTL = 300.0


class GoogleBooksClient:
    """Catalog lookups against the Google Books volumes API.

    Responses are cached in memory for cache_ttl seconds, keyed by the
    request, so paging back and forth in one session does not re-query.
    """

    def __init__(
        self,
        http_client: HttpClient,
        api_key: str,
        *,
        lang: str = "ja",
        cache_ttl: float = _DEFAULT_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._lang = lang
        self._cache_ttl = cache_ttl
        self._clock = clock
        self._cache: dict[str, tuple[float, dict[str, Any]]] = {}

    @property
    def name(self) -> str:
        return "googlebooks"

    def search(
        self,
        query: str,
        *,
        max_results: int = 20,
        start_index: int = 0,
        order_by: str = "relevance",
    ) -> SearchPage:
        """Search volumes by free text (supports intitle:/inauthor:/isbn: terms).

        Raises:
            CatalogFetchError: If the API request fails.
        """
        params = {
            "q": query,
            "maxResults": str(max_results),
            "startIndex": str(start_index),
            "orderBy": order_by,
            "langRestrict": self._lang,
            "key": self._api_key,
        }
        cache_key = f"search:{query}:{max_results}:{start_index}:{order_by}:{self._lang}"
        data = self._cached_get(cache_key, f"{_GB_BASE}/volumes", params)
        return parse_search_response(data)

    def get_volume(self, volume_id: str) -> CandidateBook | None:
        """Fetch a single volume by id. Returns None if it does not exist.

        Raises:
            CatalogFetchError: On failures other than 404.
        """
        try:
            data = self._cached_get(
                f"volume:{volume_id}",
                f"{_GB_BASE}/volumes/{volume_id}",
                {"key": self._api_key},
            )
        except CatalogFetchError as exc:
            if exc.status_code == 404:
                return None
            raise
        return parse_volume(data)

    def search_by_isbn(self, isbn: str) -> list[CandidateBook]:
        clean = "".join(ch for ch in isbn if ch.isdigit() or ch in "Xx")
        return self.search(f"isbn:{clean}").books

    def search_by_title_author(self, title: str, author: str | None = None) -> list[CandidateBook]:
        query = f"intitle:{title}"
        if author:
            query += f"+inauthor:{author}"
        return self.search(query).books

    def clear_cache(self) -> None:
        self._cache.clear()

    def _cached_get(self, key: str, url: str, params: dict[str, str]) -> dict[str, Any]:
        now = self._clock()
        cached = self._cache.get(key)
        if cached is not None and now - cached[0] < self._cache_ttl:
            logger.debug("Cache hit for %s", key)
            return cached[1]

        data = self._http.get(url, params=params)
        self._cache[key] = (now, data)
        return data
