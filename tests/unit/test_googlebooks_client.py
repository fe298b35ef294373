# ABOUTME: Unit tests for the Google Books catalog client.
# ABOUTME: Uses a fake HttpClient to check request shapes, caching, and 404 handling.

from typing import Any

import pytest

from hondana.googlebooks.client import GoogleBooksClient
from hondana.googlebooks.http import CatalogFetchError
from tests.fixtures.googlebooks_responses import SEARCH_RESPONSE, VOLUME_NEKO


class FakeHttpClient:
    """Fake HttpClient that returns canned responses keyed by URL."""

    def __init__(self, responses: dict[str, Any] | None = None) -> None:
        self._responses = responses or {}
        self.calls: list[tuple[str, dict[str, str] | None]] = []

    def get(self, url: str, params: dict[str, str] | None = None) -> dict[str, Any]:
        self.calls.append((url, params))
        response = self._responses.get(url, SEARCH_RESPONSE)
        if isinstance(response, Exception):
            raise response
        return response


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now


_VOLUMES = "https://www.googleapis.com/books/v1/volumes"


class TestSearch:
    """Tests for GoogleBooksClient.search and its helpers."""

    def test_name(self) -> None:
        assert GoogleBooksClient(FakeHttpClient(), "key").name == "googlebooks"

    def test_search_params(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "secret", lang="en")

        page = client.search("clean code", max_results=10, start_index=20, order_by="newest")

        url, params = http.calls[0]
        assert url == _VOLUMES
        assert params == {
            "q": "clean code",
            "maxResults": "10",
            "startIndex": "20",
            "orderBy": "newest",
            "langRestrict": "en",
            "key": "secret",
        }
        assert page.total_items == 2

    def test_search_by_isbn_strips_hyphens(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "key")

        books = client.search_by_isbn("978-4-10-101001-4")

        assert http.calls[0][1]["q"] == "isbn:9784101010014"  # type: ignore[index]
        assert books[0].title == "吾輩は猫である"

    def test_search_by_title_author(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "key")

        client.search_by_title_author("こころ", "夏目漱石")
        client.search_by_title_author("こころ")

        assert http.calls[0][1]["q"] == "intitle:こころ+inauthor:夏目漱石"  # type: ignore[index]
        assert http.calls[1][1]["q"] == "intitle:こころ"  # type: ignore[index]

    def test_errors_propagate(self) -> None:
        http = FakeHttpClient({_VOLUMES: CatalogFetchError("HTTP 403", status_code=403)})
        client = GoogleBooksClient(http, "key")

        with pytest.raises(CatalogFetchError):
            client.search("anything")


class TestGetVolume:
    """Tests for GoogleBooksClient.get_volume."""

    def test_returns_candidate(self) -> None:
        http = FakeHttpClient({f"{_VOLUMES}/neko123": VOLUME_NEKO})
        book = GoogleBooksClient(http, "key").get_volume("neko123")

        assert book is not None
        assert book.external_catalog_id == "neko123"

    def test_not_found_is_none(self) -> None:
        http = FakeHttpClient({f"{_VOLUMES}/gone": CatalogFetchError("HTTP 404", status_code=404)})
        assert GoogleBooksClient(http, "key").get_volume("gone") is None

    def test_other_errors_raise(self) -> None:
        http = FakeHttpClient({f"{_VOLUMES}/x": CatalogFetchError("HTTP 500", status_code=500)})
        with pytest.raises(CatalogFetchError):
            GoogleBooksClient(http, "key").get_volume("x")


class TestCache:
    """Tests for the in-memory response cache."""

    def test_repeat_search_served_from_cache(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "key", clock=FakeClock())

        client.search("kokoro")
        client.search("kokoro")

        assert len(http.calls) == 1

    def test_different_pages_not_shared(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "key", clock=FakeClock())

        client.search("kokoro")
        client.search("kokoro", start_index=20)

        assert len(http.calls) == 2

    def test_entries_expire(self) -> None:
        http = FakeHttpClient()
        clock = FakeClock()
        client = GoogleBooksClient(http, "key", cache_ttl=300.0, clock=clock)

        client.search("kokoro")
        clock.now += 299.0
        client.search("kokoro")
        assert len(http.calls) == 1

        clock.now += 2.0
        client.search("kokoro")
        assert len(http.calls) == 2

    def test_clear_cache(self) -> None:
        http = FakeHttpClient()
        client = GoogleBooksClient(http, "key", clock=FakeClock())

        client.search("kokoro")
        client.clear_cache()
        client.search("kokoro")

        assert len(http.calls) == 2

    def test_failures_not_cached(self) -> None:
        http = FakeHttpClient({_VOLUMES: CatalogFetchError("HTTP 503", status_code=503)})
        client = GoogleBooksClient(http, "key", clock=FakeClock())

        for _ in range(2):
            with pytest.raises(CatalogFetchError):
                client.search("kokoro")
        assert len(http.calls) == 2
