# ABOUTME: Unit tests for the shared CLI helpers that open the catalog and the collection.
# ABOUTME: Checks that the catalog client needs an API key and releases its connections.

import click
import pytest

from hondana.cli.options import open_catalog, open_repository


class TestOpenCatalog:
    """Tests for open_catalog."""

    def test_missing_key_raises(self) -> None:
        with pytest.raises(click.ClickException, match="API key"):
            with open_catalog():
                pass

    def test_http_client_closed_on_exit(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HONDANA_GOOGLE_BOOKS_API_KEY", "test-key")

        with open_catalog() as catalog:
            assert catalog.name == "googlebooks"
            http = catalog._http
            assert not http.closed

        assert http.closed

    def test_http_client_closed_on_error(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HONDANA_GOOGLE_BOOKS_API_KEY", "test-key")

        with pytest.raises(RuntimeError):
            with open_catalog() as catalog:
                http = catalog._http
                raise RuntimeError("boom")

        assert http.closed


class TestOpenRepository:
    """Tests for open_repository."""

    def test_user_defaults_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HONDANA_USER_ID", "carol")

        with open_repository(None, None) as repo:
            assert repo.user_id == "carol"
