# ABOUTME: Google Books catalog package for Hondana.
# ABOUTME: Exports the catalog client, its HTTP layer, and query helpers.

from hondana.googlebooks.client import GoogleBooksClient
from hondana.googlebooks.http import CatalogFetchError, HondanaHttpClient, HttpClient
from hondana.googlebooks.parser import SearchPage, parse_volume
from hondana.googlebooks.query import generate_search_suggestions, sanitize_search_query

__all__ = [
    "CatalogFetchError",
    "GoogleBooksClient",
    "HondanaHttpClient",
    "HttpClient",
    "SearchPage",
    "generate_search_suggestions",
    "parse_volume",
    "sanitize_search_query",
]
