# ABOUTME: Unit tests for search query sanitizing and suggestions.
# ABOUTME: Checks punctuation stripping and title/author/category suggestions.

from hondana.googlebooks.query import generate_search_suggestions, sanitize_search_query


class TestSanitizeSearchQuery:
    """Tests for sanitize_search_query."""

    def test_strips_ascii_punctuation(self) -> None:
        assert sanitize_search_query("Clean Code!!") == "Clean Code"

    def test_keeps_japanese_scripts(self) -> None:
        assert sanitize_search_query("吾輩は、猫である。") == "吾輩は猫である"
        assert sanitize_search_query("ソフトウェア") == "ソフトウェア"

    def test_collapses_whitespace(self) -> None:
        assert sanitize_search_query("  clean   code  ") == "clean code"

    def test_only_punctuation(self) -> None:
        assert sanitize_search_query("?!") == ""


class TestGenerateSearchSuggestions:
    """Tests for generate_search_suggestions."""

    def test_short_query_has_none(self) -> None:
        assert generate_search_suggestions("a") == []
        assert generate_search_suggestions("  ") == []

    def test_single_word_suggests_itself(self) -> None:
        assert generate_search_suggestions("kokoro") == ["kokoro"]

    def test_two_words_tried_both_ways(self) -> None:
        assert generate_search_suggestions("こころ 夏目漱石") == [
            "こころ 夏目漱石",
            "inauthor:夏目漱石 intitle:こころ",
            "inauthor:こころ intitle:夏目漱石",
        ]

    def test_category_word_adds_subject(self) -> None:
        suggestions = generate_search_suggestions("おすすめの歴史本")
        assert suggestions == ["おすすめの歴史本", "subject:歴史"]

    def test_capped_at_five(self) -> None:
        assert len(generate_search_suggestions("小説 漫画")) <= 5
