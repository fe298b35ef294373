# ABOUTME: Unit tests for the field normalization helpers used by the matcher.
# ABOUTME: Covers ISBN cleanup, width folding, title tokens, and unknown authors.

import pytest

from hondana.matching.normalize import (
    is_unknown_author,
    jaccard,
    normalize_author,
    normalize_isbn,
    normalize_text,
    title_tokens,
)


class TestNormalizeIsbn:
    """Tests for normalize_isbn."""

    def test_strips_hyphens(self) -> None:
        assert normalize_isbn("978-4-10-101001-4") == "9784101010014"

    def test_strips_spaces_and_prefix(self) -> None:
        assert normalize_isbn("ISBN 978 0 13 235088 4") == "9780132350884"

    def test_keeps_check_character_x(self) -> None:
        """The ISBN-10 check character survives and is upper-cased."""
        assert normalize_isbn("0-8044-2957-x") == "080442957X"

    def test_stray_x_dropped(self) -> None:
        """An X that is not an ISBN-10 check character is removed."""
        assert normalize_isbn("N/A-X") == ""
        assert normalize_isbn("X") == ""
        assert normalize_isbn("978X4101010014") == "9784101010014"

    def test_x_needs_nine_digits_before_it(self) -> None:
        assert normalize_isbn("12345678X") == "12345678"

    def test_folds_full_width_digits(self) -> None:
        assert normalize_isbn("９７８４１０１０１００１４") == "9784101010014"

    def test_none_and_empty(self) -> None:
        assert normalize_isbn(None) == ""
        assert normalize_isbn("") == ""


class TestNormalizeText:
    """Tests for normalize_text."""

    def test_lowercases(self) -> None:
        assert normalize_text("Clean Code") == "clean code"

    def test_folds_full_width_latin(self) -> None:
        assert normalize_text("Ｃｌｅａｎ　Ｃｏｄｅ") == "clean code"

    def test_punctuation_becomes_space(self) -> None:
        assert normalize_text("Clean Code: A Handbook!") == "clean code a handbook"

    def test_collapses_whitespace(self) -> None:
        assert normalize_text("  The   Hobbit \t") == "the hobbit"

    def test_japanese_text_kept(self) -> None:
        assert normalize_text("吾輩は猫である") == "吾輩は猫である"

    def test_none_is_empty(self) -> None:
        assert normalize_text(None) == ""


class TestTitleTokens:
    """Tests for title_tokens."""

    def test_drops_stop_words(self) -> None:
        assert title_tokens("The Name of the Rose") == frozenset({"name", "rose"})

    def test_keeps_stop_words_when_nothing_else(self) -> None:
        assert title_tokens("The") == frozenset({"the"})

    def test_empty_title(self) -> None:
        assert title_tokens("") == frozenset()


class TestNormalizeAuthor:
    """Tests for normalize_author."""

    def test_reorders_last_first(self) -> None:
        assert normalize_author("Eco, Umberto") == "umberto eco"

    def test_plain_name(self) -> None:
        assert normalize_author("Robert C. Martin") == "robert c martin"


class TestUnknownAuthors:
    """Tests for is_unknown_author."""

    @pytest.mark.parametrize("name", ["不明な著者", "Unknown", "unknown author", "  ", None])
    def test_placeholders_are_unknown(self, name: str | None) -> None:
        assert is_unknown_author(name)

    def test_real_name_is_known(self) -> None:
        assert not is_unknown_author("夏目漱石")


class TestJaccard:
    """Tests for jaccard."""

    def test_partial_overlap(self) -> None:
        assert jaccard(frozenset({"a", "b"}), frozenset({"b", "c"})) == pytest.approx(1 / 3)

    def test_identical_sets(self) -> None:
        assert jaccard(frozenset({"a"}), frozenset({"a"})) == 1.0

    def test_both_empty(self) -> None:
        assert jaccard(frozenset(), frozenset()) == 0.0
