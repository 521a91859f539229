"""Tests for the text normalization helpers."""

import pytest

from sitesearch.config import MAX_QUERY_CHARS
from sitesearch.normalize import clamp_text_length, normalize, normalize_whitespace, strip_html, tokenize


class TestNormalize:
    def test_lowercases_and_strips_punctuation(self):
        assert normalize("Luxury Vinyl Tile (LVT)") == "luxury vinyl tile lvt"

    def test_collapses_and_trims_whitespace(self):
        assert normalize("  Hello,\tWorld!!\n ") == "hello world"

    def test_non_ascii_letters_become_separators(self):
        assert normalize("Café-floor") == "caf floor"

    def test_empty_and_none(self):
        assert normalize("") == ""
        assert normalize(None) == ""

    def test_only_punctuation(self):
        assert normalize("-- !! --") == ""

    @pytest.mark.parametrize(
        "text",
        ["Luxury Vinyl Tile (LVT)", "  a--b  ", "ÀÉÎ õü", "x", "", "12 mm / 0.5 in", "tab\there"],
    )
    def test_idempotent(self, text):
        once = normalize(text)
        assert normalize(once) == once


class TestTokenize:
    def test_splits_normalized_text(self):
        assert tokenize("a-b  c") == ["a", "b", "c"]

    def test_keeps_duplicates(self):
        assert tokenize("oak OAK") == ["oak", "oak"]

    def test_empty(self):
        assert tokenize("!!!") == []
        assert tokenize(None) == []


class TestPageText:
    def test_normalize_whitespace(self):
        assert normalize_whitespace(" a \n\n b\t") == "a b"
        assert normalize_whitespace(None) == ""

    def test_strip_html_drops_tags_and_scripts(self):
        html = "<p>Hi <b>there</b></p><script>track()</script><style>p{}</style>"
        assert strip_html(html) == "Hi there"

    def test_strip_html_plain_text_passthrough(self):
        assert strip_html("no   tags here") == "no tags here"


class TestClampTextLength:
    def test_short_text_unchanged(self):
        assert clamp_text_length("carpet") == "carpet"

    def test_long_text_is_cut(self):
        assert len(clamp_text_length("a" * (MAX_QUERY_CHARS + 50))) == MAX_QUERY_CHARS
        assert clamp_text_length("abcdef", max_chars=3) == "abc"
