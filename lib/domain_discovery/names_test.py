"""Tests for company name normalization."""

import re

import pytest

from lib.domain_discovery.names import normalize_name, tokenize_name, STOP_WORDS


class TestNormalizeName:

    def test_strips_corporate_suffix(self):
        assert normalize_name("Acme Widgets Ltd") == "acme widgets"

    def test_strips_punctuation(self):
        assert normalize_name("Smith & Sons (Holdings) Limited.") == "smith sons"

    def test_keeps_internal_hyphens(self):
        assert normalize_name("Rolls-Royce plc") == "rolls-royce"

    def test_drops_edge_hyphens(self):
        assert normalize_name("Acme - Widgets") == "acme widgets"

    def test_collapses_whitespace(self):
        assert normalize_name("  Blue    Sky\tBakery ") == "blue sky bakery"

    def test_case_folds(self):
        assert normalize_name("ACME GROUP") == "acme"

    def test_only_stop_words_gives_empty(self):
        assert normalize_name("Digital Solutions Ltd") == ""

    def test_empty(self):
        assert normalize_name("") == ""

    def test_none(self):
        assert normalize_name(None) == ""

    def test_keeps_digits(self):
        assert normalize_name("3D Print Co") == "3d print"

    def test_unicode_letters_survive(self):
        assert normalize_name("Café Nero Ltd") == "café nero"

    @pytest.mark.parametrize("raw", [
        "Acme Widgets Ltd",
        "J.R. Hartley's Books & Co.",
        "O'Neill/Brown (UK) Group PLC!!",
        "Northern-Lights_Digital Studio, Inc.",
        "International Consulting Services",
    ])
    def test_no_stop_words_or_punctuation(self, raw):
        out = normalize_name(raw)
        assert not re.search(r"[^\w\s-]|_", out)
        assert not any(token in STOP_WORDS for token in out.split())


class TestTokenizeName:

    def test_returns_tokens(self):
        assert tokenize_name("Acme Consulting Group") == ["acme"]

    def test_same_stop_list_as_normalizer(self):
        raw = "Bright Future Technologies Ltd"
        assert " ".join(tokenize_name(raw)) == normalize_name(raw)
