"""Tests for brand matching."""

from lib.contacts.brand import brand_match_score, is_brand_match


class TestBrandMatchScore:

    def test_acme_consulting(self):
        score = brand_match_score(
            "Acme Consulting Group",
            "Welcome to Acme — your trusted consulting partner",
        )
        assert score >= 0.4
        assert is_brand_match(score)

    def test_partial_overlap(self):
        assert brand_match_score("Blue Sky Bakery Ltd", "<h1>Blue Bakery</h1>") == 2 / 3

    def test_no_overlap(self):
        assert brand_match_score("Acme Widgets", "<title>Parked domain</title>") == 0.0

    def test_short_tokens_never_hit(self):
        # "jb" is counted but can't match
        assert brand_match_score("JB Plumbing", "jb plumbing services") == 0.5

    def test_case_insensitive(self):
        assert brand_match_score("ACME", "acme ltd") == 1.0

    def test_empty_inputs(self):
        assert brand_match_score("", "acme") == 0.0
        assert brand_match_score("Acme", "") == 0.0
        assert brand_match_score(None, None) == 0.0

    def test_only_stop_words(self):
        assert brand_match_score("Holdings Ltd", "holdings ltd") == 0.0


class TestIsBrandMatch:

    def test_threshold(self):
        assert is_brand_match(0.4)
        assert not is_brand_match(0.39)
        assert is_brand_match(0.3, threshold=0.3)
