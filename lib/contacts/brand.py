"""Brand matching: does a scraped site look like it belongs to the company?

Plain token overlap between the company name and the page text. Cheap, and
only used to downgrade the enrichment status, never to drop contacts.
"""

from lib.domain_discovery.names import tokenize_name

BRAND_MATCH_THRESHOLD = 0.4
MIN_TOKEN_LENGTH = 3


def brand_match_score(company: str, text: str) -> float:
    """Fraction of company-name tokens found in the text (0..1).

    Tokens shorter than 3 characters never count as hits but still count
    towards the total.
    """
    if not company or not text:
        return 0.0
    tokens = tokenize_name(company)
    if not tokens:
        return 0.0
    haystack = text.lower()
    hits = sum(1 for t in tokens if len(t) >= MIN_TOKEN_LENGTH and t in haystack)
    return hits / len(tokens)


def is_brand_match(score: float, threshold: float = BRAND_MATCH_THRESHOLD) -> bool:
    return score >= threshold
