"""Company name normalization.

Turns a registered company name ("Acme Widgets Ltd.") into the bare brand
tokens that domain names are usually built from ("acme widgets").
"""

import re

# Corporate suffixes and generic words that rarely appear in a company's domain
STOP_WORDS = frozenset({
    "limited", "ltd", "plc", "llp", "inc", "corp", "corporation", "company",
    "tech", "technologies", "technology", "solutions", "solution",
    "group", "holdings", "services", "consulting", "consultancy",
    "studio", "labs", "lab", "digital", "global", "international",
    "uk", "co",
})

# Anything that is not a letter, digit, whitespace or hyphen
_PUNCTUATION_RE = re.compile(r"[^\w\s-]|_")
_WHITESPACE_RE = re.compile(r"\s+")


def tokenize_name(raw: str) -> list[str]:
    """Split a company name into lowercase tokens without stop words."""
    text = _PUNCTUATION_RE.sub(" ", (raw or "").lower())
    tokens = []
    for token in _WHITESPACE_RE.split(text):
        token = token.strip("-")
        if token and token not in STOP_WORDS:
            tokens.append(token)
    return tokens


def normalize_name(raw: str) -> str:
    """Normalize a company name for domain generation.

    Returns an empty string when no meaningful tokens remain, e.g.
    "Digital Solutions Ltd".
    """
    return " ".join(tokenize_name(raw))
