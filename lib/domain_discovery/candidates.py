"""Domain candidate generation.

Expands a normalized company name into plausible domain names and orders them
by a static priority score, so the likeliest domains are verified first.
"""

import re
import unicodedata
from typing import Optional

from lib.domain_discovery.models import DomainCandidate

UK_COUNTRY_NAMES = frozenset({
    "uk", "united kingdom", "england", "scotland", "wales", "northern ireland",
})

COMMON_TLDS = [".com", ".co.uk", ".co", ".ai", ".io", ".net", ".org", ".uk"]
UK_TLDS = [".co.uk", ".uk", ".com", ".co", ".ai", ".io", ".net", ".org"]

# Variants shorter than this after vowel stripping are mostly noise ("bt", "cm")
MIN_VOWELLESS_LENGTH = 5

_VOWELS_RE = re.compile(r"[aeiou]")
_NON_DOMAIN_RE = re.compile(r"[^a-z0-9\s-]")


def _to_ascii(name: str) -> str:
    """Fold accented letters to ASCII and drop anything a hostname can't hold."""
    folded = unicodedata.normalize("NFKD", name).encode("ascii", "ignore").decode("ascii")
    folded = _NON_DOMAIN_RE.sub("", folded.lower())
    return " ".join(folded.split())


def _idna_label(variant: str) -> str:
    """Punycode form of a non-Latin label, "" if it isn't a valid IDNA label."""
    try:
        return variant.encode("idna").decode("ascii")
    except UnicodeError:
        return ""


def _label_variants(name: str) -> list[str]:
    parts = name.split(" ")
    variants = [name.replace(" ", ""), name.replace(" ", "-")]

    no_vowels = _VOWELS_RE.sub("", name).replace(" ", "")
    if len(no_vowels) >= MIN_VOWELLESS_LENGTH:
        variants.append(no_vowels)

    if len(parts) >= 2:
        variants.append(parts[0] + parts[-1])
        variants.append(f"{parts[0]}-{parts[-1]}")
        variants.append("".join(p[0] for p in parts[:-1]) + parts[-1])

    # Stripping can leave stray hyphens at the edges ("-acme")
    return [v.strip("-") for v in variants]


def name_variants(name: str) -> list[str]:
    """Generate domain label variants for a normalized name.

    "acme widgets" -> acmewidgets, acme-widgets, cmwdgts, ...

    Names with a token that has no ASCII folding ("москва", "東京") keep their
    letters and are emitted as IDNA labels (xn--80adxhks).
    """
    tokens = name.split()
    if not tokens:
        return []

    if any(not _to_ascii(token) for token in tokens):
        labels = (_idna_label(v) for v in _label_variants(" ".join(tokens)) if v)
    else:
        labels = _label_variants(_to_ascii(name))
    return list(dict.fromkeys(v for v in labels if v))


def is_uk_country(country: Optional[str]) -> bool:
    return bool(country) and country.strip().lower() in UK_COUNTRY_NAMES


def tlds_for_country(country: Optional[str]) -> list[str]:
    """TLDs to try, most likely first."""
    return list(UK_TLDS if is_uk_country(country) else COMMON_TLDS)


def score_domain(domain: str) -> float:
    """Static priority score for a candidate domain."""
    score = 0.0
    if domain.endswith(".co.uk"):
        score += 6
    elif domain.endswith(".com"):
        score += 5
    if "-" in domain:
        score -= 1
    if len(domain) <= 12:
        score += 1
    return score


def generate_candidates(name: str, country: Optional[str] = None) -> list[DomainCandidate]:
    """Cross name variants with TLDs and sort by descending score.

    The sort is stable, so equally scored candidates keep variant order.
    """
    tlds = tlds_for_country(country)
    domains = dict.fromkeys(f"{v}{tld}" for v in name_variants(name) for tld in tlds)
    candidates = [DomainCandidate(domain=d, score=score_domain(d)) for d in domains]
    candidates.sort(key=lambda c: c.score, reverse=True)
    return candidates
