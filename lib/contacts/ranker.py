"""Pick one email and one phone number out of everything scraped from a site."""

import re
from typing import Iterable, Sequence

from lib.contacts.utils import EMAIL_RE, dedupe

# Earlier prefixes score higher (len - index)
PRIORITY_PREFIXES = ("info@", "contact@", "hello@", "support@", "enquiries@")

FREE_EMAIL_DOMAINS = frozenset({
    "gmail.com", "yahoo.com", "hotmail.com", "outlook.com", "live.com",
    "aol.com", "icloud.com", "proton.me", "protonmail.com",
})

NO_TAG_BONUS = 0.5
BUSINESS_DOMAIN_BONUS = 0.5

UK_PHONE_BONUS = 2.0
TYPICAL_LENGTH_BONUS = 0.5

_PHONE_CHARS_RE = re.compile(r"[^+\d]")
_LIKELY_PHONE_RE = re.compile(r"^\+?\d{10,15}$")
_UK_PHONE_RE = re.compile(r"^\+44\d{9,11}$")


def is_plausible_email(email: str) -> bool:
    return bool(email) and EMAIL_RE.fullmatch(email) is not None


def _email_domain(email: str) -> str:
    return email.rpartition("@")[2].lower()


def _same_site(email_domain: str, preferred: str) -> bool:
    """True if the domains match or one is a subdomain of the other."""
    if not email_domain or not preferred:
        return False
    return (
        email_domain == preferred
        or email_domain.endswith("." + preferred)
        or preferred.endswith("." + email_domain)
    )


def pick_best_email(
    emails: Iterable[str],
    preferred_domain: str = "",
    prefixes: Sequence[str] = PRIORITY_PREFIXES,
    no_tag_bonus: float = NO_TAG_BONUS,
    business_domain_bonus: float = BUSINESS_DOMAIN_BONUS,
    free_domains: frozenset = FREE_EMAIL_DOMAINS,
) -> str:
    """Best contact email, preferring addresses on the company's own domain.

    Addresses on preferred_domain (or a sub/parent domain of it) are ranked on
    their own when there are any; otherwise everything else is. Within the
    pool, role prefixes like info@ score highest, then untagged addresses on
    non-free domains. Ties go to the address seen first. Returns "" when no
    plausible address exists.
    """
    cleaned = dedupe((e or "").strip().lower() for e in emails)
    plausible = [e for e in cleaned if is_plausible_email(e)]
    if not plausible:
        return ""

    preferred = (preferred_domain or "").strip().lower()
    on_site = [e for e in plausible if _same_site(_email_domain(e), preferred)]
    pool = on_site or plausible

    def score(email: str) -> float:
        s = 0.0
        for i, prefix in enumerate(prefixes):
            if email.startswith(prefix):
                s += len(prefixes) - i
        if "+" not in email:
            s += no_tag_bonus
        if _email_domain(email) not in free_domains:
            s += business_domain_bonus
        return s

    return max(pool, key=score)


def normalize_phone(raw: str) -> str:
    """Reduce to digits and '+', rewriting 0044/44 prefixes as +44."""
    if not raw:
        return ""
    s = _PHONE_CHARS_RE.sub("", raw)
    if s.startswith("0044"):
        s = "+" + s[2:]
    elif s.startswith("44"):
        s = "+" + s
    return s


def is_likely_phone(number: str) -> bool:
    return _LIKELY_PHONE_RE.match(number or "") is not None


def pick_best_phone(phones: Iterable[str]) -> str:
    """Best phone number, biased towards UK +44 numbers. "" if none plausible."""
    numbers = [n for n in dedupe(normalize_phone(p) for p in phones) if is_likely_phone(n)]
    if not numbers:
        return ""

    def score(number: str) -> float:
        s = 0.0
        if _UK_PHONE_RE.match(number):
            s += UK_PHONE_BONUS
        if 11 <= len(number) <= 13:
            s += TYPICAL_LENGTH_BONUS
        return s

    return max(numbers, key=score)
