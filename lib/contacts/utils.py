"""Contact extraction helpers."""

import re
from urllib.parse import urljoin, urldefrag

EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.IGNORECASE)

# UK national/international forms first, then a generic international fallback
PHONE_RE = re.compile(
    r"(?:(?:\+?44\s?\d{3,4}|\(?0\)?\s?\d{3,4})[\s-]?\d{3}[\s-]?\d{3,4}"
    r"|\+?\d{1,3}[\s-]?\d{3,4}[\s-]?\d{3,4})"
)


def decode_cloudflare_email(encoded: str) -> str:
    """Decode Cloudflare-obfuscated email addresses.

    The first hex byte is the XOR key for every following byte.
    """
    try:
        r = int(encoded[:2], 16)
        return ''.join(chr(int(encoded[i:i+2], 16) ^ r) for i in range(2, len(encoded), 2))
    except ValueError:
        return ""


def make_absolute(base_url: str, href: str) -> str:
    """Resolve href against base_url, dropping any #fragment. "" if unparseable."""
    try:
        url, _ = urldefrag(urljoin(base_url, href.strip()))
    except ValueError:
        return ""
    return url


def dedupe(values) -> list[str]:
    """Drop blanks and duplicates, keeping first-seen order."""
    return list(dict.fromkeys(v for v in values if v))
