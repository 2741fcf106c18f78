"""Contact discovery on a company website.

  1. Fetch seed pages (/, /contact, /about, ...) plus a few internal links
  2. Extract mailto/tel links, Cloudflare-obfuscated emails and text matches
  3. Rank into a single email (own domain, role prefixes first) and phone (+44 first)
  4. Score the homepage against the company name (brand match)
"""

from lib.contacts.models import ContactSignals, DiscoveredContacts
from lib.contacts.extractor import (
    ContactExtractor,
    build_client,
    extract_from_html,
    internal_links,
)
from lib.contacts.discoverer import ContactDiscoverer
from lib.contacts.ranker import (
    pick_best_email,
    pick_best_phone,
    normalize_phone,
    is_likely_phone,
    is_plausible_email,
)
from lib.contacts.brand import brand_match_score, is_brand_match
from lib.contacts.utils import decode_cloudflare_email

__all__ = [
    # Models
    "ContactSignals",
    "DiscoveredContacts",
    # Extraction
    "ContactExtractor",
    "build_client",
    "extract_from_html",
    "internal_links",
    "ContactDiscoverer",
    # Ranking
    "pick_best_email",
    "pick_best_phone",
    "normalize_phone",
    "is_likely_phone",
    "is_plausible_email",
    # Brand
    "brand_match_score",
    "is_brand_match",
    "decode_cloudflare_email",
]
