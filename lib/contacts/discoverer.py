"""Bounded contact discovery across a company website.

Visits a fixed set of seed paths, then up to three internal links taken from
the homepage, and ranks everything found into one email and one phone.
"""

import asyncio
from typing import Optional

from loguru import logger

from lib.contacts.extractor import ContactExtractor, internal_links
from lib.contacts.models import DiscoveredContacts
from lib.contacts.ranker import pick_best_email, pick_best_phone
from lib.contacts.utils import dedupe, make_absolute

SEED_PATHS = (
    "", "contact", "contact-us", "contacts", "about", "about-us",
    "team", "imprint", "legal", "privacy",
)
MAX_INTERNAL_LINKS = 3
SEED_PAUSE = 0.2
LINK_PAUSE = 0.15


class ContactDiscoverer:

    def __init__(
        self,
        extractor: ContactExtractor,
        seed_paths: tuple[str, ...] = SEED_PATHS,
        max_internal_links: int = MAX_INTERNAL_LINKS,
        seed_pause: float = SEED_PAUSE,
        link_pause: float = LINK_PAUSE,
        email_options: Optional[dict] = None,
    ):
        self._extractor = extractor
        self.seed_paths = seed_paths
        self.max_internal_links = max_internal_links
        self.seed_pause = seed_pause
        self.link_pause = link_pause
        # Extra keyword args for pick_best_email (prefixes, bonuses)
        self.email_options = email_options or {}

    async def discover(self, domain: str) -> DiscoveredContacts:
        root = f"https://{domain}/"
        visited: list[str] = []
        emails: list[str] = []
        phones: list[str] = []

        async def visit(url: str, pause: float):
            visited.append(url)
            signals = await self._extractor.extract_from_url(url)
            emails.extend(signals.emails)
            phones.extend(signals.phones)
            await asyncio.sleep(pause)

        for path in self.seed_paths:
            url = make_absolute(root, path)
            if not url or url in visited:
                continue
            await visit(url, self.seed_pause)

        home_html = await self._extractor.fetch_html(root)
        followed = 0
        for url in internal_links(home_html, root):
            if followed >= self.max_internal_links:
                break
            if url in visited:
                continue
            await visit(url, self.link_pause)
            followed += 1

        emails = dedupe(emails)
        phones = dedupe(phones)
        logger.debug(f"Contacts {domain}: {len(visited)} pages, {len(emails)} emails, {len(phones)} phones")

        return DiscoveredContacts(
            email=pick_best_email(emails, domain, **self.email_options) or None,
            phone=pick_best_phone(phones) or None,
            brand_text=home_html,
            pages_visited=visited,
            emails_seen=emails,
            phones_seen=phones,
        )
