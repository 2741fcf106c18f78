"""Tests for bounded contact discovery across a site."""

import httpx
import pytest
from unittest.mock import AsyncMock, patch

from lib.contacts.discoverer import ContactDiscoverer
from lib.contacts.extractor import ContactExtractor

HOME = """
<html><body>
  <h1>Acme Widgets</h1>
  <a href="/contact">Contact</a>
  <a href="/services">Services</a>
  <a href="/careers">Careers</a>
  <a href="/blog">Blog</a>
  <a href="/news">News</a>
  <a href="https://facebook.com/acme">Facebook</a>
</body></html>
"""

SITE = {
    "/": HOME,
    "/contact": '<a href="mailto:jane@gmail.com">Jane</a><p>Call 020 7946 0958</p>',
    "/about": "<p>Email info@acme.com or sales+web@acme.com</p>",
    "/careers": "<p>jobs@acme.com</p>",
    "/news": "<p>press@acme.com</p>",
}


def _discoverer(site: dict, requested: list) -> ContactDiscoverer:
    def handler(request):
        requested.append(str(request.url))
        html = site.get(request.url.path)
        if html is None:
            return httpx.Response(404, html="Not found")
        return httpx.Response(200, html=html)

    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ContactDiscoverer(ContactExtractor(client), seed_pause=0, link_pause=0)


class TestContactDiscoverer:

    @pytest.mark.asyncio
    async def test_picks_best_contacts(self):
        contacts = await _discoverer(SITE, []).discover("acme.com")
        assert contacts.email == "info@acme.com"
        assert contacts.phone == "02079460958"

    @pytest.mark.asyncio
    async def test_visits_seeds_then_three_internal_links(self):
        contacts = await _discoverer(SITE, []).discover("acme.com")
        assert contacts.pages_visited[:3] == [
            "https://acme.com/",
            "https://acme.com/contact",
            "https://acme.com/contact-us",
        ]
        assert len(contacts.pages_visited) == 13
        # /contact was already a seed, facebook is off-site
        assert contacts.pages_visited[10:] == [
            "https://acme.com/services",
            "https://acme.com/careers",
            "https://acme.com/blog",
        ]

    @pytest.mark.asyncio
    async def test_aggregates_signals_across_pages(self):
        contacts = await _discoverer(SITE, []).discover("acme.com")
        assert "jobs@acme.com" in contacts.emails_seen
        assert "jane@gmail.com" in contacts.emails_seen
        assert "press@acme.com" not in contacts.emails_seen

    @pytest.mark.asyncio
    async def test_brand_text_is_homepage(self):
        contacts = await _discoverer(SITE, []).discover("acme.com")
        assert "Acme Widgets" in contacts.brand_text

    @pytest.mark.asyncio
    async def test_homepage_refetched_for_links(self):
        requested = []
        await _discoverer(SITE, requested).discover("acme.com")
        assert requested.count("https://acme.com/") == 2

    @pytest.mark.asyncio
    async def test_dead_site(self):
        contacts = await _discoverer({}, []).discover("acme.com")
        assert contacts.email is None
        assert contacts.phone is None
        assert contacts.brand_text == ""
        assert len(contacts.pages_visited) == 10

    @pytest.mark.asyncio
    async def test_off_domain_email_used_when_nothing_else(self):
        site = {"/": "<p>Contact jane@gmail.com</p>"}
        contacts = await _discoverer(site, []).discover("acme.com")
        assert contacts.email == "jane@gmail.com"

    @pytest.mark.asyncio
    async def test_pauses(self):
        discoverer = _discoverer(SITE, [])
        discoverer.seed_pause = 0.2
        discoverer.link_pause = 0.15

        with patch("lib.contacts.discoverer.asyncio.sleep", new_callable=AsyncMock) as sleep:
            await discoverer.discover("acme.com")

        pauses = [call.args[0] for call in sleep.await_args_list]
        assert pauses == [0.2] * 10 + [0.15] * 3
