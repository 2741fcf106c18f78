"""Tests for single-page contact extraction."""

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from lib.contacts.extractor import (
    ContactExtractor,
    build_client,
    FETCH_TIMEOUT,
    extract_from_html,
    internal_links,
)


PAGE = """
<html><head><title>Acme Widgets</title></head>
<body>
  <a href="mailto:Hello@Acme.com?subject=Hi">Email us</a>
  <a href="MAILTO:sales%40acme.com">Sales</a>
  <a href="tel:+44 20 7946 0958">Call</a>
  <a class="__cf_email__" data-cfemail="422b2c242d0223212f276c212d2f">[email&#160;protected]</a>
  <span data-email=" press@acme.com "></span>
  <p>Or write to support@acme.com, or ring 0161 496 0000.</p>
</body></html>
"""


class TestExtractFromHtml:

    def test_mailto(self):
        signals = extract_from_html(PAGE)
        assert "Hello@Acme.com" in signals.emails
        assert "sales@acme.com" in signals.emails

    def test_tel(self):
        assert "+44 20 7946 0958" in extract_from_html(PAGE).phones

    def test_cloudflare(self):
        assert "info@acme.com" in extract_from_html(PAGE).emails

    def test_data_email(self):
        assert "press@acme.com" in extract_from_html(PAGE).emails

    def test_text_scan(self):
        signals = extract_from_html(PAGE)
        assert "support@acme.com" in signals.emails
        assert any("496" in p for p in signals.phones)

    def test_encounter_order_and_dedupe(self):
        html = '<a href="mailto:a@acme.com">a@acme.com</a><p>b@acme.com a@acme.com</p>'
        assert extract_from_html(html).emails == ["a@acme.com", "b@acme.com"]

    def test_multiple_mailto_recipients(self):
        html = '<a href="mailto:a@acme.com,b@acme.com">x</a>'
        assert extract_from_html(html).emails == ["a@acme.com", "b@acme.com"]

    def test_empty(self):
        signals = extract_from_html("")
        assert signals.emails == []
        assert signals.phones == []

    def test_no_contacts(self):
        signals = extract_from_html("<html><body><p>Coming soon</p></body></html>")
        assert signals.emails == []
        assert signals.phones == []


class TestInternalLinks:

    def test_same_site_in_order(self):
        html = """
        <a href="/services">Services</a>
        <a href="https://twitter.com/acme">Twitter</a>
        <a href="team#people">Team</a>
        <a href="https://acme.com/services">Dup</a>
        <a href="mailto:info@acme.com">Mail</a>
        """
        assert internal_links(html, "https://acme.com/") == [
            "https://acme.com/services",
            "https://acme.com/team",
        ]

    def test_empty(self):
        assert internal_links("", "https://acme.com/") == []


def _extractor(handler) -> ContactExtractor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return ContactExtractor(client)


class TestFetchHtml:

    @pytest.mark.asyncio
    async def test_returns_body(self):
        extractor = _extractor(lambda request: httpx.Response(200, html="<p>hi</p>"))
        assert await extractor.fetch_html("https://acme.com/") == "<p>hi</p>"

    @pytest.mark.asyncio
    async def test_sends_browser_headers(self):
        seen = {}

        def handler(request):
            seen.update(request.headers)
            return httpx.Response(200, html="ok")

        await _extractor(handler).fetch_html("https://acme.com/")
        assert seen["accept-language"] == "en-GB,en;q=0.8"
        assert "Chrome" in seen["user-agent"]

    @pytest.mark.asyncio
    async def test_non_2xx(self):
        extractor = _extractor(lambda request: httpx.Response(404, html="<p>Not found</p>"))
        assert await extractor.fetch_html("https://acme.com/contact") == ""

    @pytest.mark.asyncio
    async def test_non_text(self):
        extractor = _extractor(lambda request: httpx.Response(200, json={"email": "x@acme.com"}))
        assert await extractor.fetch_html("https://acme.com/api") == ""

    @pytest.mark.asyncio
    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        assert await _extractor(handler).fetch_html("https://acme.com/") == ""

    @pytest.mark.asyncio
    async def test_extract_from_url(self):
        extractor = _extractor(lambda request: httpx.Response(200, html=PAGE))
        signals = await extractor.extract_from_url("https://acme.com/contact")
        assert "info@acme.com" in signals.emails

    @pytest.mark.asyncio
    async def test_extract_from_url_failure(self):
        extractor = _extractor(lambda request: httpx.Response(500))
        signals = await extractor.extract_from_url("https://acme.com/contact")
        assert signals.emails == []

    @pytest.mark.asyncio
    async def test_timeout(self):
        client = MagicMock()
        response = httpx.Response(200, html="<p>hi</p>")
        client.get = AsyncMock(return_value=response)
        await ContactExtractor(client).fetch_html("https://acme.com/")
        assert client.get.call_args.kwargs["timeout"] == FETCH_TIMEOUT == 8.0


def _redirect_chain(hops: int):
    def handler(request):
        path = request.url.path
        step = 0 if path == "/" else int(path[2:])
        if step < hops:
            return httpx.Response(302, headers={"Location": f"/r{step + 1}"})
        return httpx.Response(200, html="<p>Contact: info@acme.com</p>")
    return handler


class TestRedirectCap:

    @pytest.mark.asyncio
    async def test_three_hops_followed(self):
        async with build_client(transport=httpx.MockTransport(_redirect_chain(3))) as client:
            html = await ContactExtractor(client).fetch_html("https://acme.com/")
        assert "info@acme.com" in html

    @pytest.mark.asyncio
    async def test_four_hops_gives_empty(self):
        async with build_client(transport=httpx.MockTransport(_redirect_chain(4))) as client:
            assert await ContactExtractor(client).fetch_html("https://acme.com/") == ""
