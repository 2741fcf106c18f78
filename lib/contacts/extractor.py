"""Single-page contact extraction.

Pulls email and phone signals out of a page:
  1. mailto: / tel: links
  2. Cloudflare-obfuscated emails (data-cfemail)
  3. data-email attributes
  4. Regex scan of the visible text (last resort)
"""

from typing import Optional
from urllib.parse import unquote

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from lib.contacts.models import ContactSignals
from lib.contacts.utils import (
    EMAIL_RE,
    PHONE_RE,
    decode_cloudflare_email,
    dedupe,
    make_absolute,
)

FETCH_TIMEOUT = 8.0
MAX_REDIRECTS = 3

BROWSER_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/124.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml",
    "Accept-Language": "en-GB,en;q=0.8",
}

TEXT_CONTENT_TYPES = ("text/", "html", "xml")


def build_client(
    max_redirects: int = MAX_REDIRECTS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """HTTP client for page crawling. Separate from the probe client (2 redirects)."""
    return httpx.AsyncClient(follow_redirects=True, max_redirects=max_redirects, transport=transport)


def _strip_scheme(href: str, scheme: str) -> str:
    return href[len(scheme):] if href.lower().startswith(scheme) else ""


def _mailto_addresses(href: str) -> list[str]:
    target = _strip_scheme(href.strip(), "mailto:")
    target = unquote(target.split("?", 1)[0])
    return [a.strip() for a in target.split(",")]


def internal_links(html: str, root: str) -> list[str]:
    """Absolute same-site links (starting with root), in document order."""
    if not html:
        return []
    soup = BeautifulSoup(html, "html.parser")
    links = (make_absolute(root, a["href"]) for a in soup.find_all("a", href=True))
    return dedupe(link for link in links if link.startswith(root))


def extract_from_html(html: str) -> ContactSignals:
    if not html:
        return ContactSignals()

    soup = BeautifulSoup(html, "html.parser")
    emails: list[str] = []
    phones: list[str] = []

    for a in soup.find_all("a", href=True):
        href = a["href"].strip()
        if href.lower().startswith("mailto:"):
            emails.extend(_mailto_addresses(href))
        elif href.lower().startswith("tel:"):
            phones.append(unquote(_strip_scheme(href, "tel:")).strip())

    for el in soup.find_all(attrs={"data-cfemail": True}):
        emails.append(decode_cloudflare_email(el["data-cfemail"]).strip())

    for el in soup.find_all(attrs={"data-email": True}):
        emails.append(el["data-email"].strip())

    text = soup.get_text(" ")
    emails.extend(EMAIL_RE.findall(text))
    phones.extend(PHONE_RE.findall(text))

    return ContactSignals(emails=dedupe(emails), phones=dedupe(phones))


class ContactExtractor:
    """Fetches pages and extracts contact signals from them."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = FETCH_TIMEOUT, headers: dict = None):
        self._client = client
        self.timeout = timeout
        self.headers = headers or BROWSER_HEADERS

    async def fetch_html(self, url: str) -> str:
        """GET a page. Returns "" for non-2xx, non-text bodies or network errors."""
        try:
            resp = await self._client.get(url, headers=self.headers, timeout=self.timeout)
        except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
            logger.debug(f"GET {url} failed: {type(e).__name__}")
            return ""

        if not 200 <= resp.status_code < 300:
            logger.debug(f"GET {url}: HTTP {resp.status_code}")
            return ""

        content_type = resp.headers.get("content-type", "").lower()
        if content_type and not any(t in content_type for t in TEXT_CONTENT_TYPES):
            logger.debug(f"GET {url}: skipping {content_type}")
            return ""

        return resp.text

    async def extract_from_url(self, url: str) -> ContactSignals:
        html = await self.fetch_html(url)
        if not html:
            return ContactSignals()
        return extract_from_html(html)
