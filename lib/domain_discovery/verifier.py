"""Domain liveness verification.

A candidate domain counts as real if either DNS knows about it (A, AAAA or MX)
or something answers over HTTP. Both checks run concurrently and every network
failure is treated as a negative probe, never raised.
"""

import asyncio
from typing import Optional

import dns.asyncresolver
import dns.exception
import httpx
from loguru import logger

from lib.domain_discovery.models import VerificationResult

# Fixed public resolvers, so results don't depend on the host's resolver config
PUBLIC_NAMESERVERS = ("1.1.1.1", "8.8.8.8")
DNS_RECORD_TYPES = ("A", "AAAA", "MX")

HEAD_TIMEOUT = 4.0
GET_TIMEOUT = 8.0
DNS_TIMEOUT = 3.5
MAX_REDIRECTS = 2
MIN_BODY_LENGTH = 100

GET_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; EnricherBot/1.0)",
    "Accept": "text/html,application/xhtml+xml",
}

# Raised by httpx for bad hosts, timeouts, TLS and redirect overflow
PROBE_ERRORS = (httpx.HTTPError, httpx.InvalidURL, ValueError)


def build_resolver(
    nameservers: tuple[str, ...] = PUBLIC_NAMESERVERS,
    timeout: float = DNS_TIMEOUT,
) -> dns.asyncresolver.Resolver:
    """Build the shared resolver. Created once per process and injected."""
    resolver = dns.asyncresolver.Resolver(configure=False)
    resolver.nameservers = list(nameservers)
    resolver.timeout = timeout
    resolver.lifetime = timeout
    return resolver


def build_client(
    max_redirects: int = MAX_REDIRECTS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """HTTP client for liveness probes. Redirects are followed but capped."""
    return httpx.AsyncClient(follow_redirects=True, max_redirects=max_redirects, transport=transport)


def probe_urls(domain: str) -> list[str]:
    return [
        f"https://{domain}",
        f"https://www.{domain}",
        f"http://{domain}",
        f"http://www.{domain}",
    ]


class DomainVerifier:
    """Checks whether a candidate domain is alive."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        resolver: dns.asyncresolver.Resolver,
        head_timeout: float = HEAD_TIMEOUT,
        get_timeout: float = GET_TIMEOUT,
        min_body_length: int = MIN_BODY_LENGTH,
    ):
        self._client = client
        self._resolver = resolver
        self.head_timeout = head_timeout
        self.get_timeout = get_timeout
        self.min_body_length = min_body_length

    async def dns_alive(self, domain: str) -> bool:
        """True if any of A/AAAA/MX resolves to a non-empty answer.

        Lookups run in parallel and fail independently; a missing MX record
        doesn't cancel a successful A lookup.
        """
        answers = await asyncio.gather(
            *(self._resolver.resolve(domain, rdtype) for rdtype in DNS_RECORD_TYPES),
            return_exceptions=True,
        )
        alive = False
        for rdtype, answer in zip(DNS_RECORD_TYPES, answers):
            if isinstance(answer, BaseException):
                if not isinstance(answer, (dns.exception.DNSException, ValueError)):
                    logger.debug(f"DNS {rdtype} {domain}: unexpected {type(answer).__name__}: {answer}")
                continue
            if answer is not None and len(answer) > 0:
                alive = True
        return alive

    async def http_alive(self, domain: str) -> bool:
        """HEAD the four URL forms, then fall back to GET.

        Some hosts reject HEAD, so a GET that returns a real body or a
        2xx/3xx status also counts.
        """
        urls = probe_urls(domain)

        for url in urls:
            try:
                resp = await self._client.head(url, timeout=self.head_timeout)
            except PROBE_ERRORS as e:
                logger.debug(f"HEAD {url} failed: {type(e).__name__}")
                continue
            if 0 < resp.status_code < 600:
                return True

        for url in urls:
            try:
                resp = await self._client.get(url, timeout=self.get_timeout, headers=GET_HEADERS)
            except PROBE_ERRORS as e:
                logger.debug(f"GET {url} failed: {type(e).__name__}")
                continue
            if len(resp.text) > self.min_body_length:
                return True
            if 200 <= resp.status_code < 400:
                return True

        return False

    async def verify(self, domain: str) -> VerificationResult:
        dns_ok, http_ok = await asyncio.gather(self.dns_alive(domain), self.http_alive(domain))
        result = VerificationResult(domain=domain, dns_ok=dns_ok, http_ok=http_ok)
        logger.debug(f"Verify {domain}: dns={dns_ok} http={http_ok}")
        return result
