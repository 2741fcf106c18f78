"""Company enricher: one company in, verified domain/contacts/industry out.

Steps, each skipped when the record already has the value:
  1. Domain: normalize name -> candidates -> DNS/HTTP verification
  2. Contacts: crawl the domain when email or phone is missing, scoring the
     homepage against the company name
  3. Industry: SIC code(s) -> section label(s), independent of the network
"""

from typing import Optional

import httpx
from loguru import logger

from lib.contacts.brand import brand_match_score, is_brand_match
from lib.contacts.discoverer import ContactDiscoverer
from lib.contacts.extractor import ContactExtractor, build_client as build_crawl_client
from lib.domain_discovery.selector import DomainSelector
from lib.domain_discovery.verifier import (
    DomainVerifier,
    build_client as build_probe_client,
    build_resolver,
)
from lib.sic.classifier import derive_industry
from services.enrichment.config import DiscoverySettings
from services.enrichment.models import EnrichmentRequest, EnrichmentResult, derive_status


class CompanyEnricher:
    """Composes domain discovery, contact discovery and SIC classification."""

    def __init__(
        self,
        selector: DomainSelector,
        discoverer: ContactDiscoverer,
        brand_threshold: float = 0.4,
    ):
        self._selector = selector
        self._discoverer = discoverer
        self.brand_threshold = brand_threshold
        self._owned_clients: list[httpx.AsyncClient] = []

    @classmethod
    def build(
        cls,
        settings: Optional[DiscoverySettings] = None,
        probe_client: Optional[httpx.AsyncClient] = None,
        crawl_client: Optional[httpx.AsyncClient] = None,
        resolver=None,
    ) -> "CompanyEnricher":
        """Wire up the default pipeline. Clients and resolver are created if not given."""
        settings = settings or DiscoverySettings()
        owned = []
        if probe_client is None:
            probe_client = build_probe_client(settings.probe_max_redirects)
            owned.append(probe_client)
        if crawl_client is None:
            crawl_client = build_crawl_client(settings.crawl_max_redirects)
            owned.append(crawl_client)

        verifier = DomainVerifier(
            probe_client,
            resolver or build_resolver(timeout=settings.dns_timeout),
            head_timeout=settings.head_timeout,
            get_timeout=settings.get_timeout,
        )
        selector = DomainSelector(
            verifier,
            max_candidates=settings.max_candidates,
            batch_size=settings.verify_batch_size,
            batch_pause=settings.verify_batch_pause,
        )
        extractor = ContactExtractor(
            crawl_client,
            timeout=settings.fetch_timeout,
        )
        discoverer = ContactDiscoverer(
            extractor,
            seed_paths=settings.seed_paths,
            max_internal_links=settings.max_internal_links,
            seed_pause=settings.seed_pause,
            link_pause=settings.link_pause,
            email_options=settings.email_options(),
        )
        enricher = cls(selector, discoverer, brand_threshold=settings.brand_threshold)
        enricher._owned_clients = owned
        return enricher

    async def close(self) -> None:
        """Close HTTP clients created by build()."""
        for client in self._owned_clients:
            await client.aclose()

    async def enrich(self, request: EnrichmentRequest) -> EnrichmentResult:
        domain = request.domain or None
        email = request.email or None
        phone = request.phone or None
        industry = request.industry or None
        brand_score: Optional[float] = None
        brand_ok: Optional[bool] = None

        if not domain:
            selection = await self._selector.best_domain_for(request.company, request.country)
            domain = selection.domain
            logger.info(f"  domain -> {domain or '(none found)'}")

        if domain and (not email or not phone):
            logger.info("  discovering contacts...")
            contacts = await self._discoverer.discover(domain)
            brand_score = brand_match_score(request.company, contacts.brand_text)
            brand_ok = is_brand_match(brand_score, self.brand_threshold)
            logger.info(f"  brand-match score: {brand_score * 100:.0f}% {'(OK)' if brand_ok else '(weak)'}")

            if not email and contacts.email:
                email = contacts.email
                logger.info(f"  email -> {email}")
            if not phone and contacts.phone:
                phone = contacts.phone
                logger.info(f"  phone -> {phone}")

        if not industry and request.sic:
            industry = derive_industry(request.sic) or None
            if industry:
                logger.info(f"  industry -> {industry}")

        return EnrichmentResult(
            domain=domain,
            email=email,
            phone=phone,
            industry=industry,
            status=derive_status(domain, email, phone, brand_ok),
            brand_score=brand_score,
            brand_ok=brand_ok,
        )
