"""
Enrichment configuration.

Values come from environment variables (a local .env is loaded first).
Malformed numbers and booleans fall back to their defaults; missing Airtable
credentials raise ConfigError before any record is touched.
"""

import os
from typing import Mapping, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from lib.contacts.brand import BRAND_MATCH_THRESHOLD
from lib.contacts.discoverer import LINK_PAUSE, MAX_INTERNAL_LINKS, SEED_PATHS, SEED_PAUSE
from lib.contacts.extractor import FETCH_TIMEOUT, MAX_REDIRECTS as CRAWL_MAX_REDIRECTS
from lib.contacts.ranker import BUSINESS_DOMAIN_BONUS, NO_TAG_BONUS, PRIORITY_PREFIXES
from lib.domain_discovery.selector import BATCH_PAUSE, BATCH_SIZE, MAX_CANDIDATES
from lib.domain_discovery.verifier import (
    DNS_TIMEOUT,
    GET_TIMEOUT,
    HEAD_TIMEOUT,
    MAX_REDIRECTS as PROBE_MAX_REDIRECTS,
)

REQUIRED_VARS = ("AIRTABLE_API_KEY", "AIRTABLE_BASE_ID", "AIRTABLE_TABLE_NAME")

RECORD_PAUSE = 0.3


class ConfigError(Exception):
    """Required configuration is missing."""


class FieldMapping(BaseModel):
    """Record store field names. An empty name disables that field."""

    company: str = "Company"
    domain: str = "Domain"
    email: str = "Email"
    phone: str = "Phone"
    sic: str = "SIC"
    industry: str = "Industry"
    status: str = "Enrichment Status"
    last_enriched_at: str = "Last Enriched At"
    country: str = ""


class DiscoverySettings(BaseModel):
    """Tunables for domain discovery and contact crawling."""

    # Domain selection
    max_candidates: int = MAX_CANDIDATES
    verify_batch_size: int = BATCH_SIZE
    verify_batch_pause: float = BATCH_PAUSE

    # Verification
    head_timeout: float = HEAD_TIMEOUT
    get_timeout: float = GET_TIMEOUT
    dns_timeout: float = DNS_TIMEOUT
    probe_max_redirects: int = PROBE_MAX_REDIRECTS

    # Contact crawl
    fetch_timeout: float = FETCH_TIMEOUT
    crawl_max_redirects: int = CRAWL_MAX_REDIRECTS
    seed_paths: tuple[str, ...] = SEED_PATHS
    max_internal_links: int = MAX_INTERNAL_LINKS
    seed_pause: float = SEED_PAUSE
    link_pause: float = LINK_PAUSE

    # Ranking
    brand_threshold: float = BRAND_MATCH_THRESHOLD
    email_prefixes: tuple[str, ...] = PRIORITY_PREFIXES
    no_tag_bonus: float = NO_TAG_BONUS
    business_domain_bonus: float = BUSINESS_DOMAIN_BONUS

    # Between records in a run
    record_pause: float = RECORD_PAUSE

    def email_options(self) -> dict:
        return {
            "prefixes": self.email_prefixes,
            "no_tag_bonus": self.no_tag_bonus,
            "business_domain_bonus": self.business_domain_bonus,
        }


class EnrichmentConfig(BaseModel):
    airtable_api_key: str = ""
    airtable_base_id: str = ""
    airtable_table_name: str = ""
    fields: FieldMapping = Field(default_factory=FieldMapping)

    batch_size: int = 5
    dry_run: bool = False
    recent_days: int = 0
    use_created_time: bool = False

    log_bucket: Optional[str] = None
    log_dir: Optional[str] = None
    slack_webhook_url: Optional[str] = None

    discovery: DiscoverySettings = Field(default_factory=DiscoverySettings)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None, require_store: bool = True) -> "EnrichmentConfig":
        """Build config from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (no .env loading)
            require_store: Raise ConfigError if Airtable credentials are missing
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        def get(name: str, default: str = "") -> str:
            value = environ.get(name)
            return value.strip() if value is not None else default

        if require_store:
            missing = [name for name in REQUIRED_VARS if not get(name)]
            if missing:
                raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")

        fields = FieldMapping(
            company=get("AIRTABLE_COMPANY_FIELD", "Company"),
            domain=get("AIRTABLE_DOMAIN_FIELD", "Domain"),
            email=get("AIRTABLE_EMAIL_FIELD", "Email"),
            phone=get("AIRTABLE_PHONE_FIELD", "Phone"),
            sic=get("AIRTABLE_SIC_FIELD", "SIC"),
            industry=get("AIRTABLE_INDUSTRY_FIELD", "Industry"),
            status=get("AIRTABLE_STATUS_FIELD", "Enrichment Status"),
            last_enriched_at=get("AIRTABLE_LAST_ENRICHED_AT_FIELD", "Last Enriched At"),
            country=get("AIRTABLE_COUNTRY_FIELD", ""),
        )

        discovery = DiscoverySettings(
            brand_threshold=parse_float(get("BRAND_MATCH_THRESHOLD"), BRAND_MATCH_THRESHOLD),
        )

        return cls(
            airtable_api_key=get("AIRTABLE_API_KEY"),
            airtable_base_id=get("AIRTABLE_BASE_ID"),
            airtable_table_name=get("AIRTABLE_TABLE_NAME"),
            fields=fields,
            batch_size=parse_int(get("BATCH_SIZE"), 5, minimum=1),
            dry_run=parse_bool(get("DRY_RUN"), False),
            recent_days=parse_int(get("RECENT_DAYS"), 0, minimum=0),
            use_created_time=parse_bool(get("USE_CREATED_TIME"), False),
            log_bucket=get("ENRICH_LOG_BUCKET") or None,
            log_dir=get("ENRICH_LOG_DIR") or None,
            slack_webhook_url=get("SLACK_WEBHOOK_URL") or None,
            discovery=discovery,
        )


def parse_int(value: str, default: int, minimum: Optional[int] = None) -> int:
    try:
        n = int(value)
    except (TypeError, ValueError):
        return default
    if minimum is not None and n < minimum:
        return default
    return n


def parse_float(value: str, default: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def parse_bool(value: str, default: bool) -> bool:
    if not value:
        return default
    lowered = value.strip().lower()
    if lowered in ("true", "1", "yes", "on"):
        return True
    if lowered in ("false", "0", "no", "off"):
        return False
    return default
