"""Enrichment service.

Company record enrichment against an Airtable table.

Components:
- Store: Airtable selection and updates (repo.py)
- Enricher: Domain, contacts and industry for one company (enricher.py)
- Service: Batch run over the store (service.py)
- RunLogger: Log capture and archiving (run_log.py)
"""

from services.enrichment.service import (
    Service,
    IService,
    build_patch,
    request_from_record,
)
from services.enrichment.enricher import CompanyEnricher
from services.enrichment.config import (
    ConfigError,
    DiscoverySettings,
    EnrichmentConfig,
    FieldMapping,
)
from services.enrichment.models import (
    EnrichmentStatus,
    EnrichmentRequest,
    EnrichmentResult,
    RunResult,
    StoreRecord,
)
from services.enrichment.repo import (
    AirtableStore,
    IRecordStore,
    MockStore,
)
from services.enrichment.run_log import RunLogger

__all__ = [
    # Service
    "Service",
    "IService",
    "build_patch",
    "request_from_record",
    "CompanyEnricher",
    # Config
    "ConfigError",
    "DiscoverySettings",
    "EnrichmentConfig",
    "FieldMapping",
    # Models
    "EnrichmentStatus",
    "EnrichmentRequest",
    "EnrichmentResult",
    "RunResult",
    "StoreRecord",
    # Store
    "AirtableStore",
    "IRecordStore",
    "MockStore",
    "RunLogger",
]
