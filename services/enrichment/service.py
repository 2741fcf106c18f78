"""
Enrichment Service - Fill in missing domain, email, phone and industry.

Selects a small batch of incomplete records, enriches them one at a time and
writes the results back with a status label and a timestamp.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional
import asyncio

from loguru import logger

from services.enrichment.config import EnrichmentConfig, FieldMapping
from services.enrichment.enricher import CompanyEnricher
from services.enrichment.models import (
    EnrichmentRequest,
    EnrichmentResult,
    RunResult,
    StoreRecord,
)
from services.enrichment.repo import IRecordStore, needs_enrichment


def now_iso() -> str:
    """Current UTC time, e.g. 2024-05-01T09:30:00.123Z."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _sic_value(raw):
    """SIC field as a string or list of strings (number fields come back as ints)."""
    if raw is None or raw == "" or raw == []:
        return None
    if isinstance(raw, list):
        return [str(v) for v in raw]
    return str(raw)


def request_from_record(record: StoreRecord, fields: FieldMapping) -> EnrichmentRequest:
    return EnrichmentRequest(
        company=record.get_field(fields.company),
        country=record.get_field(fields.country) or None,
        sic=_sic_value(record.get_raw(fields.sic)),
        domain=record.get_field(fields.domain) or None,
        email=record.get_field(fields.email) or None,
        phone=record.get_field(fields.phone) or None,
        industry=record.get_field(fields.industry) or None,
    )


def build_patch(
    record: StoreRecord,
    result: EnrichmentResult,
    fields: FieldMapping,
    timestamp: Optional[str] = None,
) -> dict:
    """Field updates for a record: new or changed values, status and timestamp."""
    patch = {}
    for name, value in (
        (fields.domain, result.domain),
        (fields.email, result.email),
        (fields.phone, result.phone),
        (fields.industry, result.industry),
    ):
        if name and value and value != record.get_field(name):
            patch[name] = value
    if fields.status:
        patch[fields.status] = result.status.value
    if fields.last_enriched_at:
        patch[fields.last_enriched_at] = timestamp or now_iso()
    return patch


# =============================================================================
# Service Interface
# =============================================================================

class IService(ABC):
    """Enrichment Service Interface."""

    @abstractmethod
    async def run(self, dry_run: Optional[bool] = None) -> RunResult:
        """Enrich one batch of records from the store."""
        pass

    @abstractmethod
    async def lookup(self, company: str, country: Optional[str] = None, sic: Optional[str] = None) -> EnrichmentResult:
        """Enrich a single company without touching the store."""
        pass

    @abstractmethod
    async def preview(self) -> list[StoreRecord]:
        """Records the next run would pick up."""
        pass


# =============================================================================
# Service Implementation
# =============================================================================

class Service(IService):
    """Batch enrichment over a record store.

    lookup() needs no store and preview() needs no enricher, so either may be
    None for those paths.
    """

    def __init__(
        self,
        store: Optional[IRecordStore],
        enricher: Optional[CompanyEnricher],
        config: Optional[EnrichmentConfig] = None,
    ) -> None:
        self._store = store
        self._enricher = enricher
        self.config = config or EnrichmentConfig()

    @property
    def fields(self) -> FieldMapping:
        return self.config.fields

    async def run(self, dry_run: Optional[bool] = None) -> RunResult:
        """Enrich one batch of records.

        Records are processed strictly one at a time. A failing record is
        logged and skipped (it is picked up again next run); a failure to
        select records propagates.
        """
        dry_run = self.config.dry_run if dry_run is None else dry_run
        result = RunResult(dry_run=dry_run)

        records = await self._store.select_needing_enrichment()
        result.selected = len(records)
        if not records:
            logger.info("No records need enrichment.")
            return result

        logger.info(f"Selected {len(records)} records{' (DRY_RUN)' if dry_run else ''}")

        for record in records:
            try:
                await self._process_record(record, result, dry_run)
            except Exception as e:
                result.failed += 1
                logger.error(f"  error enriching {record.id}: {type(e).__name__}: {e}")
            await asyncio.sleep(self.config.discovery.record_pause)

        logger.info(
            f"Run complete: {result.processed} processed, {result.updated} updated, "
            f"{result.skipped} skipped, {result.failed} failed"
        )
        return result

    async def _process_record(self, record: StoreRecord, result: RunResult, dry_run: bool) -> None:
        company = record.get_field(self.fields.company)
        logger.info(f"• {record.id} - {company}")

        if not needs_enrichment(record, self.fields):
            logger.info("  already complete, skipping")
            result.skipped += 1
            return

        enriched = await self._enricher.enrich(request_from_record(record, self.fields))
        patch = build_patch(record, enriched, self.fields)

        if dry_run:
            logger.info(f"  DRY_RUN, not writing. would update: {patch}")
        else:
            # A failed write raises here and counts only as failed
            await self._store.update(record.id, patch)
            result.updated += 1
            logger.info(f"  updated: {patch}")

        result.processed += 1
        result.count_status(enriched.status)

    async def lookup(self, company: str, country: Optional[str] = None, sic: Optional[str] = None) -> EnrichmentResult:
        logger.info(f"• lookup - {company}")
        return await self._enricher.enrich(EnrichmentRequest(company=company, country=country, sic=sic))

    async def preview(self) -> list[StoreRecord]:
        return await self._store.select_needing_enrichment()
