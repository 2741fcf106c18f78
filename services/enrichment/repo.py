"""
Record store access for enrichment.

Records live in an Airtable table. Selection uses a filterByFormula that
matches rows with any of domain/email/phone/industry blank; the same test is
repeated client-side so a fully populated row is never patched.
"""

from abc import ABC, abstractmethod
from typing import Optional

import httpx
from loguru import logger

from services.enrichment.config import EnrichmentConfig, FieldMapping
from services.enrichment.models import StoreRecord

AIRTABLE_API_URL = "https://api.airtable.com/v0"
AIRTABLE_TIMEOUT = 30.0
# Airtable's page size ceiling
MAX_PAGE_SIZE = 100


def blank_formula(field: str) -> str:
    return f"OR({{{field}}} = '', {{{field}}} = BLANK())"


def enrichable_fields(fields: FieldMapping) -> list[str]:
    return [f for f in (fields.domain, fields.email, fields.phone, fields.industry) if f]


def needs_enrichment_formula(
    fields: FieldMapping,
    recent_days: int = 0,
    use_created_time: bool = False,
) -> str:
    """filterByFormula selecting records with any enrichable field blank.

    recent_days > 0 additionally restricts to records modified (or created)
    within that many days.
    """
    formula = f"OR({', '.join(blank_formula(f) for f in enrichable_fields(fields))})"
    if recent_days > 0:
        time_fn = "CREATED_TIME()" if use_created_time else "LAST_MODIFIED_TIME()"
        formula = f"AND({formula}, IS_AFTER({time_fn}, DATEADD(TODAY(), -{recent_days}, 'days')))"
    return formula


def needs_enrichment(record: StoreRecord, fields: FieldMapping) -> bool:
    return any(not record.get_field(f) for f in enrichable_fields(fields))


class IRecordStore(ABC):
    """Where records to enrich come from and where patches go."""

    @abstractmethod
    async def select_needing_enrichment(self) -> list[StoreRecord]:
        pass

    @abstractmethod
    async def update(self, record_id: str, patch: dict) -> None:
        pass


class AirtableStore(IRecordStore):
    """Airtable REST API store. Errors surface as httpx.HTTPStatusError."""

    def __init__(self, config: EnrichmentConfig, client: Optional[httpx.AsyncClient] = None):
        self.config = config
        self._client = client or httpx.AsyncClient(timeout=AIRTABLE_TIMEOUT)

    @property
    def table_url(self) -> str:
        return f"{AIRTABLE_API_URL}/{self.config.airtable_base_id}/{self.config.airtable_table_name}"

    @property
    def headers(self) -> dict:
        return {
            "Authorization": f"Bearer {self.config.airtable_api_key}",
            "Content-Type": "application/json",
        }

    def selection_params(self) -> dict:
        limit = max(1, self.config.batch_size)
        return {
            "filterByFormula": needs_enrichment_formula(
                self.config.fields,
                self.config.recent_days,
                self.config.use_created_time,
            ),
            "sort[0][field]": self.config.fields.company,
            "sort[0][direction]": "asc",
            "maxRecords": limit,
            "pageSize": min(limit, MAX_PAGE_SIZE),
        }

    async def select_needing_enrichment(self) -> list[StoreRecord]:
        """First page of records needing enrichment, sorted by company."""
        resp = await self._client.get(self.table_url, params=self.selection_params(), headers=self.headers)
        resp.raise_for_status()
        data = resp.json()

        try:
            records = [
                StoreRecord(id=r["id"], fields=r.get("fields") or {}, created_time=r.get("createdTime"))
                for r in data.get("records", [])
            ]
        except (KeyError, TypeError, AttributeError) as e:
            raise ValueError(f"Malformed Airtable response: {type(e).__name__}: {e}") from e
        logger.debug(f"Airtable returned {len(records)} records")
        return [r for r in records if needs_enrichment(r, self.config.fields)]

    async def update(self, record_id: str, patch: dict) -> None:
        resp = await self._client.patch(
            f"{self.table_url}/{record_id}",
            json={"fields": patch},
            headers=self.headers,
        )
        resp.raise_for_status()

    async def close(self) -> None:
        await self._client.aclose()


class MockStore(IRecordStore):
    """In-memory store for testing."""

    def __init__(self, records: Optional[list[StoreRecord]] = None, fields: Optional[FieldMapping] = None, limit: int = 100):
        self.records = list(records or [])
        self.fields = fields or FieldMapping()
        self.limit = limit
        self.updates: list[tuple[str, dict]] = []

    async def select_needing_enrichment(self) -> list[StoreRecord]:
        selected = [r for r in self.records if needs_enrichment(r, self.fields)]
        selected.sort(key=lambda r: r.get_field(self.fields.company))
        return selected[: self.limit]

    async def update(self, record_id: str, patch: dict) -> None:
        self.updates.append((record_id, patch))
        for record in self.records:
            if record.id == record_id:
                record.fields.update(patch)
