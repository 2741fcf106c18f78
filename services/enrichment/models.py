"""Enrichment data models."""

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class EnrichmentStatus(str, Enum):
    NOT_FOUND = "No domain or contacts found"
    DOMAIN_ONLY = "Domain only"
    OK = "OK"
    UNVERIFIED_BRAND = "Domain only (unverified brand match)"
    PARTIAL = "Partial"


class EnrichmentRequest(BaseModel):
    """One company to enrich, with whatever the record already holds."""

    model_config = ConfigDict(frozen=True)

    company: str = ""
    country: Optional[str] = None
    sic: Optional[Union[str, list[str]]] = None
    domain: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None


class EnrichmentResult(BaseModel):
    """Final field values after enrichment. Existing values are carried through."""

    domain: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    industry: Optional[str] = None
    status: EnrichmentStatus = EnrichmentStatus.NOT_FOUND
    # None when no contact discovery ran
    brand_score: Optional[float] = None
    brand_ok: Optional[bool] = None


class StoreRecord(BaseModel):
    """A row from the record store."""

    id: str
    fields: dict = Field(default_factory=dict)
    created_time: Optional[str] = None

    def get_field(self, name: Optional[str]) -> str:
        """Field value as a string; "" for blanks, first element for lists."""
        if not name:
            return ""
        value = self.fields.get(name)
        if isinstance(value, list):
            value = value[0] if value else None
        if value is None or value == "":
            return ""
        return str(value).strip()

    def get_raw(self, name: Optional[str]):
        if not name:
            return None
        return self.fields.get(name)


class RunResult(BaseModel):
    """Outcome of one enrichment run."""

    selected: int = 0
    processed: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0
    dry_run: bool = False
    statuses: dict[str, int] = Field(default_factory=dict)

    def count_status(self, status: EnrichmentStatus) -> None:
        self.statuses[status.value] = self.statuses.get(status.value, 0) + 1


def derive_status(
    domain: Optional[str],
    email: Optional[str],
    phone: Optional[str],
    brand_ok: Optional[bool] = None,
) -> EnrichmentStatus:
    """Status label for a set of final field values.

    A weak brand match (brand_ok is False) downgrades OK; an unmeasured
    match (None) does not.
    """
    if not domain and not email and not phone:
        return EnrichmentStatus.NOT_FOUND
    if domain and not email and not phone:
        return EnrichmentStatus.DOMAIN_ONLY
    if domain:
        return EnrichmentStatus.UNVERIFIED_BRAND if brand_ok is False else EnrichmentStatus.OK
    return EnrichmentStatus.PARTIAL
