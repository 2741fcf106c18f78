"""Tests for enrichment models."""

import pytest
from pydantic import ValidationError

from services.enrichment.models import (
    EnrichmentRequest,
    EnrichmentStatus,
    RunResult,
    StoreRecord,
    derive_status,
)


class TestDeriveStatus:
    """Tests for derive_status."""

    def test_nothing(self):
        assert derive_status(None, None, None) == EnrichmentStatus.NOT_FOUND

    def test_domain_only(self):
        assert derive_status("acme.com", None, None) == EnrichmentStatus.DOMAIN_ONLY

    def test_domain_and_contact(self):
        assert derive_status("acme.com", "info@acme.com", None) == EnrichmentStatus.OK
        assert derive_status("acme.com", None, "+442079460958") == EnrichmentStatus.OK

    def test_unmeasured_brand_is_ok(self):
        assert derive_status("acme.com", "info@acme.com", None, brand_ok=None) == EnrichmentStatus.OK

    def test_weak_brand(self):
        status = derive_status("acme.com", "info@acme.com", None, brand_ok=False)
        assert status == EnrichmentStatus.UNVERIFIED_BRAND
        assert status.value == "Domain only (unverified brand match)"

    def test_contacts_without_domain(self):
        assert derive_status(None, "info@acme.com", None) == EnrichmentStatus.PARTIAL
        assert derive_status("", None, "02079460958") == EnrichmentStatus.PARTIAL

    def test_labels(self):
        assert EnrichmentStatus.NOT_FOUND.value == "No domain or contacts found"
        assert EnrichmentStatus.DOMAIN_ONLY.value == "Domain only"
        assert EnrichmentStatus.PARTIAL.value == "Partial"


class TestStoreRecord:
    """Tests for StoreRecord.get_field."""

    def test_plain(self):
        assert StoreRecord(id="rec1", fields={"Company": " Acme "}).get_field("Company") == "Acme"

    def test_missing_and_blank(self):
        record = StoreRecord(id="rec1", fields={"Email": ""})
        assert record.get_field("Email") == ""
        assert record.get_field("Phone") == ""
        assert record.get_field("") == ""

    def test_list_takes_first(self):
        record = StoreRecord(id="rec1", fields={"Country": ["UK", "IE"], "Empty": []})
        assert record.get_field("Country") == "UK"
        assert record.get_field("Empty") == ""

    def test_number(self):
        assert StoreRecord(id="rec1", fields={"SIC": 62020}).get_field("SIC") == "62020"


class TestEnrichmentRequest:

    def test_frozen(self):
        request = EnrichmentRequest(company="Acme")
        with pytest.raises(ValidationError):
            request.company = "Other"

    def test_sic_list(self):
        assert EnrichmentRequest(company="Acme", sic=["62020"]).sic == ["62020"]


class TestRunResult:

    def test_count_status(self):
        result = RunResult()
        result.count_status(EnrichmentStatus.OK)
        result.count_status(EnrichmentStatus.OK)
        result.count_status(EnrichmentStatus.DOMAIN_ONLY)
        assert result.statuses == {"OK": 2, "Domain only": 1}
