"""Pytest configuration and shared fixtures."""

import os
import pytest


# =============================================================================
# SAFETY CHECK: Prevent tests from writing to a live Airtable base
# =============================================================================

STORE_ENV_VARS = (
    "AIRTABLE_API_KEY",
    "AIRTABLE_BASE_ID",
    "AIRTABLE_TABLE_NAME",
    "SLACK_WEBHOOK_URL",
    "ENRICH_LOG_BUCKET",
)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "integration: mark test as integration test (hits external services)")
    config.addinivalue_line("markers", "online: mark test as online test (hits the real network)")


def pytest_collection_modifyitems(config, items):
    """Skip online tests unless RUN_ONLINE_TESTS=1."""
    if os.getenv("RUN_ONLINE_TESTS") == "1":
        return
    skip_online = pytest.mark.skip(reason="online test (set RUN_ONLINE_TESTS=1 to run)")
    for item in items:
        if "online" in item.keywords:
            item.add_marker(skip_online)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clear_store_credentials(monkeypatch):
    """No test may reach a real base, webhook or bucket."""
    for name in STORE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
