"""Pytest configuration and fixtures."""

import os
from collections.abc import Generator

import pytest
from fastapi.testclient import TestClient

# =============================================================================
# Environment Setup (must happen before app imports)
# =============================================================================

os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("DEBUG", "false")

from revbot.api.dependencies import get_analysis_store  # noqa: E402
from revbot.api.main import app  # noqa: E402
from revbot.services.analysis.store import AnalysisStore  # noqa: E402
from tests.fixtures.sample_diffs import APP_JS_DIFF  # noqa: E402
from tests.fixtures.sample_reports import APP_JS_REPORT  # noqa: E402


# =============================================================================
# Store Fixtures
# =============================================================================


@pytest.fixture
def analysis_store() -> AnalysisStore:
    """A fresh result store, isolated from other tests."""
    return AnalysisStore(ttl_seconds=3600, max_entries=100)


# =============================================================================
# FastAPI Test Client
# =============================================================================


@pytest.fixture
def client(analysis_store: AnalysisStore) -> Generator[TestClient, None, None]:
    """Create a test client with the result store swapped for a fresh one."""
    app.dependency_overrides[get_analysis_store] = lambda: analysis_store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


# =============================================================================
# Sample Input Fixtures
# =============================================================================


@pytest.fixture
def sample_diff() -> str:
    """Single-file JavaScript diff with one added debug line."""
    return APP_JS_DIFF


@pytest.fixture
def sample_report() -> str:
    """Well-formed report pointing at the debug line in sample_diff."""
    return APP_JS_REPORT
