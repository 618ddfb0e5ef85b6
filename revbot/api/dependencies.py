"""Shared FastAPI dependencies."""

from functools import lru_cache

from revbot.core.config import settings
from revbot.services.analysis.pipeline import AnalysisPipeline
from revbot.services.analysis.store import AnalysisStore


@lru_cache
def get_analysis_store() -> AnalysisStore:
    """
    Dependency that provides the application's result store.

    Override it in tests through ``app.dependency_overrides``:
        app.dependency_overrides[get_analysis_store] = lambda: AnalysisStore(...)
    """
    return AnalysisStore(
        ttl_seconds=settings.result_ttl_seconds,
        max_entries=settings.result_store_max_entries,
    )


def get_pipeline() -> AnalysisPipeline:
    """Dependency that provides a fresh analysis pipeline per request."""
    return AnalysisPipeline()
