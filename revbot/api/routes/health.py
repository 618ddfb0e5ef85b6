from datetime import UTC, datetime
from typing import Literal

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from revbot.api.dependencies import get_analysis_store
from revbot.core.config import settings
from revbot.services.analysis.store import AnalysisStore

logger = structlog.get_logger()

router = APIRouter()


class HealthStatus(BaseModel):
    status: Literal["healthy", "unhealthy"]
    version: str
    environment: str
    timestamp: datetime


class ReadinessStatus(BaseModel):
    status: Literal["ready", "not_ready"]
    checks: dict[str, bool]
    stored_results: int
    timestamp: datetime


@router.get("/health", response_model=HealthStatus)
async def health_check() -> HealthStatus:
    """
    Basic health check endpoint.

    Used by load balancers and container orchestrators to verify
    the application is running.
    """
    return HealthStatus(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        timestamp=datetime.now(UTC),
    )


@router.get("/ready", response_model=ReadinessStatus)
async def readiness_check(
    store: AnalysisStore = Depends(get_analysis_store),
) -> ReadinessStatus:
    """
    Readiness check endpoint.

    The service has no external dependencies; it is ready once the
    result store can be reached.
    """
    stored_results = 0
    try:
        store.evict_expired()
        stored_results = len(store)
        store_ok = True
    except Exception as e:
        logger.error("Result store check failed", error=str(e))
        store_ok = False

    checks = {"result_store": store_ok}

    all_ready = all(checks.values())

    return ReadinessStatus(
        status="ready" if all_ready else "not_ready",
        checks=checks,
        stored_results=stored_results,
        timestamp=datetime.now(UTC),
    )
