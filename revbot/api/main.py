"""FastAPI application factory for RevBot."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from revbot.api.middleware.metrics import MetricsMiddleware
from revbot.api.routes import analyses, health, metrics
from revbot.core.config import settings
from revbot.core.exceptions import RevBotError
from revbot.core.metrics import initialize_app_info

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Handle application startup and shutdown."""
    logger.info(
        "Starting RevBot",
        version=settings.app_version,
        environment=settings.environment,
    )
    initialize_app_info(settings.app_version, settings.environment)

    yield

    logger.info("Shutting down RevBot")


def create_app() -> FastAPI:
    """Application factory."""
    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="Resolves code analysis reports into line-anchored review comments",
        lifespan=lifespan,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
    )

    # Middleware
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"] if settings.debug else [],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Exception handlers
    @app.exception_handler(RevBotError)
    async def revbot_exception_handler(request: Request, exc: RevBotError) -> JSONResponse:
        logger.error("Application error", error=exc.message, details=exc.details)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": exc.message, "details": exc.details},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception", error=str(exc))
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    # Routes
    app.include_router(health.router, tags=["Health"])
    app.include_router(analyses.router, prefix="/analyses", tags=["Analyses"])
    app.include_router(metrics.router)

    return app


app = create_app()
