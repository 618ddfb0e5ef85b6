import time
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from revbot.api.dependencies import get_analysis_store, get_pipeline
from revbot.core.config import settings
from revbot.core.exceptions import AnalysisError, DiffTooLargeError
from revbot.core.metrics import record_analysis_completed, record_analysis_failed
from revbot.services.analysis.formatter import (
    analysis_to_review,
    build_check_run_output,
    build_failed_check_output,
    format_summary_comment,
)
from revbot.services.analysis.pipeline import AnalysisPipeline
from revbot.services.analysis.store import AnalysisStore, StoredAnalysis
from revbot.services.github.models import CheckRunOutput, Review

router = APIRouter()
logger = structlog.get_logger()


class AnalysisRequest(BaseModel):
    """Diff and analysis report to resolve into review findings."""

    diff: str = Field(..., description="Unified diff of the pull request")
    report: str = Field(default="", description="Raw output of the analysis tool")
    repository: str | None = Field(default=None, description="Repository full name (owner/repo)")
    pr_number: int | None = Field(default=None, gt=0, description="Pull request number")


class AnalysisResponse(BaseModel):
    """Resolved findings plus the payloads for posting them."""

    execution_id: str
    status: Literal["completed"] = "completed"
    score: int | None
    risk_level: str | None
    issues: list[str]
    recommendations: list[str]
    check_run: CheckRunOutput
    review: Review | None = None
    summary_comment: str


class AnalysisRecord(BaseModel):
    """A stored analysis outcome."""

    execution_id: str
    status: Literal["completed", "failed"]
    repository: str | None = None
    pr_number: int | None = None
    score: int | None = None
    risk_level: str | None = None
    issues: list[str] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)
    error: str | None = None

    @classmethod
    def from_stored(cls, stored: StoredAnalysis) -> "AnalysisRecord":
        result = stored.result.to_dict() if stored.result else {}
        return cls(
            execution_id=stored.execution_id,
            status=stored.status,
            repository=stored.repository,
            pr_number=stored.pr_number,
            error=stored.error,
            **result,
        )


def _check_diff_size(diff: str) -> None:
    size = len(diff.encode("utf-8"))
    if size > settings.max_diff_size_bytes:
        raise DiffTooLargeError(size, settings.max_diff_size_bytes)


@router.post(
    "",
    response_model=AnalysisResponse,
    status_code=status.HTTP_200_OK,
)
def create_analysis(
    request: AnalysisRequest,
    pipeline: AnalysisPipeline = Depends(get_pipeline),
    store: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisResponse | JSONResponse:
    """
    Resolve an analysis report against a pull request diff.

    This endpoint:
    1. Indexes the new-file line numbers of the diff
    2. Extracts score, risk, issues and recommendations from the report
    3. Anchors each issue to a file and line
    4. Returns the check run output and inline review to post

    Plain def: Starlette runs it in the threadpool, off the event loop.
    """
    execution_id = store.new_execution_id()
    logger.info(
        "Analysis requested",
        execution_id=execution_id,
        repository=request.repository,
        pr_number=request.pr_number,
    )

    try:
        _check_diff_size(request.diff)
    except DiffTooLargeError as e:
        logger.warning("Diff too large", **e.details)
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=e.message,
        ) from e

    start_time = time.perf_counter()
    try:
        result = pipeline.analyze(request.diff, request.report)
    except AnalysisError as e:
        logger.error("Analysis failed", execution_id=execution_id, error=e.message)
        record_analysis_failed()
        store.save_failed(execution_id, e.message, request.repository, request.pr_number)
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "execution_id": execution_id,
                "status": "failed",
                "error": e.message,
                "check_run": build_failed_check_output(e).model_dump(),
            },
        )
    except Exception as e:
        logger.exception("Analysis crashed", execution_id=execution_id)
        record_analysis_failed()
        store.save_failed(execution_id, str(e), request.repository, request.pr_number)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"PR analysis failed: {e}",
        ) from e

    record_analysis_completed(
        risk_level=result.risk_level.value if result.risk_level else None,
        duration_seconds=time.perf_counter() - start_time,
        files_indexed=result.files_indexed,
        issues_by_resolution=result.resolution_counts,
    )
    store.save_completed(execution_id, result, request.repository, request.pr_number)

    check_run = build_check_run_output(result, max_items=settings.max_summary_items)
    return AnalysisResponse(
        execution_id=execution_id,
        check_run=check_run,
        review=analysis_to_review(result),
        summary_comment=format_summary_comment(check_run.summary),
        **result.to_dict(),
    )


@router.get("/{execution_id}", response_model=AnalysisRecord)
async def get_analysis(
    execution_id: str,
    store: AnalysisStore = Depends(get_analysis_store),
) -> AnalysisRecord:
    """Get the stored outcome of an analysis."""
    stored = store.get(execution_id)
    if stored is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Analysis {execution_id} not found or expired",
        )
    return AnalysisRecord.from_stored(stored)
