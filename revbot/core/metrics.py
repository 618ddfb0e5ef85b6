"""
Prometheus metrics for RevBot.

This module provides:
- HTTP request metrics (latency, count, errors)
- Analysis metrics (outcome, risk level, issue resolution)
"""

from prometheus_client import Counter, Gauge, Histogram, Info

# =============================================================================
# Application Info
# =============================================================================

APP_INFO = Info(
    "revbot_app",
    "RevBot application information",
)

# =============================================================================
# HTTP Request Metrics
# =============================================================================

HTTP_REQUESTS_TOTAL = Counter(
    "revbot_http_requests_total",
    "Total number of HTTP requests",
    ["method", "endpoint", "status_code"],
)

HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "revbot_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

HTTP_REQUESTS_IN_PROGRESS = Gauge(
    "revbot_http_requests_in_progress",
    "Number of HTTP requests currently being processed",
    ["method", "endpoint"],
)

# =============================================================================
# Analysis Metrics
# =============================================================================

ANALYSES_TOTAL = Counter(
    "revbot_analyses_total",
    "Total number of analyses processed",
    ["status", "risk_level"],  # status: completed, failed
)

ANALYSIS_DURATION_SECONDS = Histogram(
    "revbot_analysis_duration_seconds",
    "Analysis duration in seconds",
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0),
)

ANALYSIS_FILES_INDEXED = Histogram(
    "revbot_analysis_files_indexed",
    "Number of diff files indexed per analysis",
    buckets=(1, 2, 5, 10, 20, 50, 100),
)

LOCATED_ISSUES_TOTAL = Counter(
    "revbot_located_issues_total",
    "Total number of reported issues by resolution outcome",
    ["resolution"],  # resolved, line_not_found, file_not_in_diff
)


# =============================================================================
# Helper Functions
# =============================================================================


def initialize_app_info(version: str, environment: str) -> None:
    """Initialize application info metric."""
    APP_INFO.info(
        {
            "version": version,
            "environment": environment,
        }
    )


def record_analysis_completed(
    risk_level: str | None,
    duration_seconds: float,
    files_indexed: int,
    issues_by_resolution: dict[str, int],
) -> None:
    """
    Record metrics for a completed analysis.

    Args:
        risk_level: Extracted risk level (LOW, MEDIUM, HIGH) or None
        duration_seconds: Analysis duration
        files_indexed: Number of files present in the diff index
        issues_by_resolution: Dict mapping resolution outcome to issue count
    """
    ANALYSES_TOTAL.labels(
        status="completed",
        risk_level=risk_level or "unknown",
    ).inc()

    ANALYSIS_DURATION_SECONDS.observe(duration_seconds)
    ANALYSIS_FILES_INDEXED.observe(files_indexed)

    for resolution, count in issues_by_resolution.items():
        if count > 0:
            LOCATED_ISSUES_TOTAL.labels(resolution=resolution).inc(count)


def record_analysis_failed() -> None:
    """Record a failed analysis."""
    ANALYSES_TOTAL.labels(status="failed", risk_level="unknown").inc()
