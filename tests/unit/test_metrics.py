"""Tests for Prometheus metrics."""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from prometheus_client import REGISTRY

from revbot.api.middleware.metrics import MetricsMiddleware
from revbot.core.metrics import (
    initialize_app_info,
    record_analysis_completed,
    record_analysis_failed,
)


def _sample(name: str, labels: dict[str, str] | None = None) -> float:
    return REGISTRY.get_sample_value(name, labels or {}) or 0.0


class TestMetricsMiddleware:
    """Tests for the metrics middleware."""

    @pytest.fixture
    def test_app(self) -> FastAPI:
        """Create a test FastAPI app with metrics middleware."""
        app = FastAPI()
        app.add_middleware(MetricsMiddleware)

        @app.get("/items")
        async def list_items() -> dict:
            return {"status": "ok"}

        @app.get("/items/{item_id}")
        async def get_item(item_id: int) -> dict:
            return {"item_id": item_id}

        @app.get("/health")
        async def health() -> dict:
            return {"status": "healthy"}

        return app

    @pytest.fixture
    def test_client(self, test_app: FastAPI) -> TestClient:
        return TestClient(test_app)

    def test_middleware_tracks_requests(self, test_client: TestClient) -> None:
        labels = {"method": "GET", "endpoint": "/items", "status_code": "200"}
        before = _sample("revbot_http_requests_total", labels)

        response = test_client.get("/items")

        assert response.status_code == 200
        assert _sample("revbot_http_requests_total", labels) == before + 1

    def test_middleware_excludes_health_endpoints(self, test_client: TestClient) -> None:
        labels = {"method": "GET", "endpoint": "/health", "status_code": "200"}

        response = test_client.get("/health")

        assert response.status_code == 200
        assert _sample("revbot_http_requests_total", labels) == 0.0

    def test_middleware_uses_route_template(self, test_client: TestClient) -> None:
        labels = {"method": "GET", "endpoint": "/items/{item_id}", "status_code": "200"}
        before = _sample("revbot_http_requests_total", labels)

        response = test_client.get("/items/123")

        assert response.status_code == 200
        assert _sample("revbot_http_requests_total", labels) == before + 1


class TestAnalysisMetricsRecording:
    """Tests for analysis metrics helper functions."""

    def test_record_analysis_completed(self) -> None:
        completed = {"status": "completed", "risk_level": "HIGH"}
        before_total = _sample("revbot_analyses_total", completed)
        before_resolved = _sample("revbot_located_issues_total", {"resolution": "resolved"})

        record_analysis_completed(
            risk_level="HIGH",
            duration_seconds=0.02,
            files_indexed=3,
            issues_by_resolution={"resolved": 2, "line_not_found": 0, "file_not_in_diff": 1},
        )

        assert _sample("revbot_analyses_total", completed) == before_total + 1
        assert (
            _sample("revbot_located_issues_total", {"resolution": "resolved"})
            == before_resolved + 2
        )

    def test_record_analysis_without_risk_level(self) -> None:
        labels = {"status": "completed", "risk_level": "unknown"}
        before = _sample("revbot_analyses_total", labels)

        record_analysis_completed(
            risk_level=None,
            duration_seconds=0.01,
            files_indexed=1,
            issues_by_resolution={},
        )

        assert _sample("revbot_analyses_total", labels) == before + 1

    def test_record_analysis_failed(self) -> None:
        labels = {"status": "failed", "risk_level": "unknown"}
        before = _sample("revbot_analyses_total", labels)

        record_analysis_failed()

        assert _sample("revbot_analyses_total", labels) == before + 1


class TestAppInfoMetric:
    """Tests for app info metric."""

    def test_initialize_app_info(self) -> None:
        initialize_app_info(version="0.2.0", environment="test")

        assert _sample("revbot_app_info", {"version": "0.2.0", "environment": "test"}) == 1.0
