"""Tests for the HTTP routes, calling endpoint coroutines directly."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi import HTTPException

from pmreport import __version__
from pmreport.api_models import MaintenanceReportRequest, ServiceRecordRequest
from pmreport.app import create_app
from pmreport.report.pdf_assets import AssetLoader
from pmreport.routes import create_router
from pmreport.routes._helpers import report_filename, safe_filename


def _state() -> MagicMock:
    state = MagicMock()
    state.asset_loader = AssetLoader()
    state.config.report.images_base_url = "https://pm.example.com"
    return state


def _endpoint(router, path: str):
    for route in router.routes:
        if getattr(route, "path", "") == path:
            return route.endpoint
    raise AssertionError(f"route {path} not registered")


def test_routes_registered() -> None:
    router = create_router(_state())
    routes = {r.path: r.methods for r in router.routes if hasattr(r, "methods")}
    assert "GET" in routes["/api/health"]
    assert "POST" in routes["/api/reports/maintenance"]
    assert "POST" in routes["/api/reports/service-record"]


@pytest.mark.asyncio
async def test_health_endpoint_response_shape() -> None:
    result = await _endpoint(create_router(_state()), "/api/health")()
    assert result == {"status": "ok", "version": __version__}


@pytest.mark.asyncio
async def test_maintenance_report_returns_pdf(full_report: dict) -> None:
    endpoint = _endpoint(create_router(_state()), "/api/reports/maintenance")
    response = await endpoint(MaintenanceReportRequest.model_validate(full_report))
    assert response.media_type == "application/pdf"
    assert response.body.startswith(b"%PDF")
    assert (
        response.headers["content-disposition"]
        == 'attachment; filename="PVR_Saket_12_03_2025_report.pdf"'
    )


@pytest.mark.asyncio
async def test_service_record_report_uses_mapped_names(service_record: dict) -> None:
    endpoint = _endpoint(create_router(_state()), "/api/reports/service-record")
    response = await endpoint(ServiceRecordRequest.model_validate(service_record))
    assert response.body.startswith(b"%PDF")
    assert "INOX_Nehru_Place_12_03_2025_report.pdf" in response.headers["content-disposition"]


@pytest.mark.asyncio
async def test_generation_failure_is_http_500(full_report: dict) -> None:
    endpoint = _endpoint(create_router(_state()), "/api/reports/maintenance")
    with patch(
        "pmreport.routes.reports.generate_maintenance_report",
        side_effect=RuntimeError("PDF generation failed"),
    ):
        with pytest.raises(HTTPException) as excinfo:
            await endpoint(MaintenanceReportRequest.model_validate(full_report))
    assert excinfo.value.status_code == 500


def test_request_models_keep_unknown_keys(full_report: dict) -> None:
    body = MaintenanceReportRequest.model_validate(full_report).model_dump()
    assert body["opticals"]["reflector"]["yesNo"] == "yes"
    record = ServiceRecordRequest.model_validate({"id": 7}).model_dump()
    assert record["workDetails"] == {}


def test_report_filename() -> None:
    assert safe_filename("a/b c") == "a_b_c"
    assert safe_filename("") == "download"
    assert report_filename("", "") == "maintenance_report.pdf"
    assert report_filename("Cine One", "") == "Cine_One_report.pdf"


def test_create_app_wires_runtime(tmp_path) -> None:
    app = create_app(tmp_path / "config.yaml")
    assert app.state.runtime.config.server.port == 8000
    paths = {getattr(r, "path", "") for r in app.routes}
    assert "/api/reports/maintenance" in paths
