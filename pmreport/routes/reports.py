"""Report generation endpoints: JSON in, PDF out."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException
from fastapi.responses import Response

from ..api_models import MaintenanceReportRequest, ServiceRecordRequest
from ..report.pdf_builder import generate_maintenance_report
from ..report.report_data import MaintenanceReportData
from ..report.service_record import map_service_record
from ._helpers import report_filename

if TYPE_CHECKING:
    from ..app import RuntimeState

LOGGER = logging.getLogger(__name__)


def create_report_routes(state: RuntimeState) -> APIRouter:
    router = APIRouter()

    async def _pdf_response(data: MaintenanceReportData) -> Response:
        try:
            pdf = await asyncio.to_thread(
                generate_maintenance_report, data, loader=state.asset_loader
            )
        except Exception as exc:
            LOGGER.warning(
                "PDF generation failed for %r", data.cinema_name or "<unnamed>", exc_info=True
            )
            raise HTTPException(status_code=500, detail="PDF generation failed") from exc
        pdf_name = report_filename(data.cinema_name, data.date)
        return Response(
            content=pdf,
            media_type="application/pdf",
            headers={"Content-Disposition": f'attachment; filename="{pdf_name}"'},
        )

    @router.post("/api/reports/maintenance")
    async def create_maintenance_report(body: MaintenanceReportRequest) -> Response:
        data = MaintenanceReportData.from_dict(body.model_dump())
        return await _pdf_response(data)

    @router.post("/api/reports/service-record")
    async def create_service_record_report(body: ServiceRecordRequest) -> Response:
        record = body.model_dump()
        data = map_service_record(
            record,
            service_id=str(record["id"]) if record.get("id") is not None else None,
            images_base_url=state.config.report.images_base_url,
        )
        return await _pdf_response(data)

    return router
