"""PDF report builder: Canvas-based 2-page maintenance report.

Page 1: Inspection checklist (header, contact box, identification rows,
         component status sections).
Page 2: Measurements and sign-off (lamp/voltage/fL rows, remarks, screen and
         image evaluation, MCGD/CIE/parts, air pollution, signatures).

Uses the low-level ReportLab Canvas API for exact positioning.  Assets are
loaded before layout starts; layout itself is pure drawing.
"""

from __future__ import annotations

import logging
from io import BytesIO
from typing import Any

from reportlab.pdfgen.canvas import Canvas

from .pdf_assets import AssetLoader, ReportAssets
from .pdf_page1 import PAGE_H, PAGE_W, draw_page1
from .pdf_page2 import draw_page2
from .report_data import MaintenanceReportData
from .service_record import map_service_record

LOGGER = logging.getLogger(__name__)

PAGE_SIZE = (PAGE_W, PAGE_H)


def _document_title(data: MaintenanceReportData) -> str:
    parts = [p for p in (data.cinema_name, data.date) if p]
    return " - ".join(["Preventive Maintenance Report", *parts])


def _render(data: MaintenanceReportData, assets: ReportAssets) -> bytes:
    buf = BytesIO()
    c = Canvas(buf, pagesize=PAGE_SIZE, pageCompression=0)
    c.setTitle(_document_title(data))
    c.setAuthor("pmreport")

    draw_page1(c, data, assets)
    c.showPage()

    draw_page2(c, data, assets)
    c.showPage()

    c.save()
    return buf.getvalue()


def generate_maintenance_report(
    data: MaintenanceReportData | None,
    *,
    assets: ReportAssets | None = None,
    loader: AssetLoader | None = None,
) -> bytes:
    """Render *data* into a two-page A4 PDF and return the document bytes.

    When *assets* is omitted, logos and signatures are fetched through
    *loader* (a default :class:`AssetLoader` when ``None``).  Missing assets
    never fail the report.  A missing record raises :class:`ValueError`;
    any other failure is logged and re-raised as :class:`RuntimeError`.
    """
    if data is None:
        raise ValueError("Report data is required")
    try:
        if assets is None:
            assets = (loader or AssetLoader()).load_report_assets(data)
        return _render(data, assets)
    except Exception as exc:
        LOGGER.error("PDF generation failed.", exc_info=True)
        raise RuntimeError("PDF generation failed") from exc


def is_service_record(record: dict[str, Any]) -> bool:
    """Persisted service records carry their measurements under ``workDetails``."""
    return isinstance(record.get("workDetails"), dict)


def report_data_from_record(
    record: dict[str, Any], *, images_base_url: str = ""
) -> MaintenanceReportData:
    if is_service_record(record):
        return map_service_record(record, images_base_url=images_base_url)
    return MaintenanceReportData.from_dict(record)


def build_report_pdf(
    record: dict[str, Any],
    *,
    loader: AssetLoader | None = None,
    images_base_url: str = "",
) -> bytes:
    """Build the PDF from a service record or a report-data dict."""
    data = report_data_from_record(record, images_base_url=images_base_url)
    return generate_maintenance_report(data, loader=loader)
