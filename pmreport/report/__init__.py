"""pmreport.report – report model and PDF rendering.

``report_data`` and ``service_record`` build the report model; the ``pdf_*``
modules draw it.  The public entry points are re-exported here.
"""

from .pdf_builder import build_report_pdf, generate_maintenance_report
from .report_data import MaintenanceReportData, convert_service_visit_to_text, normalize_yes_no
from .service_record import detect_issues, map_service_record

__all__ = [
    "MaintenanceReportData",
    "build_report_pdf",
    "convert_service_visit_to_text",
    "detect_issues",
    "generate_maintenance_report",
    "map_service_record",
    "normalize_yes_no",
]
