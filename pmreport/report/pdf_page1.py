"""Page 1 of the maintenance report: identification and inspection checklist."""

from __future__ import annotations

import logging

from reportlab.lib import colors
from reportlab.pdfgen.canvas import Canvas

from ..report_theme import CONTACT_TEMPLATE, LOGO_FALLBACK_LABELS, REPORT_COLORS, REPORT_TITLE
from .pdf_assets import ReportAssets
from .pdf_helpers import (
    FONT,
    FONT_B,
    ColumnSpec,
    LayoutCursor,
    draw_section,
    draw_table_row,
)
from .pdf_layout import fit_logo_size
from .report_data import (
    MaintenanceReportData,
    StatusItem,
    convert_service_visit_to_text,
    normalize_yes_no,
)

LOGGER = logging.getLogger(__name__)

PAGE_W = 595
PAGE_H = 842
MARGIN = 40
TOP_OFFSET = 50
CONTENT_W = 535

ROW_H = 20
ENVIRONMENT_ROW_H = 40
HEADER_H = 30
HEADER_STEP = 35
CONTACT_H = 50

LOGO_MAX_H = 24
LEFT_LOGO_BOX = (50, 120)  # x, max width
RIGHT_LOGO_BOX = (445, 120)
TITLE_X = 220

PAGE1_COLUMNS: dict[str, ColumnSpec] = {
    "cinema_date": ColumnSpec((100, 150, 80, 205), CONTENT_W),
    "address": ColumnSpec((100, 435), CONTENT_W),
    "contact_location": ColumnSpec((100, 150, 80, 205), CONTENT_W),
    "screen_visit": ColumnSpec((100, 150, 120, 165), CONTENT_W),
    "projector": ColumnSpec((80, 80, 70, 70, 60, 90, 85), CONTENT_W),
    "checklist_header": ColumnSpec((120, 235, 100, 80), CONTENT_W),
    "environment": ColumnSpec((200, 335), CONTENT_W),
    "service_window": ColumnSpec((100, 150, 80, 205), CONTENT_W),
    "images_link": ColumnSpec((100, 435), CONTENT_W),
}


def _hex(c: str) -> colors.Color:
    return colors.HexColor(c)


def _item(label: str, item: StatusItem) -> tuple[str, str, str]:
    return (label, item.status, normalize_yes_no(item.yes_no))


def checklist_sections(data: MaintenanceReportData) -> list[tuple[str, list[tuple[str, str, str]]]]:
    """Section label and ``(description, status, flag)`` rows, in page order."""
    o = data.opticals
    e = data.electronics
    le = data.light_engine_test
    m = data.mechanical
    return [
        (
            "OPTICALS",
            [
                _item("Reflector", o.reflector),
                _item("UV filter", o.uv_filter),
                _item("Integrator Rod", o.integrator_rod),
                _item("Cold Mirror", o.cold_mirror),
                _item("Fold Mirror", o.fold_mirror),
            ],
        ),
        (
            "ELECTRONICS",
            [
                _item("Touch Panel", e.touch_panel),
                _item("EVB Board", e.evb_board),
                _item("IMCB Board", e.imcb_board),
                _item("PIB Board", e.pib_board),
                _item("ICP Board", e.icp_board),
                _item("IMB/S Board", e.imb_s_board),
            ],
        ),
        (
            "Serial Number verified",
            [_item("Chassis label vs Touch Panel", data.serial_verified)],
        ),
        ("Coolant", [_item("Level and Color", data.coolant)]),
        (
            "Disposable Consumables",
            [_item("Air Intake, LAD and RAD", data.air_intake_lad_rad)],
        ),
        (
            "Light Engine Test Pattern",
            [
                _item("White", le.white),
                _item("Red", le.red),
                _item("Green", le.green),
                _item("Blue", le.blue),
                _item("Black", le.black),
            ],
        ),
        (
            "MECHANICAL",
            [
                _item("AC blower and Vane Switch", m.ac_blower),
                _item("Extractor Vane Switch", m.extractor),
                _item("Exhaust CFM - Value", m.exhaust_cfm),
                _item("Light Engine 4 fans with LAD fan", m.light_engine_4_fans),
                _item("Card Cage Top and Bottom fans", m.card_cage_fans),
                _item("Radiator fan and Pump", m.radiator_fan),
                _item("Connector and hose for the Pump", m.connector_hose),
                _item("Security and lamp house lock switch", m.security_lock),
            ],
        ),
        ("Lamp LOC Mechanism X,", [_item("Y and Z movement", data.lamp_loc)]),
    ]


def _draw_logo(c: Canvas, image, slot: str, center_y: float) -> None:
    box_x, box_w = LEFT_LOGO_BOX if slot == "left" else RIGHT_LOGO_BOX
    if image is None:
        LOGGER.debug("No %s logo available; drawing text label", slot)
        c.setFillColor(_hex(REPORT_COLORS["brand"]))
        c.setFont(FONT_B, 16)
        label = LOGO_FALLBACK_LABELS[slot]
        if slot == "left":
            c.drawString(box_x, center_y - 5, label)
        else:
            c.drawRightString(box_x + box_w, center_y - 5, label)
        return
    src_w, src_h = image.getSize()
    w, h = fit_logo_size(src_w, src_h, box_w, LOGO_MAX_H)
    # Left logo hugs the left edge of its slot, right logo the right edge.
    x = box_x if slot == "left" else box_x + box_w - w
    c.drawImage(image, x, center_y - h / 2, width=w, height=h, mask="auto")


def _draw_header(c: Canvas, cursor: LayoutCursor, assets: ReportAssets) -> None:
    y = cursor.y
    c.setLineWidth(1)
    c.setStrokeColor(_hex(REPORT_COLORS["border"]))
    c.rect(MARGIN, y - HEADER_H, CONTENT_W, HEADER_H, stroke=1, fill=0)

    center_y = y - HEADER_H / 2
    _draw_logo(c, assets.left_logo, "left", center_y)
    _draw_logo(c, assets.right_logo, "right", center_y)

    c.setFillColor(_hex(REPORT_COLORS["ink"]))
    c.setFont(FONT_B, 14)
    c.drawString(TITLE_X, y - 20, REPORT_TITLE)
    cursor.advance(HEADER_STEP)


def _draw_contact_box(c: Canvas, cursor: LayoutCursor) -> None:
    y = cursor.y
    c.setLineWidth(1)
    c.setStrokeColor(_hex(REPORT_COLORS["border"]))
    c.setFillColor(_hex(REPORT_COLORS["contact_bg"]))
    c.rect(MARGIN, y - CONTACT_H, CONTENT_W, CONTACT_H, stroke=1, fill=1)

    c.setFillColor(_hex(REPORT_COLORS["brand"]))
    c.setFont(FONT_B, 10)
    c.drawString(50, y - 12, CONTACT_TEMPLATE["heading"])

    c.setFillColor(_hex(REPORT_COLORS["ink"]))
    entries = (
        (50, 120, y - 28, "Address:", CONTACT_TEMPLATE["address"]),
        (50, 120, y - 40, "Landline:", CONTACT_TEMPLATE["landline"]),
        (240, 300, y - 40, "Mobile:", CONTACT_TEMPLATE["mobile"]),
        (400, 450, y - 40, "Email:", CONTACT_TEMPLATE["email"]),
    )
    for label_x, value_x, baseline, label, value in entries:
        c.setFont(FONT_B, 9)
        c.drawString(label_x, baseline, label)
        c.setFont(FONT, 8)
        c.drawString(value_x, baseline, value)
    cursor.advance(CONTACT_H)


def draw_page1(c: Canvas, data: MaintenanceReportData, assets: ReportAssets) -> LayoutCursor:
    """Render page 1 and return its final cursor."""
    cursor = LayoutCursor(y=PAGE_H - TOP_OFFSET, bottom=MARGIN, page_label="page 1")
    cols = PAGE1_COLUMNS

    _draw_header(c, cursor, assets)
    _draw_contact_box(c, cursor)

    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols["cinema_date"].cells(["CINEMA NAME:", data.cinema_name, "DATE:", data.date]),
        ROW_H,
    )
    draw_table_row(c, cursor, MARGIN, cols["address"].cells(["Address:", data.address]), ROW_H)
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols["contact_location"].cells(
            ["Contact Details", data.contact_details, "LOCATION:", data.location]
        ),
        ROW_H,
    )
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols["screen_visit"].cells(
            [
                "SCREEN No:",
                data.screen_no,
                "Engg and EW Service visit:",
                convert_service_visit_to_text(data.service_visit),
            ]
        ),
        ROW_H,
    )
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols["projector"].cells(
            [
                "Projector Model:",
                data.projector_model,
                "Serial No.:",
                data.serial_no,
                "Running Hours:",
                data.running_hours,
                "Replacement Required",
            ]
        ),
        ROW_H,
    )
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols["checklist_header"].cells(
            ["SECTIONS", "DESCRIPTION", "STATUS", "YES/NO - OK"], labels="all"
        ),
        ROW_H,
    )

    for name, items in checklist_sections(data):
        draw_section(c, cursor, MARGIN, name, items)

    if data.projector_environment:
        draw_table_row(
            c,
            cursor,
            MARGIN,
            cols["environment"].cells(
                ["Projector placement, room and environment:", data.projector_environment]
            ),
            ENVIRONMENT_ROW_H,
        )
    if data.start_time or data.end_time:
        draw_table_row(
            c,
            cursor,
            MARGIN,
            cols["service_window"].cells(
                ["Service start:", data.start_time, "Service end:", data.end_time]
            ),
            ROW_H,
        )
    if data.images_link:
        draw_table_row(
            c, cursor, MARGIN, cols["images_link"].cells(["Service images:", data.images_link]), ROW_H
        )

    cursor.warn_if_overflowed()
    return cursor
