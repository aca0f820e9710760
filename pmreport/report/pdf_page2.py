"""Page 2 of the maintenance report: measurements and sign-off.

The page starts with full-width measurement rows and the dynamic-height
remarks row, then splits into two independent columns (software, screen and
image evaluation on the left; MCGD, CIE and recommended parts on the right).
The full-width air-pollution table is anchored to the left column cursor, not
to whichever column ended lower.
"""

from __future__ import annotations

import logging

from reportlab.lib import colors
from reportlab.pdfgen.canvas import Canvas

from ..report_theme import REPORT_COLORS
from .pdf_assets import ReportAssets
from .pdf_helpers import (
    BASELINE_DROP,
    CELL_PAD,
    FONT,
    FONT_B,
    FS_BODY,
    FS_CAPTION,
    REMARKS_LINE_H,
    ColumnSpec,
    LayoutCursor,
    clip_text,
    draw_caption,
    draw_cell_box,
    draw_table_row,
    prepare_stroke,
    remarks_row_height,
    split_part_description,
    wrap_text,
)
from .pdf_layout import clamp_scaled_size
from .pdf_page1 import MARGIN, PAGE_H, PAGE_W, ROW_H, TOP_OFFSET
from .report_data import MaintenanceReportData, normalize_yes_no

LOGGER = logging.getLogger(__name__)

LEFT_X = 40
LEFT_W = 240
RIGHT_X = 300
RIGHT_W = 255
SMALL_ROW_H = 16
BOTTOM_LIMIT = 100

SOFTWARE_STEP = 45
CAPTION_GAP = 10
BLOCK_GAP = 20
PARTS_TAIL_GAP = 10
AIR_POLLUTION_OFFSET = 90

LE_SERIAL_MAX_W = 64

SIGNATURE_SCALE = 0.25
SIGNATURE_MAX_W = 120
SIGNATURE_MAX_H = 50
SIGNATURE_IMAGE_Y = 50
SIGNATURE_LABEL_Y = 30
SITE_SIGNATURE_X = 60
ENGINEER_SIGNATURE_X = PAGE_W - 180

# Full-width page-2 rows sit inside the 40pt side margins.
ROW_W = PAGE_W - 2 * MARGIN

PAGE2_COLUMNS: dict[str, ColumnSpec] = {
    "lamp_make": ColumnSpec((150, 365), ROW_W),
    "lamp_hours": ColumnSpec((150, 150, 150, 65), ROW_W),
    "voltage": ColumnSpec((150, 122, 122, 121), ROW_W),
    "fl": ColumnSpec((150, 150, 215), ROW_W),
    "content_player": ColumnSpec((150, 150, 95, 120), ROW_W),
    "le_status": ColumnSpec((150, 365), ROW_W),
    "remarks": ColumnSpec((80, 285, 80, 70), ROW_W),
    "software": ColumnSpec((80, 160), LEFT_W),
    "screen": ColumnSpec((60, 60, 60, 60), LEFT_W),
    "screen_detail": ColumnSpec((120, 120), LEFT_W),
    "image_evaluation": ColumnSpec((180, 60), LEFT_W),
    "mcgd": ColumnSpec((120, 45, 45, 45), RIGHT_W),
    "parts": ColumnSpec((180, 75), RIGHT_W),
    "air_pollution": ColumnSpec((100, 59, 59, 59, 59, 59, 59, 61), ROW_W),
}

IMAGE_EVALUATION_LABELS = (
    ("Focus/boresite", "focus_boresite"),
    ("Integrator Position", "integrator_position"),
    ("Any Spot on the Screen after PPM", "spot_on_screen"),
    ("Check Screen Cropping - FLAT and SCOPE", "screen_cropping"),
    ("Convergence Checked", "convergence"),
    ("Channels Checked - Scope, Flat, Alternative", "channels_checked"),
    ("Pixel defects", "pixel_defects"),
    ("Excessive image vibration", "image_vibration"),
    ("LiteLOC", "lite_loc"),
)


def _hex(c: str) -> colors.Color:
    return colors.HexColor(c)


def draw_remarks_row(
    c: Canvas,
    cursor: LayoutCursor,
    x: float,
    remarks: str,
    le_serial_no: str,
) -> float:
    """Draw ``Remarks | <wrapped text> | LE S. No. | <serial>`` at a height that fits every line."""
    label_w, text_w, serial_label_w, serial_w = PAGE2_COLUMNS["remarks"].widths
    max_text_w = text_w - 2 * CELL_PAD
    lines = wrap_text(remarks, max_text_w, FONT, FS_BODY)
    height = remarks_row_height(len(lines))

    prepare_stroke(c)
    y_top = cursor.y
    label_baseline = y_top - height + height / 2 - BASELINE_DROP

    draw_cell_box(c, x, y_top, label_w, height)
    c.setFont(FONT_B, FS_BODY)
    c.drawString(x + CELL_PAD, label_baseline, "Remarks:")

    text_x = x + label_w
    draw_cell_box(c, text_x, y_top, text_w, height)
    c.setFont(FONT, FS_BODY)
    for idx, line in enumerate(lines):
        if line:
            c.drawString(text_x + CELL_PAD, y_top - (idx + 1) * REMARKS_LINE_H + 4, line)

    serial_label_x = text_x + text_w
    draw_cell_box(c, serial_label_x, y_top, serial_label_w, height)
    c.setFont(FONT_B, FS_BODY)
    c.drawString(serial_label_x + CELL_PAD, label_baseline, "LE S. No.:")

    serial_x = serial_label_x + serial_label_w
    draw_cell_box(c, serial_x, y_top, serial_w, height)
    serial = clip_text(le_serial_no, LE_SERIAL_MAX_W, FONT, FS_BODY)
    if serial:
        c.setFont(FONT, FS_BODY)
        c.drawString(serial_x + CELL_PAD, label_baseline, serial)

    if len(lines) > 1:
        LOGGER.debug("Remarks wrapped to %d lines (row height %.0f)", len(lines), height)
    return cursor.advance(height)


def _draw_measurements(c: Canvas, cursor: LayoutCursor, data: MaintenanceReportData) -> None:
    cols = PAGE2_COLUMNS
    vp = data.voltage_params
    rows = [
        cols["lamp_make"].cells(["Lamp Make and Model:", data.lamp_make]),
        cols["lamp_hours"].cells(
            [
                "Number of hours running:",
                data.lamp_hours,
                "Current lamp running hours:",
                data.current_lamp_hours,
            ]
        ),
        cols["voltage"].cells(["Voltage parameters", "P vs N", "P vs E", "N vs E"], labels="all"),
        cols["voltage"].cells(["", vp.pvn, vp.pve, vp.nve], labels="none"),
        cols["fl"].cells(["fL measurements:", "Before", "After"], labels="all"),
        cols["fl"].cells(["", data.fl_before, data.fl_after], labels="none"),
        cols["content_player"].cells(
            ["Content Player Model:", data.content_player, "AC Status:", data.ac_status]
        ),
        cols["le_status"].cells(["LE Status during PM:", data.le_status]),
    ]
    for cells in rows:
        draw_table_row(c, cursor, MARGIN, cells, ROW_H)

    draw_remarks_row(c, cursor, MARGIN, data.remarks, data.le_serial_no)


def _draw_left_column(c: Canvas, cursor: LayoutCursor, data: MaintenanceReportData) -> None:
    cols = PAGE2_COLUMNS
    screen = data.screen_info

    draw_table_row(
        c, cursor, LEFT_X, cols["software"].cells(["Software Version", data.software_version]), ROW_H
    )
    cursor.advance(SOFTWARE_STEP - ROW_H)

    draw_caption(c, cursor, LEFT_X, "Screen Information in metres", CAPTION_GAP)
    draw_table_row(
        c, cursor, LEFT_X, cols["screen"].cells(["", "Height", "Width", "Gain"], labels="all"), ROW_H
    )
    for label, dims in (("SCOPE", screen.scope), ("FLAT", screen.flat)):
        draw_table_row(
            c,
            cursor,
            LEFT_X,
            cols["screen"].cells([label, dims.height, dims.width, dims.gain]),
            ROW_H,
        )
    draw_table_row(
        c, cursor, LEFT_X, cols["screen_detail"].cells(["Screen Make", screen.make]), ROW_H
    )
    draw_table_row(
        c, cursor, LEFT_X, cols["screen_detail"].cells(["Throw Distance", data.throw_distance]), ROW_H
    )
    cursor.advance(BLOCK_GAP)

    draw_table_row(
        c,
        cursor,
        LEFT_X,
        cols["image_evaluation"].cells(["Image Evaluation", "OK - Yes/No"], labels="all"),
        ROW_H,
    )
    evaluation = data.image_evaluation
    for label, attr in IMAGE_EVALUATION_LABELS:
        value = normalize_yes_no(getattr(evaluation, attr))
        draw_table_row(
            c,
            cursor,
            LEFT_X,
            cols["image_evaluation"].cells([label, value], labels="none"),
            SMALL_ROW_H,
        )


def _draw_right_column(c: Canvas, cursor: LayoutCursor, data: MaintenanceReportData) -> None:
    cols = PAGE2_COLUMNS

    draw_table_row(
        c, cursor, RIGHT_X, cols["mcgd"].cells(["MCGD", "fL", "x", "y"], labels="all"), ROW_H
    )
    for label, reading in data.mcgd_data.rows():
        draw_table_row(
            c,
            cursor,
            RIGHT_X,
            cols["mcgd"].cells([label, reading.fl, reading.x, reading.y], labels="none"),
            ROW_H,
        )
    cursor.advance(BLOCK_GAP)

    draw_caption(c, cursor, RIGHT_X, "CIE XYZ Color Accuracy", CAPTION_GAP)
    draw_table_row(
        c,
        cursor,
        RIGHT_X,
        cols["mcgd"].cells(["Test Pattern", "x", "y", "fL"]),
        ROW_H,
    )
    for label, reading in (("BW Step-10 2K", data.cie_xyz_2k), ("BW Step-10 4K", data.cie_xyz_4k)):
        draw_table_row(
            c,
            cursor,
            RIGHT_X,
            cols["mcgd"].cells([label, reading.x, reading.y, reading.fl], labels="none"),
            ROW_H,
        )
    cursor.advance(BLOCK_GAP)

    draw_caption(c, cursor, RIGHT_X, "Recommended Parts", CAPTION_GAP)
    draw_table_row(
        c, cursor, RIGHT_X, cols["parts"].cells(["Part Name", "Part Number"], labels="all"), ROW_H
    )
    if data.recommended_parts:
        for part in data.recommended_parts:
            for idx, line in enumerate(split_part_description(part.description)):
                number = part.part_number if idx == 0 else ""
                draw_table_row(
                    c,
                    cursor,
                    RIGHT_X,
                    cols["parts"].cells([line, number], labels="none"),
                    SMALL_ROW_H,
                )
    else:
        draw_table_row(
            c, cursor, RIGHT_X, cols["parts"].cells(["None", "-"], labels="none"), SMALL_ROW_H
        )
    cursor.advance(PARTS_TAIL_GAP)


def _draw_air_pollution(c: Canvas, cursor: LayoutCursor, data: MaintenanceReportData) -> None:
    cols = PAGE2_COLUMNS["air_pollution"]
    ap = data.air_pollution
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols.cells(
            [
                "Air Pollution Level",
                "HCHO",
                "TVOC",
                "PM1.0",
                "PM2.5",
                "PM10",
                "Temperature C",
                "Humidity %",
            ],
            labels="all",
        ),
        ROW_H,
    )
    draw_table_row(
        c,
        cursor,
        MARGIN,
        cols.cells(
            [
                ap.air_pollution_level,
                ap.hcho,
                ap.tvoc,
                ap.pm100,
                ap.pm25,
                ap.pm10,
                ap.temperature,
                ap.humidity,
            ],
            labels="none",
        ),
        ROW_H,
    )


def _draw_signature(c: Canvas, image, x: float, label: str) -> None:
    if image is not None:
        src_w, src_h = image.getSize()
        w, h = clamp_scaled_size(src_w, src_h, SIGNATURE_SCALE, SIGNATURE_MAX_W, SIGNATURE_MAX_H)
        c.drawImage(image, x, SIGNATURE_IMAGE_Y, width=w, height=h, mask="auto")
    else:
        LOGGER.debug("No image for %r; drawing label only", label)
    c.setFillColor(_hex(REPORT_COLORS["ink"]))
    c.setFont(FONT_B, FS_CAPTION)
    c.drawString(x, SIGNATURE_LABEL_Y, label)


def draw_page2(
    c: Canvas, data: MaintenanceReportData, assets: ReportAssets
) -> tuple[LayoutCursor, LayoutCursor]:
    """Render page 2 and return the final ``(left, right)`` column cursors."""
    cursor = LayoutCursor(y=PAGE_H - TOP_OFFSET, bottom=BOTTOM_LIMIT, page_label="page 2")
    _draw_measurements(c, cursor, data)

    left = LayoutCursor(y=cursor.y, bottom=BOTTOM_LIMIT, page_label="page 2")
    right = LayoutCursor(y=cursor.y, bottom=BOTTOM_LIMIT, page_label="page 2")
    _draw_left_column(c, left, data)
    _draw_right_column(c, right, data)

    left.advance(AIR_POLLUTION_OFFSET)
    _draw_air_pollution(c, left, data)

    _draw_signature(c, assets.site_signature, SITE_SIGNATURE_X, "Client's Signature & Stamp")
    _draw_signature(c, assets.engineer_signature, ENGINEER_SIGNATURE_X, "Engineer's Signature")

    min(left, right, key=lambda cur: cur.y).warn_if_overflowed()
    return left, right
