"""Drawing primitives for the maintenance report.

All geometry is in PDF user-space points with the origin at the bottom-left
of the page.  Rows are drawn downward from a :class:`LayoutCursor`; every
primitive advances the cursor by exactly the height it drew.

The primitives only call ``rect``/``drawString``/``setFont``/``setLineWidth``/
``setStrokeColor``/``setFillColor`` on the canvas, so a ``MagicMock`` works as
a recording canvas in tests.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from reportlab.lib import colors
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen.canvas import Canvas

from ..report_theme import REPORT_COLORS

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Style tokens
# ---------------------------------------------------------------------------

FONT = "Times-Roman"
FONT_B = "Times-Bold"
FS_BODY = 8
FS_CAPTION = 10

BORDER_W = 0.5
CELL_PAD = 3
BASELINE_DROP = 3

SECTION_ROW_H = 15
SECTION_LABEL_W = 120
SECTION_COLUMN_WIDTHS = (235, 100, 80)
SECTION_TEXT_INSET = 5
SECTION_BASELINE = 10

REMARKS_LINE_H = 12
REMARKS_MIN_H = 40
REMARKS_PAD = 8

PART_NAME_SPLIT = 30

TextMeasure = Callable[[str, str, float], float]


def _hex(c: str) -> colors.Color:
    return colors.HexColor(c)


def text_width(text: str, font: str = FONT, size: float = FS_BODY) -> float:
    """Width of *text* in points using the font's own glyph metrics."""
    return stringWidth(text, font, size)


# ---------------------------------------------------------------------------
# Layout model
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Cell:
    """One bordered table cell; ``bold`` marks a label cell."""

    text: str
    width: float
    bold: bool = False

    @property
    def font(self) -> str:
        return FONT_B if self.bold else FONT


@dataclass(frozen=True)
class ColumnSpec:
    """Column widths of a table row and the content width they must fill."""

    widths: tuple[float, ...]
    total: float

    def __post_init__(self) -> None:
        if abs(sum(self.widths) - self.total) > 1e-6:
            raise ValueError(
                f"Column widths {self.widths} sum to {sum(self.widths)}, expected {self.total}"
            )

    def cells(
        self,
        texts: Sequence[str | None],
        *,
        labels: str = "alternate",
    ) -> list[Cell]:
        """Pair *texts* with the widths.

        ``labels`` selects emphasis: ``"alternate"`` makes even-indexed cells
        bold (label, value, label, value ...), ``"all"`` makes every cell bold
        (header rows) and ``"none"`` makes every cell regular (data rows).
        """
        if len(texts) != len(self.widths):
            raise ValueError(f"Expected {len(self.widths)} cells, got {len(texts)}")
        out: list[Cell] = []
        for idx, (text, width) in enumerate(zip(texts, self.widths, strict=True)):
            if labels == "all":
                bold = True
            elif labels == "none":
                bold = False
            else:
                bold = idx % 2 == 0
            out.append(Cell(text=text or "", width=width, bold=bold))
        return out


@dataclass
class LayoutCursor:
    """Running vertical position on one page."""

    y: float
    bottom: float = 0.0
    page_label: str = ""

    def advance(self, height: float) -> float:
        self.y -= height
        return self.y

    @property
    def overflow(self) -> float:
        """Points the cursor has descended below ``bottom`` (0 when it fits)."""
        return max(0.0, self.bottom - self.y)

    def warn_if_overflowed(self) -> bool:
        if self.overflow <= 0:
            return False
        LOGGER.warning(
            "Report %s content overflows the bottom margin by %.1f pt and will be clipped",
            self.page_label or "page",
            self.overflow,
        )
        return True


# ---------------------------------------------------------------------------
# Text fitting
# ---------------------------------------------------------------------------


def clip_text(
    text: str,
    max_width: float,
    font: str = FONT,
    size: float = FS_BODY,
    measure: TextMeasure = text_width,
) -> str:
    """Longest prefix of *text* that fits in *max_width*; the font never shrinks."""
    if not text or measure(text, font, size) <= max_width:
        return text or ""
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if measure(text[:mid], font, size) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo]


def wrap_text(
    text: str,
    max_width: float,
    font: str = FONT,
    size: float = FS_BODY,
    measure: TextMeasure = text_width,
) -> list[str]:
    """Greedy word wrap against measured widths.

    Words are appended to the current line while the line fits in
    *max_width*.  A word that does not fit starts a new line; a word that is
    wider than *max_width* on its own is broken character by character.
    Always returns at least one (possibly empty) line.
    """
    if not text:
        return [""]

    lines: list[str] = []
    current = ""
    for word in text.split(" "):
        candidate = f"{current} {word}" if current else word
        if measure(candidate, font, size) <= max_width:
            current = candidate
            continue
        if current:
            lines.append(current)
        if measure(word, font, size) > max_width:
            part = ""
            for ch in word:
                if measure(part + ch, font, size) <= max_width:
                    part += ch
                else:
                    if part:
                        lines.append(part)
                    part = ch
            current = part
        else:
            current = word

    if current:
        lines.append(current)
    return lines or [""]


def split_part_description(description: str) -> list[str]:
    """Split a part description at a fixed character count into at most two lines."""
    if len(description) > PART_NAME_SPLIT:
        return [description[:PART_NAME_SPLIT], description[PART_NAME_SPLIT:]]
    return [description]


def remarks_row_height(line_count: int) -> float:
    return max(REMARKS_MIN_H, line_count * REMARKS_LINE_H + REMARKS_PAD)


# ---------------------------------------------------------------------------
# Drawing primitives
# ---------------------------------------------------------------------------


def prepare_stroke(c: Canvas) -> None:
    c.setLineWidth(BORDER_W)
    c.setStrokeColor(_hex(REPORT_COLORS["border"]))
    c.setFillColor(_hex(REPORT_COLORS["ink"]))


def draw_cell_box(c: Canvas, x: float, y_top: float, width: float, height: float) -> None:
    c.rect(x, y_top - height, width, height, stroke=1, fill=0)


def draw_table_row(
    c: Canvas,
    cursor: LayoutCursor,
    x: float,
    cells: Sequence[Cell],
    height: float,
) -> float:
    """Draw one bordered row of *cells* and advance *cursor* by *height*.

    Text is left-aligned with a small inset, vertically centred, and clipped to
    the cell width minus both insets.  Returns the new cursor position.
    """
    prepare_stroke(c)
    y_top = cursor.y
    baseline = y_top - height + height / 2 - BASELINE_DROP
    cx = x
    for cell in cells:
        draw_cell_box(c, cx, y_top, cell.width, height)
        text = clip_text(cell.text, cell.width - 2 * CELL_PAD, cell.font, FS_BODY)
        if text:
            c.setFont(cell.font, FS_BODY)
            c.drawString(cx + CELL_PAD, baseline, text)
        cx += cell.width
    return cursor.advance(height)


def draw_section(
    c: Canvas,
    cursor: LayoutCursor,
    x: float,
    name: str,
    items: Sequence[tuple[str, str, str]],
) -> float:
    """Draw a labelled section: a tall label cell beside one row per item.

    Each item is ``(description, status, flag)`` drawn into the fixed
    description/status/flag sub-columns.
    """
    prepare_stroke(c)
    y_top = cursor.y
    total_h = SECTION_ROW_H * len(items)
    draw_cell_box(c, x, y_top, SECTION_LABEL_W, total_h)
    c.setFont(FONT_B, FS_BODY)
    c.drawString(
        x + SECTION_TEXT_INSET,
        y_top - SECTION_BASELINE,
        clip_text(name, SECTION_LABEL_W - 2 * SECTION_TEXT_INSET, FONT_B, FS_BODY),
    )

    c.setFont(FONT, FS_BODY)
    for idx, values in enumerate(items):
        item_top = y_top - idx * SECTION_ROW_H
        cx = x + SECTION_LABEL_W
        for width, value in zip(SECTION_COLUMN_WIDTHS, values, strict=True):
            draw_cell_box(c, cx, item_top, width, SECTION_ROW_H)
            text = clip_text(value or "", width - 2 * SECTION_TEXT_INSET, FONT, FS_BODY)
            if text:
                c.drawString(cx + SECTION_TEXT_INSET, item_top - SECTION_BASELINE, text)
            cx += width
    return cursor.advance(total_h)


def draw_caption(c: Canvas, cursor: LayoutCursor, x: float, text: str, gap: float) -> float:
    """Draw a bold caption at the cursor and advance by *gap*."""
    c.setFillColor(_hex(REPORT_COLORS["ink"]))
    c.setFont(FONT_B, FS_CAPTION)
    c.drawString(x, cursor.y, text)
    return cursor.advance(gap)
