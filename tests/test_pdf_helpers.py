"""Geometry tests for the drawing primitives using a recording canvas."""

from __future__ import annotations

import logging
from unittest.mock import MagicMock

import pytest

from pmreport.report.pdf_helpers import (
    FONT,
    FONT_B,
    FS_BODY,
    Cell,
    ColumnSpec,
    LayoutCursor,
    draw_caption,
    draw_section,
    draw_table_row,
    text_width,
)
from pmreport.report.pdf_layout import clamp_scaled_size, fit_logo_size
from pmreport.report.pdf_page1 import CONTENT_W, PAGE1_COLUMNS
from pmreport.report.pdf_page2 import LEFT_W, PAGE2_COLUMNS, RIGHT_W, draw_remarks_row


def _rects(c: MagicMock) -> list[tuple]:
    return [call.args for call in c.rect.call_args_list]


def _strings(c: MagicMock) -> list[tuple]:
    return [call.args for call in c.drawString.call_args_list]


class TestColumnSpec:
    def test_widths_must_sum_to_total(self) -> None:
        with pytest.raises(ValueError, match="sum to"):
            ColumnSpec((100, 100), 535)

    def test_cell_count_must_match(self) -> None:
        with pytest.raises(ValueError, match="Expected 2 cells"):
            ColumnSpec((100, 435), 535).cells(["only one"])

    def test_alternate_emphasis(self) -> None:
        cells = ColumnSpec((100, 150, 80, 205), 535).cells(["L1", "v1", "L2", None])
        assert [c.bold for c in cells] == [True, False, True, False]
        assert cells[3].text == ""

    @pytest.mark.parametrize(
        ("mode", "expected"),
        [
            ("all", [True, True, True]),
            ("none", [False, False, False]),
        ],
    )
    def test_emphasis_modes(self, mode: str, expected: list[bool]) -> None:
        cells = ColumnSpec((150, 150, 215), 515).cells(["a", "b", "c"], labels=mode)
        assert [c.bold for c in cells] == expected

    def test_cell_font_follows_emphasis(self) -> None:
        assert Cell("x", 10, bold=True).font == FONT_B
        assert Cell("x", 10).font == FONT


@pytest.mark.parametrize("name", sorted(PAGE1_COLUMNS))
def test_page1_rows_fill_content_width(name: str) -> None:
    assert sum(PAGE1_COLUMNS[name].widths) == CONTENT_W


def test_page2_rows_fill_their_column_width() -> None:
    left = {"software", "screen", "screen_detail", "image_evaluation"}
    right = {"mcgd", "parts"}
    for name, columns in PAGE2_COLUMNS.items():
        if name in left:
            assert sum(columns.widths) == LEFT_W, name
        elif name in right:
            assert sum(columns.widths) == RIGHT_W, name
        else:
            assert sum(columns.widths) == 515, name


class TestDrawTableRow:
    def test_draws_one_box_per_cell_and_advances(self) -> None:
        c = MagicMock()
        cursor = LayoutCursor(y=700)
        cells = ColumnSpec((100, 435), 535).cells(["Address:", "Saket"])
        new_y = draw_table_row(c, cursor, 40, cells, 20)

        assert new_y == 680
        assert cursor.y == 680
        assert _rects(c) == [(40, 680, 100, 20), (140, 680, 435, 20)]
        baseline = 700 - 20 + 10 - 3
        assert _strings(c) == [(43, baseline, "Address:"), (143, baseline, "Saket")]

    def test_label_cells_use_bold_font(self) -> None:
        c = MagicMock()
        cells = ColumnSpec((100, 435), 535).cells(["Address:", "Saket"])
        draw_table_row(c, LayoutCursor(y=700), 40, cells, 20)
        fonts = [call.args for call in c.setFont.call_args_list]
        assert fonts == [(FONT_B, FS_BODY), (FONT, FS_BODY)]

    def test_text_is_clipped_to_cell_width(self) -> None:
        c = MagicMock()
        long_text = "Very long cinema name that cannot possibly fit " * 3
        draw_table_row(c, LayoutCursor(y=700), 40, [Cell(long_text, 60)], 20)
        (_, _, drawn), = _strings(c)
        assert long_text.startswith(drawn)
        assert text_width(drawn) <= 60 - 6

    def test_empty_cells_draw_border_only(self) -> None:
        c = MagicMock()
        draw_table_row(c, LayoutCursor(y=700), 40, [Cell("", 100), Cell("", 100)], 20)
        assert len(_rects(c)) == 2
        c.drawString.assert_not_called()


class TestDrawSection:
    def test_label_cell_spans_all_items(self) -> None:
        c = MagicMock()
        cursor = LayoutCursor(y=500)
        items = [("Reflector", "Clean", "Yes"), ("UV filter", "", ""), ("Cold Mirror", "", "No")]
        draw_section(c, cursor, 40, "OPTICALS", items)

        rects = _rects(c)
        assert rects[0] == (40, 455, 120, 45)
        # three sub-cells per item
        assert len(rects) == 1 + 3 * len(items)
        assert rects[1] == (160, 485, 235, 15)
        assert rects[2] == (395, 485, 100, 15)
        assert rects[3] == (495, 485, 80, 15)
        assert cursor.y == 455

    def test_section_label_and_values_drawn(self) -> None:
        c = MagicMock()
        draw_section(c, LayoutCursor(y=500), 40, "Coolant", [("Level and Color", "Topped up", "Yes")])
        strings = _strings(c)
        assert strings[0] == (45, 490, "Coolant")
        assert (165, 490, "Level and Color") in strings
        assert (400, 490, "Topped up") in strings
        assert (500, 490, "Yes") in strings


class TestRemarksRow:
    def test_short_remarks_use_minimum_height(self) -> None:
        c = MagicMock()
        cursor = LayoutCursor(y=600)
        draw_remarks_row(c, cursor, 40, "All good", "LE-1")
        assert cursor.y == 560
        assert {r[3] for r in _rects(c)} == {40}
        assert (123, 600 - 12 + 4, "All good") in _strings(c)

    def test_long_unbroken_remarks_grow_the_row(self) -> None:
        c = MagicMock()
        cursor = LayoutCursor(y=600)
        remarks = "R" * 500
        draw_remarks_row(c, cursor, 40, remarks, "")

        text_lines = [s for s in _strings(c) if s[0] == 123]
        drawn = [s[2] for s in text_lines]
        assert "".join(drawn) == remarks
        assert all(text_width(line) <= 279 for line in drawn)

        height = max(40, len(drawn) * 12 + 8)
        assert cursor.y == 600 - height
        assert all(r[3] == height for r in _rects(c))
        # every line sits inside the row
        assert min(s[1] for s in text_lines) > 600 - height

    def test_serial_number_is_clipped(self) -> None:
        c = MagicMock()
        draw_remarks_row(c, LayoutCursor(y=600), 40, "", "LE-SERIAL-0000000000000000000000")
        serial = [s for s in _strings(c) if s[0] == 40 + 80 + 285 + 80 + 3]
        assert len(serial) == 1
        assert text_width(serial[0][2]) <= 64


class TestLayoutCursor:
    def test_overflow_is_reported(self, caplog: pytest.LogCaptureFixture) -> None:
        cursor = LayoutCursor(y=60, bottom=40, page_label="page 1")
        assert cursor.warn_if_overflowed() is False
        cursor.advance(50)
        assert cursor.overflow == 30
        with caplog.at_level(logging.WARNING):
            assert cursor.warn_if_overflowed() is True
        assert "page 1" in caplog.text


def test_draw_caption_advances_by_gap() -> None:
    c = MagicMock()
    cursor = LayoutCursor(y=300)
    draw_caption(c, cursor, 40, "Recommended Parts", 10)
    assert cursor.y == 290
    c.drawString.assert_called_once_with(40, 300, "Recommended Parts")


@pytest.mark.parametrize(
    ("src", "expected"),
    [
        ((600, 96), (120, 19.2)),  # wide logo limited by width
        ((60, 60), (24, 24)),  # square logo limited by height
        ((0, 50), (120, 24)),
    ],
)
def test_fit_logo_size_keeps_aspect(src: tuple[int, int], expected: tuple[float, float]) -> None:
    assert fit_logo_size(*src, 120, 24) == pytest.approx(expected)


def test_signature_sides_clamp_independently() -> None:
    assert clamp_scaled_size(600, 240, 0.25, 120, 50) == (120, 50)
    assert clamp_scaled_size(200, 100, 0.25, 120, 50) == (50, 25)
