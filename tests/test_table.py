"""Tests for table layouts and cell decorators."""

import logging
from unittest.mock import patch

import pytest

from quillpdf.base import Element, RenderResult
from quillpdf.elements import FrameCellDecorator, Paragraph, TableLayout, Text
from quillpdf.exceptions import InvalidDataError
from quillpdf.geometry import Size


class Block(Element):
    """Element with a fixed height that continues in the next area."""

    def __init__(self, height):
        self.remaining = height
        self.calls = 0

    def render(self, context, area, style):
        self.calls += 1
        used = min(self.remaining, area.size.height)
        self.remaining -= used
        if used == 0 and self.remaining > 0:
            return RenderResult(has_more=True)
        return RenderResult(Size(area.size.width, used), self.remaining > 0)


def make_table(heights, decorator=None):
    table = TableLayout([1] * len(heights[0]))
    if decorator is not None:
        table.set_cell_decorator(decorator)
    for row in heights:
        table.push_row([Block(height) for height in row])
    return table


class TestRowValidation:
    """Rows are validated when they are added."""

    def test_wrong_cell_count(self, caplog):
        table = TableLayout([1, 1])
        with caplog.at_level(logging.ERROR, logger="quillpdf.elements"):
            with pytest.raises(InvalidDataError) as exc_info:
                table.push_row([Text("only one")])
        assert "Expected 2 elements in table row, received 1" in str(exc_info.value)
        assert table.num_rows == 0
        assert "Rejected table row" in caplog.text

    def test_row_builder(self):
        table = TableLayout([1, 2])
        table.row().element(Text("a")).element(Text("b")).push()
        assert table.num_rows == 1
        with pytest.raises(InvalidDataError):
            table.row().element(Text("c")).push()

    @pytest.mark.parametrize("weights", [[0, 0], [-1, 2]])
    def test_invalid_weights(self, weights):
        with pytest.raises(InvalidDataError):
            TableLayout(weights)


class TestTableRendering:
    """Test row handling across areas."""

    def test_all_rows_fit(self, context, area, style):
        table = make_table([[5, 10], [7, 3], [1, 1]])
        result = table.render(context, area, style)
        assert result == RenderResult(Size(210, 18), False)

    def test_row_continues(self, context, area, style):
        short, long = Block(5), Block(30)
        table = TableLayout([1, 1])
        table.push_row([Block(10), Block(10)])
        table.push_row([short, long])
        area.set_height(25)

        first = table.render(context, area, style)
        assert first.has_more
        assert first.size.height == 25

        second = table.render(context, area, style)
        assert not second.has_more
        assert second.size.height == 15
        assert short.calls == 1
        assert long.calls == 2

    def test_zero_area(self, context, area, style):
        area.set_height(0)
        table = make_table([[5, 5]])
        assert table.render(context, area, style) == RenderResult(Size(), True)

    @pytest.mark.parametrize("size", [(0, 0), (0, 297)])
    def test_no_room_for_paragraph_cells(self, context, area, style, printed, size):
        table = TableLayout([1, 1])
        table.push_row([Paragraph("left"), Paragraph("right")])
        area.set_size(size)
        assert table.render(context, area, style) == RenderResult(Size(), True)

        assert not table.render(context, area.page.area(), style).has_more
        assert printed == ["left", "right"]

    def test_no_columns(self, context, area, style):
        assert TableLayout([]).render(context, area, style) == RenderResult()

    def test_column_widths(self, context, area, style):
        widths = []

        class Probe(Element):
            def render(self, context, area, style):
                widths.append(area.size.width)
                return RenderResult()

        table = TableLayout([1, 3])
        table.push_row([Probe(), Probe()])
        table.render(context, area, style)
        assert widths == pytest.approx([52.5, 157.5])

    def test_paragraph_cells(self, context, area, style, printed):
        table = TableLayout([1, 1])
        table.row().element(Paragraph("left cell")).element(Paragraph("right cell")).push()
        assert not table.render(context, area, style).has_more
        assert "".join(printed) == "left cellright cell"


class TestFrameCellDecorator:
    """Test inner, outer and continuation borders."""

    def test_borders_without_page_breaks(self, context, area, style, drawn_lines):
        decorator = FrameCellDecorator(True, True, False)
        table = make_table([[5, 5], [5, 5], [5, 5]], decorator)
        original = FrameCellDecorator.decorate_cell
        with patch.object(
            FrameCellDecorator, "decorate_cell", autospec=True, side_effect=original
        ) as decorate:
            result = table.render(context, area, style)

        assert not result.has_more
        assert decorate.call_count == 6
        assert not any(call.args[3] for call in decorate.call_args_list)
        assert len(drawn_lines) == 24

    @pytest.mark.parametrize("cont, first_page, second_page", [(False, 14, 6), (True, 16, 8)])
    def test_continuation_borders(self, context, area, style, drawn_lines, cont, first_page, second_page):
        table = make_table([[10, 10], [30, 5]], FrameCellDecorator(True, True, cont))
        area.set_height(25)

        table.render(context, area, style)
        assert len(drawn_lines) == first_page

        drawn_lines.clear()
        table.render(context, area, style)
        assert len(drawn_lines) == second_page

    def test_outer_only(self, context, area, style, drawn_lines):
        table = make_table([[5, 5], [5, 5]], FrameCellDecorator(False, True, False))
        table.render(context, area, style)
        # only the outline of the table
        assert len(drawn_lines) == 8

    def test_border_predicates(self):
        decorator = FrameCellDecorator(inner=False, outer=True, cont=False)
        decorator.set_table_size(3, 2)
        assert decorator.print_left(0) and not decorator.print_left(1)
        assert decorator.print_right(2) and not decorator.print_right(1)
        assert decorator.print_top(0) and not decorator.print_top(1)
        assert decorator.print_bottom(1, False) and not decorator.print_bottom(0, False)
        assert not decorator.print_bottom(1, True)
