"""Tests for the renderer, areas and text sections."""

from io import BytesIO

import pytest

from quillpdf.exceptions import InternalError, UnsupportedEncodingError
from quillpdf.geometry import Margins, PaperSize, Position, Size, mm_to_pt
from quillpdf.render import Renderer, encode_win1252
from quillpdf.style import Color, Style


class TestRenderer:
    """Test page handling of the renderer."""

    def test_first_page(self, renderer):
        assert renderer.page_count == 1
        assert renderer.first_page().size == Size(210, 297)

    def test_add_page(self, renderer):
        page = renderer.add_page(PaperSize.LETTER)
        assert renderer.page_count == 2
        assert renderer.last_page() is page
        assert page.index == 1
        assert renderer.get_page(5) is None

    def test_only_last_page_is_drawable(self, renderer, style):
        first = renderer.first_page().area()
        renderer.add_page(PaperSize.A4)
        with pytest.raises(InternalError):
            first.draw_line([Position(0, 0), Position(10, 0)], style)

    def test_write(self, renderer, area, font_cache, style):
        area.print_str(font_cache, Position(10, 10), style, "Hello")
        output = BytesIO()
        renderer.write(output)
        assert output.getvalue().startswith(b"%PDF-")
        with pytest.raises(InternalError):
            renderer.add_page(PaperSize.A4)


class TestArea:
    """Test area geometry."""

    def test_margins(self, area):
        area.add_margins(Margins(10, 20, 30, 40))
        assert area.origin == Position(40, 10)
        assert area.size == Size(150, 257)

    def test_offset(self, area):
        area.add_offset(Position(5, 50))
        assert area.origin == Position(5, 50)
        assert area.size == Size(205, 247)

    def test_offset_never_negative(self, area):
        area.add_offset(Position(0, 500))
        assert area.size.height == 0

    def test_copy_is_independent(self, area):
        copy = area.copy()
        copy.add_offset(Position(0, 10))
        assert area.size.height == 297

    def test_split_horizontally(self, area):
        columns = area.split_horizontally([1, 2, 3])
        assert [column.size.width for column in columns] == pytest.approx([35, 70, 105])
        assert [column.origin.x for column in columns] == pytest.approx([0, 35, 105])
        assert all(column.size.height == 297 for column in columns)

    def test_split_with_zero_weights(self, area):
        with pytest.raises(InternalError):
            area.split_horizontally([0, 0])

    def test_transform(self, area):
        area.add_offset(Position(10, 20))
        assert area._transform(Position(0, 0)) == pytest.approx((mm_to_pt(10), mm_to_pt(277)))


class TestTextSection:
    """Test text output."""

    def test_print_str_fits(self, area, font_cache, style):
        assert area.print_str(font_cache, Position(0, 0), style, "Hello")

    def test_print_str_does_not_fit(self, area, font_cache, style):
        area.set_height(1)
        assert not area.print_str(font_cache, Position(0, 0), style, "Hello")

    def test_text_section_bounds(self, area, font_cache, style):
        line_height = style.line_height(font_cache)
        area.set_height(line_height * 2.5)
        with area.text_section(font_cache, Position(0, 0), style) as section:
            assert section.add_newline()
            assert not section.add_newline()
            assert section.cursor == Position(0, line_height)

    def test_no_section_below_area(self, area, font_cache, style):
        area.set_height(10)
        assert area.text_section(font_cache, Position(0, 9), style) is None

    def test_colored_text(self, area, font_cache):
        style = Style(color=Color.rgb(255, 0, 0))
        with area.text_section(font_cache, Position(0, 0), style) as section:
            section.print_str("red", style)
            section.print_str("black", Style())

    def test_builtin_font_encoding(self, area, font_cache, style):
        with pytest.raises(UnsupportedEncodingError):
            area.print_str(font_cache, Position(0, 0), style, "Zażółć")

    def test_draw_line(self, area, style):
        area.draw_line([Position(0, 0), Position(10, 10), Position(20, 0)], Style(color=Color.greyscale(128)))


class TestEncoding:
    """Test the Windows-1252 check for standard fonts."""

    def test_supported(self):
        assert encode_win1252("Grüße – €") == "Grüße – €".encode("cp1252")

    def test_unsupported(self):
        with pytest.raises(UnsupportedEncodingError):
            encode_win1252("漢字")
