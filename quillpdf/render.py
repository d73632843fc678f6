"""Low-level PDF rendering on top of the reportlab canvas.

Positions and sizes are millimetres relative to the upper left corner of an
:class:`Area`; the conversion to reportlab's bottom-left based points happens
in :meth:`Area._transform`.
"""

from __future__ import annotations

import itertools
import logging
from io import BytesIO
from typing import BinaryIO, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from .exceptions import BackendError, InternalError, OutputError, UnsupportedEncodingError
from .fonts import FontCache
from .geometry import Margins, Position, Size, mm_to_pt
from .style import Style

logger = logging.getLogger(__name__)

_embedded_font_ids = itertools.count(1)


def encode_win1252(text: str) -> bytes:
    """Encodes ``text`` for a standard PDF font or raises
    :class:`UnsupportedEncodingError`.
    """
    try:
        return text.encode("cp1252")
    except UnicodeEncodeError as exc:
        raise UnsupportedEncodingError(
            "Tried to print a string with characters that are not supported by the "
            "Windows-1252 encoding with a built-in font",
            details=text,
        ) from exc


class Renderer:
    """Collects the pages of one PDF document in memory."""

    def __init__(self, size, title: str = ""):
        size = Size.coerce(size)
        self._buffer = BytesIO()
        self._canvas = canvas.Canvas(self._buffer, pagesize=_pagesize(size))
        if title:
            self._canvas.setTitle(title)
        self._pages: List[Page] = [Page(self, size, 0)]
        self._embedded: List[str] = []
        self._finished = False

    @property
    def canvas(self) -> canvas.Canvas:
        if self._finished:
            raise InternalError("The document has already been written")
        return self._canvas

    @property
    def pages(self) -> Sequence["Page"]:
        return tuple(self._pages)

    @property
    def page_count(self) -> int:
        return len(self._pages)

    def first_page(self) -> "Page":
        return self._pages[0]

    def last_page(self) -> "Page":
        return self._pages[-1]

    def get_page(self, index: int) -> Optional["Page"]:
        if 0 <= index < len(self._pages):
            return self._pages[index]
        return None

    def add_page(self, size) -> "Page":
        """Finishes the current page and starts a new one of ``size``."""
        size = Size.coerce(size)
        self.canvas.showPage()
        self._canvas.setPageSize(_pagesize(size))
        page = Page(self, size, len(self._pages))
        self._pages.append(page)
        logger.debug("Added page %d (%.1f x %.1f mm)", page.index + 1, size.width, size.height)
        return page

    def add_builtin_font(self, name: str) -> str:
        if name not in pdfmetrics.standardFonts:
            raise BackendError("Unknown standard PDF font", details=name)
        return name

    def add_embedded_font(self, data: bytes) -> str:
        """Registers a TrueType font with reportlab and returns its PDF name."""
        name = f"QuillPdfFont{next(_embedded_font_ids)}"
        try:
            pdfmetrics.registerFont(TTFont(name, BytesIO(data)))
        except TTFError as exc:
            raise BackendError("Failed to embed font", details=str(exc)) from exc
        self._embedded.append(name)
        return name

    def write(self, stream: BinaryIO) -> None:
        """Writes the finished PDF to ``stream``; the renderer can not be used afterwards."""
        self.canvas.save()
        self._finished = True
        try:
            stream.write(self._buffer.getvalue())
        except OSError as exc:
            raise OutputError("Failed to write the PDF document", details=str(exc)) from exc


class Page:
    """A page of a :class:`Renderer`. Only the most recent page can be drawn on."""

    def __init__(self, renderer: Renderer, size: Size, index: int):
        self._renderer = renderer
        self.size = size
        self.index = index

    @property
    def canvas(self) -> canvas.Canvas:
        if self._renderer.last_page() is not self:
            raise InternalError(
                "Cannot draw on a finished page", details=f"page {self.index + 1}"
            )
        return self._renderer.canvas

    def area(self) -> "Area":
        return Area(self, Position(0.0, 0.0), Size(self.size.width, self.size.height))


class Area:
    """A rectangular part of a page that elements draw on."""

    def __init__(self, page: Page, origin: Position, size: Size):
        self._page = page
        self.origin = origin
        self._size = size

    @property
    def page(self) -> Page:
        return self._page

    @property
    def size(self) -> Size:
        return Size(self._size.width, self._size.height)

    def copy(self) -> "Area":
        return Area(self._page, Position(self.origin.x, self.origin.y), self.size)

    def add_margins(self, margins) -> None:
        margins = Margins.coerce(margins)
        self.origin = self.origin + Position(margins.left, margins.top)
        self._size = Size(
            max(0.0, self._size.width - margins.left - margins.right),
            max(0.0, self._size.height - margins.top - margins.bottom),
        )

    def add_offset(self, offset) -> None:
        """Moves the origin by ``offset`` and shrinks the area accordingly."""
        offset = Position.coerce(offset)
        self.origin = self.origin + offset
        self._size = Size(
            max(0.0, self._size.width - offset.x),
            max(0.0, self._size.height - offset.y),
        )

    def set_size(self, size) -> None:
        self._size = Size.coerce(size)

    def set_width(self, width: float) -> None:
        self._size = Size(width, self._size.height)

    def set_height(self, height: float) -> None:
        self._size = Size(self._size.width, height)

    def split_horizontally(self, weights: Sequence[int]) -> List["Area"]:
        """Splits the area into columns with widths proportional to ``weights``."""
        total = sum(weights)
        if total <= 0:
            raise InternalError("Cannot split an area with zero total weight")
        areas = []
        offset = 0.0
        for weight in weights:
            width = self._size.width * weight / total
            area = self.copy()
            area.origin = self.origin + Position(offset, 0.0)
            area.set_width(width)
            areas.append(area)
            offset += width
        return areas

    def draw_line(self, points: Sequence[Position], style: Optional[Style] = None) -> None:
        points = [self._transform(Position.coerce(point)) for point in points]
        if len(points) < 2:
            return
        pdf = self._page.canvas
        pdf.saveState()
        if style is not None and style.color is not None:
            pdf.setStrokeColor(style.color.to_reportlab())
        path = pdf.beginPath()
        path.moveTo(*points[0])
        for point in points[1:]:
            path.lineTo(*point)
        pdf.drawPath(path, stroke=1, fill=0)
        pdf.restoreState()

    def print_str(self, font_cache: FontCache, position, style: Style, text: str) -> bool:
        """Prints ``text`` at ``position``; returns ``False`` if the line does not fit."""
        section = self.text_section(font_cache, position, style)
        if section is None:
            return False
        with section:
            section.print_str(text, style)
        return True

    def text_section(
        self, font_cache: FontCache, position, style: Style
    ) -> Optional["TextSection"]:
        """Opens a text section with its first line at ``position``.

        Returns ``None`` if not even one line fits into the area.
        """
        position = Position.coerce(position)
        if not self.fits_line(font_cache, style, position.y):
            return None
        return TextSection(font_cache, self, position, style)

    def fits_line(self, font_cache: FontCache, style: Style, y: float = 0.0) -> bool:
        """Whether a line of ``style`` starting at ``y`` fits into the area."""
        font = style.font(font_cache)
        height = max(font.glyph_height(style.effective_font_size), style.line_height(font_cache))
        return y + height <= self._size.height

    def _transform(self, position: Position) -> tuple:
        absolute = self.origin + position
        return mm_to_pt(absolute.x), mm_to_pt(self._page.size.height - absolute.y)


class TextSection:
    """A run of text lines in an area, used as a context manager.

    The first line's top edge is the opening position. :meth:`add_newline`
    moves down by the line height of the opening style.
    """

    def __init__(self, font_cache: FontCache, area: Area, position: Position, style: Style):
        self._font_cache = font_cache
        self._area = area
        self._cursor = Position(position.x, position.y)
        self._line_height = style.line_height(font_cache)
        self._ascent = style.font(font_cache).ascent(style.effective_font_size)
        self._x = 0.0
        self._fill_color = None
        self._text = area.page.canvas.beginText()
        self._closed = False

    def __enter__(self) -> "TextSection":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def cursor(self) -> Position:
        return Position(self._cursor.x, self._cursor.y)

    def add_newline(self) -> bool:
        """Moves to the next line; returns ``False`` if it does not fit."""
        next_top = self._cursor.y + self._line_height
        if next_top + self._line_height > self._area.size.height:
            return False
        self._cursor = Position(self._cursor.x, next_top)
        self._x = 0.0
        return True

    def print_str(self, text: str, style: Style) -> None:
        font_cache = self._font_cache
        font = style.font(font_cache)
        if font.is_builtin:
            encode_win1252(text)
        pdf_font = font_cache.get_pdf_font(font)
        metrics = font_cache.get_font_data(font).metrics
        font_size = style.effective_font_size

        if style.color is not None:
            self._text.setFillColor(style.color.to_reportlab())
        elif self._fill_color is not None:
            self._text.setFillColor(colors.black)
        self._fill_color = style.color
        self._text.setFont(pdf_font, font_size)

        x_pt, y_pt = self._area._transform(Position(self._cursor.x, self._cursor.y + self._ascent))
        kerning = font.kerning(font_cache, text)
        for start, segment in _kerned_segments(text, kerning, metrics):
            self._text.setTextOrigin(x_pt + self._x + start * font_size, y_pt)
            self._text.textOut(segment)
        width = sum(metrics.advance(char) for char in text) + sum(kerning)
        self._x += width * font_size

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._fill_color is not None:
            self._text.setFillColor(colors.black)
        self._area.page.canvas.drawText(self._text)


def _kerned_segments(text: str, kerning: List[float], metrics) -> List[tuple]:
    """Splits ``text`` at every kerned character pair.

    Returns ``(start, segment)`` pairs with ``start`` in em from the start of
    ``text``.
    """
    segments = []
    current = ""
    start = 0.0
    x = 0.0
    for char, kern in zip(text, kerning):
        if kern and current:
            segments.append((start, current))
            current = ""
        x += kern
        if not current:
            start = x
        current += char
        x += metrics.advance(char)
    if current:
        segments.append((start, current))
    return segments


def _pagesize(size: Size) -> tuple:
    return mm_to_pt(size.width), mm_to_pt(size.height)
