"""Documents and page decoration.

A :class:`Document` owns the font cache and a vertical layout with all
top-level elements. :meth:`Document.render` renders the layout page by page
until it has no more content and only then writes the PDF.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Callable, Optional, Union

from .base import Context, Element
from .config import DEFAULT_FOOTER_HEIGHT, DocumentConfig
from .elements import LinearLayout
from .exceptions import InternalError, OutputError, PageSizeExceededError
from .fonts import Builtin, Font, FontCache, FontData, FontFamily, from_files
from .geometry import Margins, PaperSize, Position, Size
from .render import Area, Renderer
from .style import Style
from .wrap import Hyphenator, create_hyphenator

logger = logging.getLogger(__name__)

PageCallback = Callable[[int], Element]


class PageDecorator(ABC):
    """Prepares every page before its content is rendered."""

    @abstractmethod
    def decorate_page(self, context: Context, area: Area, style: Style) -> Area:
        """Decorates a new page and returns the area left for the content."""

    def decorate_page_footer(self, context: Context, area: Area, style: Style) -> None:
        """Called with the full page area after the content of the page was rendered."""


class SimplePageDecorator(PageDecorator):
    """Page margins plus an optional header and footer.

    The header element is rendered at the top of the content area, the
    footer element into the bottom ``footer_height`` of the page. Both
    callbacks receive the 1-based page number.
    """

    def __init__(
        self,
        margins=None,
        header: Optional[PageCallback] = None,
        footer: Optional[PageCallback] = None,
        footer_height: float = DEFAULT_FOOTER_HEIGHT,
    ):
        self.page = 0
        self.margins = Margins.coerce(margins) if margins is not None else None
        self.header_cb = header
        self.footer_cb = footer
        self.footer_height = footer_height

    def set_margins(self, margins) -> None:
        self.margins = Margins.coerce(margins)

    def set_header(self, callback: PageCallback) -> None:
        self.header_cb = callback

    def set_footer(self, callback: PageCallback) -> None:
        self.footer_cb = callback

    def decorate_page(self, context: Context, area: Area, style: Style) -> Area:
        self.page += 1
        page_height = area.size.height
        area = area.copy()
        if self.margins is not None:
            area.add_margins(self.margins)
        if self.footer_cb is not None:
            footer_top = page_height - self.footer_height
            area.set_height(max(0.0, min(area.size.height, footer_top - area.origin.y)))
        if self.header_cb is not None:
            element = self.header_cb(self.page)
            result = element.render(context, area.copy(), style)
            area.add_offset(Position(0.0, result.size.height))
        return area

    def decorate_page_footer(self, context: Context, area: Area, style: Style) -> None:
        if self.footer_cb is None:
            return
        footer_area = area.copy()
        if self.margins is not None:
            footer_area.add_margins(Margins(0.0, self.margins.right, 0.0, self.margins.left))
        footer_area.add_offset(Position(0.0, footer_area.size.height - self.footer_height))
        self.footer_cb(self.page).render(context, footer_area, style)


class Document:
    """A PDF document.

    Elements are added with :meth:`push`. A document can only be rendered
    once because rendering consumes the state of its elements.
    """

    def __init__(
        self,
        default_font_family: FontFamily[FontData],
        config: Optional[DocumentConfig] = None,
    ):
        self._root = LinearLayout.vertical()
        self.title = ""
        self.paper_size: Size = PaperSize.A4.size
        self.style = Style()
        self.context = Context(FontCache(default_font_family))
        self.page_count = 0
        self._decorator: Optional[PageDecorator] = None
        self._footer_height = DEFAULT_FOOTER_HEIGHT
        self._rendered = False
        if config is not None:
            self.apply_config(config)

    @property
    def font_cache(self) -> FontCache:
        return self.context.font_cache

    def apply_config(self, config: DocumentConfig) -> None:
        self._footer_height = config.footer_height
        self.set_title(config.title)
        self.set_paper_size(config.paper_size)
        if config.font_size is not None:
            self.set_font_size(config.font_size)
        if config.line_spacing is not None:
            self.set_line_spacing(config.line_spacing)
        if config.margins is not None:
            self.set_margins(config.margins)
        if config.hyphenation_language:
            self.set_hyphenation_language(config.hyphenation_language)

    def add_font_family(self, font_family: FontFamily[FontData]) -> FontFamily[Font]:
        """Adds a font family to the cache; use the result in a style."""
        return self.font_cache.add_font_family(font_family)

    def load_font_family(
        self, directory: Union[str, Path], name: str, builtin: Optional[Builtin] = None
    ) -> FontFamily[Font]:
        return self.add_font_family(from_files(directory, name, builtin))

    def set_title(self, title: str) -> None:
        self.title = title

    def set_paper_size(self, paper_size) -> None:
        self.paper_size = Size.coerce(paper_size)

    def set_font_size(self, font_size: float) -> None:
        self.style = self.style.with_font_size(font_size)

    def set_line_spacing(self, line_spacing: float) -> None:
        self.style = self.style.with_line_spacing(line_spacing)

    def set_style(self, style) -> None:
        self.style = Style.coerce(style)

    def set_margins(self, margins) -> None:
        """Sets page margins, keeping the header and footer of a simple decorator."""
        if isinstance(self._decorator, SimplePageDecorator):
            self._decorator.set_margins(margins)
        else:
            self._decorator = SimplePageDecorator(margins, footer_height=self._footer_height)

    def set_page_decorator(self, decorator: PageDecorator) -> None:
        self._decorator = decorator

    def set_hyphenator(self, hyphenator: Optional[Hyphenator]) -> None:
        self.context.hyphenator = hyphenator

    def set_hyphenation_language(self, language: str) -> None:
        self.context.hyphenator = create_hyphenator(language)

    def push(self, element: Element) -> None:
        self._root.push(element)

    def render(self, stream: BinaryIO) -> None:
        """Renders the document and writes the PDF to ``stream``.

        Nothing is written if rendering fails.
        """
        if self._rendered:
            raise InternalError("The document has already been rendered")
        self._rendered = True

        logger.info("Rendering document %r", self.title or "untitled")
        renderer = Renderer(self.paper_size, self.title)
        self.font_cache.load_pdf_fonts(renderer)
        while True:
            page = renderer.last_page()
            area = page.area()
            if self._decorator is not None:
                area = self._decorator.decorate_page(self.context, area, self.style)
            result = self._root.render(self.context, area, self.style)
            if self._decorator is not None:
                self._decorator.decorate_page_footer(self.context, page.area(), self.style)
            if not result.has_more:
                break
            if result.size.is_zero():
                raise PageSizeExceededError(
                    "Could not fit an element on a new page", details=f"page {page.index + 1}"
                )
            renderer.add_page(self.paper_size)

        renderer.write(stream)
        self.page_count = renderer.page_count
        logger.info("Rendered %d page(s)", self.page_count)

    def render_to_bytes(self) -> bytes:
        buffer = BytesIO()
        self.render(buffer)
        return buffer.getvalue()

    def render_to_file(self, path: Union[str, Path]) -> None:
        """Renders the document into the file at ``path``, replacing it if it exists."""
        path = Path(path)
        data = self.render_to_bytes()
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise OutputError("Could not create file", details=str(path)) from exc
