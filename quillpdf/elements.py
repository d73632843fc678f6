"""Layout elements.

Every element keeps its own progress between render calls: a paragraph
remembers the run and character it stopped at, containers remember the child
or row they are working on. An element that made no progress on a call
returns an empty size and draws nothing, so the document can detect content
that will never fit on a page.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Set

from .base import Context, Element, RenderResult
from .exceptions import InvalidDataError
from .geometry import Margins, Position, Size
from .render import Area
from .style import Style, StyledString
from .wrap import Wrapper, words

logger = logging.getLogger(__name__)

DEFAULT_BULLET = "–"


###############################################################################
# Containers
###############################################################################


class LinearLayout(Element):
    """Stacks elements vertically."""

    def __init__(self, elements: Optional[Iterable[Element]] = None):
        self._elements: List[Element] = list(elements or [])
        self._render_idx = 0

    @classmethod
    def vertical(cls) -> "LinearLayout":
        return cls()

    def push(self, element: Element) -> None:
        self._elements.append(element)

    def element(self, element: Element) -> "LinearLayout":
        self.push(element)
        return self

    def __len__(self) -> int:
        return len(self._elements)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = RenderResult()
        area = area.copy()
        while area.size.height > 0 and self._render_idx < len(self._elements):
            element_result = self._elements[self._render_idx].render(context, area.copy(), style)
            area.add_offset(Position(0.0, element_result.size.height))
            result.size = result.size.stack_vertical(element_result.size)
            if element_result.has_more:
                result.has_more = True
                return result
            self._render_idx += 1
        result.has_more = self._render_idx < len(self._elements)
        return result


###############################################################################
# Text
###############################################################################


class Text(Element):
    """A single unwrapped line of text."""

    def __init__(self, text):
        self.text = StyledString.coerce(text)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        style = style.merge(self.text.style)
        font_cache = context.font_cache
        if area.print_str(font_cache, Position(), style, self.text.s):
            return RenderResult(
                size=Size(style.str_width(font_cache, self.text.s), style.line_height(font_cache))
            )
        return RenderResult(has_more=True)


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Paragraph(Element):
    """Wrapped text made of styled runs.

    Lines are broken at spaces and, with a hyphenator in the context, inside
    words. A word wider than the whole line ends the paragraph: the text
    after it is dropped and a warning is logged.

    The line height is taken from the paragraph style, so runs with a larger
    font than the paragraph may overlap the next line.
    """

    def __init__(self, text=None, alignment: Alignment = Alignment.LEFT):
        self._runs: List[StyledString] = []
        self.alignment = alignment
        self._render_idx = 0
        self._render_offset = 0
        self._style_applied = False
        if text is not None:
            self.push(text)

    @property
    def runs(self) -> Sequence[StyledString]:
        return tuple(self._runs)

    @property
    def text(self) -> str:
        return "".join(run.s for run in self._runs)

    def push(self, text) -> None:
        run = StyledString.coerce(text)
        self._runs.append(StyledString(run.s, run.style))

    def string(self, text) -> "Paragraph":
        self.push(text)
        return self

    def push_styled(self, text: str, style) -> None:
        self._runs.append(StyledString(text, Style.coerce(style)))

    def styled_string(self, text: str, style) -> "Paragraph":
        self.push_styled(text, style)
        return self

    def set_alignment(self, alignment: Alignment) -> None:
        self.alignment = alignment

    def aligned(self, alignment: Alignment) -> "Paragraph":
        self.set_alignment(alignment)
        return self

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = RenderResult()
        if self._render_idx >= len(self._runs):
            return result

        self._apply_style(style)
        area = area.copy()
        font_cache = context.font_cache
        # no room for a single line: report no progress instead of truncating
        if area.size.width <= 0 or not area.fits_line(font_cache, style):
            result.has_more = True
            return result
        # TODO: use the tallest run of each line once runs may change the font size
        height = style.line_height(font_cache)
        wrapper = Wrapper(
            words(self._runs[self._render_idx:], self._render_offset), context, area.size.width
        )
        for line in wrapper:
            width = sum(word.width(font_cache) for word in line)
            position = Position(self._get_offset(width, area.size.width), 0.0)
            section = area.text_section(font_cache, position, style)
            if section is None:
                result.has_more = True
                break
            with section:
                for word in line:
                    section.print_str(word.s, word.style)
                    self._advance(word.consumed)
            result.size = result.size.stack_vertical(Size(width, height))
            area.add_offset(Position(0.0, height))

        if wrapper.truncated and not result.has_more:
            self._render_idx = len(self._runs)
            self._render_offset = 0
        return result

    def _apply_style(self, style: Style) -> None:
        if self._style_applied:
            return
        for run in self._runs:
            run.style = style.merge(run.style)
        self._style_applied = True

    def _advance(self, consumed: int) -> None:
        self._render_offset += consumed
        while (
            self._render_idx < len(self._runs)
            and self._render_offset >= len(self._runs[self._render_idx].s)
        ):
            self._render_offset -= len(self._runs[self._render_idx].s)
            self._render_idx += 1

    def _get_offset(self, width: float, max_width: float) -> float:
        if self.alignment is Alignment.CENTER:
            return (max_width - width) / 2
        if self.alignment is Alignment.RIGHT:
            return max_width - width
        return 0.0


class Break(Element):
    """Vertical space of ``lines`` line heights; continues on the next page if needed."""

    def __init__(self, lines: float = 1.0):
        self._lines = float(lines)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = RenderResult()
        line_height = style.line_height(context.font_cache)
        if self._lines <= 0 or line_height <= 0:
            self._lines = 0.0
            return result

        break_height = line_height * self._lines
        available = area.size.height
        if break_height <= available:
            result.size = Size(0.0, break_height)
            self._lines = 0.0
        else:
            result.size = Size(0.0, available)
            self._lines -= available / line_height
            result.has_more = True
        return result


###############################################################################
# Wrappers
###############################################################################


class PaddedElement(Element):
    """Adds padding around an element.

    The bottom padding is added to the reported height but not reserved in
    the area given to the element.
    """

    def __init__(self, element: Element, padding):
        self.element = element
        self.padding = Margins.coerce(padding)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        available = area.size.height
        inner = area.copy()
        inner.add_margins(Margins(self.padding.top, self.padding.right, 0.0, self.padding.left))
        result = self.element.render(context, inner, style)
        if result.has_more and result.size.is_zero():
            return result
        result.size = Size(
            result.size.width + self.padding.left + self.padding.right,
            min(available, result.size.height + self.padding.top + self.padding.bottom),
        )
        return result


class StyledElement(Element):
    """Merges a style onto the style of the wrapped element."""

    def __init__(self, element: Element, style):
        self.element = element
        self.style = Style.coerce(style)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        return self.element.render(context, area, style.merge(self.style))


class FramedElement(Element):
    """Draws a frame around an element.

    The top line is only drawn on the first page the element appears on and
    the bottom line only on the page where it ends.
    """

    def __init__(self, element: Element, line_style=None):
        self.element = element
        self.line_style = Style.coerce(line_style)
        self._is_first = True

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = self.element.render(context, area.copy(), style)
        if result.has_more and result.size.is_zero():
            return result

        line_style = style.merge(self.line_style)
        width = area.size.width
        height = result.size.height
        area.draw_line([Position(0.0, 0.0), Position(0.0, height)], line_style)
        area.draw_line([Position(width, 0.0), Position(width, height)], line_style)
        if self._is_first:
            area.draw_line([Position(0.0, 0.0), Position(width, 0.0)], line_style)
        if not result.has_more:
            area.draw_line([Position(0.0, height), Position(width, height)], line_style)
        self._is_first = False
        return result


###############################################################################
# Lists
###############################################################################


class BulletPoint(Element):
    """An indented element with a bullet drawn left of its first line."""

    def __init__(
        self,
        element: Element,
        bullet: str = DEFAULT_BULLET,
        indent: float = 10.0,
        bullet_space: float = 2.0,
    ):
        self.element = element
        self.bullet = bullet
        self.indent = indent
        self.bullet_space = bullet_space
        self._bullet_rendered = False

    def set_bullet(self, bullet: str) -> None:
        self.bullet = bullet

    def with_bullet(self, bullet: str) -> "BulletPoint":
        self.set_bullet(bullet)
        return self

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        element_area = area.copy()
        element_area.add_offset(Position(self.indent, 0.0))
        result = self.element.render(context, element_area, style)
        if result.has_more and result.size.is_zero():
            return result

        result.size = Size(result.size.width + self.indent, result.size.height)
        if not self._bullet_rendered:
            font_cache = context.font_cache
            bullet_width = style.str_width(font_cache, self.bullet)
            position = Position(self.indent - bullet_width - self.bullet_space, 0.0)
            area.print_str(font_cache, position, style, self.bullet)
            self._bullet_rendered = True
        return result


class UnorderedList(Element):
    """A list with the same bullet in front of every item."""

    def __init__(self, bullet: Optional[str] = None):
        self._layout = LinearLayout.vertical()
        self.bullet = bullet

    @classmethod
    def with_bullet(cls, bullet: str) -> "UnorderedList":
        return cls(bullet)

    def push(self, element: Element) -> None:
        point = BulletPoint(element)
        if self.bullet is not None:
            point.set_bullet(self.bullet)
        self._layout.push(point)

    def element(self, element: Element) -> "UnorderedList":
        self.push(element)
        return self

    def __len__(self) -> int:
        return len(self._layout)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        return self._layout.render(context, area, style)


class OrderedList(Element):
    """A list numbered ``start.``, ``start + 1.`` and so on."""

    def __init__(self, start: int = 1):
        self._layout = LinearLayout.vertical()
        self._number = start

    @classmethod
    def with_start(cls, start: int) -> "OrderedList":
        return cls(start)

    def push(self, element: Element) -> None:
        self._layout.push(BulletPoint(element, bullet=f"{self._number}."))
        self._number += 1

    def element(self, element: Element) -> "OrderedList":
        self.push(element)
        return self

    def __len__(self) -> int:
        return len(self._layout)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        return self._layout.render(context, area, style)


###############################################################################
# Tables
###############################################################################


class CellDecorator(ABC):
    """Draws decorations for the cells of a :class:`TableLayout`."""

    def set_table_size(self, num_columns: int, num_rows: int) -> None:
        """Called before the cells of a table are decorated."""

    @abstractmethod
    def decorate_cell(
        self, column: int, row: int, has_more: bool, area: Area, style: Style
    ) -> None:
        """Decorates a cell that was rendered into ``area`` on this page."""


class FrameCellDecorator(CellDecorator):
    """Draws lines around table cells.

    ``inner`` lines separate cells, ``outer`` lines surround the table and
    ``cont`` lines close a row that continues on the next page.
    """

    def __init__(self, inner: bool, outer: bool, cont: bool, line_style=None):
        self.inner = inner
        self.outer = outer
        self.cont = cont
        self.line_style = Style.coerce(line_style)
        self.num_columns = 0
        self.num_rows = 0
        self.last_row: Optional[int] = None

    def set_table_size(self, num_columns: int, num_rows: int) -> None:
        self.num_columns = num_columns
        self.num_rows = num_rows

    def print_left(self, column: int) -> bool:
        return self.outer if column == 0 else self.inner

    def print_right(self, column: int) -> bool:
        return self.outer if column + 1 == self.num_columns else self.inner

    def print_top(self, row: int) -> bool:
        if self.last_row is None or row > self.last_row:
            return self.outer if row == 0 else self.inner
        return self.cont

    def print_bottom(self, row: int, has_more: bool) -> bool:
        if has_more:
            return self.cont
        return self.outer if row + 1 == self.num_rows else self.inner

    def decorate_cell(
        self, column: int, row: int, has_more: bool, area: Area, style: Style
    ) -> None:
        line_style = style.merge(self.line_style)
        size = area.size
        if self.print_left(column):
            area.draw_line([Position(0.0, 0.0), Position(0.0, size.height)], line_style)
        if self.print_right(column):
            area.draw_line(
                [Position(size.width, 0.0), Position(size.width, size.height)], line_style
            )
        if self.print_top(row):
            area.draw_line([Position(0.0, 0.0), Position(size.width, 0.0)], line_style)
        if self.print_bottom(row, has_more):
            area.draw_line(
                [Position(0.0, size.height), Position(size.width, size.height)], line_style
            )
        if column + 1 == self.num_columns:
            self.last_row = row


class TableLayoutRow:
    """Collects the cells of one row before adding it to a table."""

    def __init__(self, table: "TableLayout"):
        self._table = table
        self._elements: List[Element] = []

    def push_element(self, element: Element) -> None:
        self._elements.append(element)

    def element(self, element: Element) -> "TableLayoutRow":
        self.push_element(element)
        return self

    def push(self) -> None:
        """Appends the row to the table; fails if the cell count is wrong."""
        self._table.push_row(self._elements)


class TableLayout(Element):
    """Arranges elements in rows and weighted columns.

    A row is finished once all of its cells are finished. If a cell does not
    fit, the row continues on the next page. Only the unfinished cells of a
    continued row are rendered again; a finished cell keeps its empty slot
    (still decorated) so it is never drawn twice.
    """

    def __init__(self, column_weights: Sequence[int]):
        weights = [int(weight) for weight in column_weights]
        if any(weight < 0 for weight in weights) or (weights and sum(weights) == 0):
            raise InvalidDataError("Invalid column weights", details=repr(weights))
        self.column_weights = weights
        self._rows: List[List[Element]] = []
        self._render_idx = 0
        self._done_cells: Set[int] = set()
        self._cell_decorator: Optional[CellDecorator] = None

    @property
    def num_rows(self) -> int:
        return len(self._rows)

    def set_cell_decorator(self, decorator: CellDecorator) -> None:
        self._cell_decorator = decorator

    def row(self) -> TableLayoutRow:
        return TableLayoutRow(self)

    def push_row(self, row: Iterable[Element]) -> None:
        row = list(row)
        if len(row) != len(self.column_weights):
            logger.error(
                "Rejected table row with %d cells, the table has %d columns",
                len(row),
                len(self.column_weights),
            )
            raise InvalidDataError(
                f"Expected {len(self.column_weights)} elements in table row, received {len(row)}"
            )
        self._rows.append(row)

    def render(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = RenderResult()
        if not self.column_weights:
            return result
        if self._cell_decorator is not None:
            self._cell_decorator.set_table_size(len(self.column_weights), len(self._rows))

        width = area.size.width
        area = area.copy()
        height = 0.0
        while self._render_idx < len(self._rows):
            row_result = self._render_row(context, area.copy(), style)
            height += row_result.size.height
            area.add_offset(Position(0.0, row_result.size.height))
            if row_result.has_more:
                break
            self._render_idx += 1

        result.has_more = self._render_idx < len(self._rows)
        if height > 0 or not result.has_more:
            result.size = Size(width, height)
        return result

    def _render_row(self, context: Context, area: Area, style: Style) -> RenderResult:
        result = RenderResult()
        areas = area.split_horizontally(self.column_weights)
        row_height = 0.0
        for column, (cell_area, element) in enumerate(zip(areas, self._rows[self._render_idx])):
            if column in self._done_cells:
                continue
            cell_result = element.render(context, cell_area.copy(), style)
            if cell_result.has_more:
                result.has_more = True
            else:
                self._done_cells.add(column)
            row_height = max(row_height, cell_result.size.height)

        if result.has_more and row_height == 0:
            return result

        result.size = Size(area.size.width, row_height)
        if self._cell_decorator is not None:
            for column, cell_area in enumerate(areas):
                cell_area.set_height(row_height)
                self._cell_decorator.decorate_cell(
                    column, self._render_idx, result.has_more, cell_area, style
                )
        if not result.has_more:
            self._done_cells.clear()
        return result
