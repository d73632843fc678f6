"""
quillpdf - document layout and PDF generation.

Build a tree of elements (paragraphs, lists, tables and wrappers), add it to
a :class:`Document` and render the document. The document paginates the
elements, wrapping text to the page width and continuing every element on
the next page where it stopped.

Main Components:
- Document: page-by-page render driver
- Elements: paragraphs, lists, tables, padded/framed/styled wrappers
- Style: mergeable text styles
- Fonts: font cache and metrics (reportlab standard fonts, TrueType via fontTools)
- Render: areas and text sections on top of the reportlab canvas
"""

from .base import Context, Element, RenderResult
from .config import DocumentConfig
from .document import Document, PageDecorator, SimplePageDecorator
from .elements import (
    Alignment,
    Break,
    BulletPoint,
    CellDecorator,
    FramedElement,
    FrameCellDecorator,
    LinearLayout,
    OrderedList,
    PaddedElement,
    Paragraph,
    StyledElement,
    TableLayout,
    TableLayoutRow,
    Text,
    UnorderedList,
)
from .exceptions import (
    BackendError,
    ErrorKind,
    InternalError,
    InvalidDataError,
    InvalidFontError,
    OutputError,
    PageSizeExceededError,
    QuillPdfError,
    UnsupportedEncodingError,
)
from .fonts import Builtin, Font, FontCache, FontData, FontFamily, FontStyle, builtin_family, from_files
from .geometry import Margins, PaperSize, Position, Size, mm_to_pt, pt_to_mm
from .style import Color, Effect, Style, StyledStr, StyledString

__version__ = "0.1.0"

__all__ = [
    "Alignment",
    "BackendError",
    "Break",
    "BulletPoint",
    "Builtin",
    "CellDecorator",
    "Color",
    "Context",
    "Document",
    "DocumentConfig",
    "Effect",
    "Element",
    "ErrorKind",
    "Font",
    "FontCache",
    "FontData",
    "FontFamily",
    "FontStyle",
    "FrameCellDecorator",
    "FramedElement",
    "InternalError",
    "InvalidDataError",
    "InvalidFontError",
    "LinearLayout",
    "Margins",
    "OrderedList",
    "OutputError",
    "PaddedElement",
    "PageDecorator",
    "PageSizeExceededError",
    "PaperSize",
    "Paragraph",
    "Position",
    "QuillPdfError",
    "RenderResult",
    "SimplePageDecorator",
    "Size",
    "Style",
    "StyledElement",
    "StyledStr",
    "StyledString",
    "TableLayout",
    "TableLayoutRow",
    "Text",
    "UnorderedList",
    "UnsupportedEncodingError",
    "builtin_family",
    "from_files",
    "mm_to_pt",
    "pt_to_mm",
]
