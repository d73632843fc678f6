"""Font loading and font metrics.

Fonts are owned by a :class:`FontCache`. Loading a :class:`FontFamily` of
:class:`FontData` into the cache yields a family of :class:`Font` handles;
a handle is an index into the cache that created it plus the vertical
metrics needed for layout. Handles are only valid for their own cache.

Two metric sources are supported:

* TrueType files, read with fontTools (advance widths from ``hmtx``,
  vertical metrics from ``hhea`` and pair kerning from ``kern``);
* the standard PDF fonts, whose metrics ship with reportlab.

A TrueType file can also be paired with a standard font name. Layout then
uses the file's metrics while the PDF references the standard font.
"""

from __future__ import annotations

import itertools
import logging
import struct
from dataclasses import dataclass
from enum import Enum
from io import BytesIO
from pathlib import Path
from typing import TYPE_CHECKING, Callable, Dict, Generic, Iterable, List, Optional, TypeVar, Union

from fontTools.ttLib import TTFont as FontToolsFont
from fontTools.ttLib import TTLibError
from reportlab.pdfbase import pdfmetrics

from .exceptions import InternalError, InvalidFontError, OutputError
from .geometry import pt_to_mm

if TYPE_CHECKING:  # pragma: no cover
    from .render import Renderer

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


class FontStyle(Enum):
    REGULAR = "Regular"
    BOLD = "Bold"
    ITALIC = "Italic"
    BOLD_ITALIC = "BoldItalic"

    @classmethod
    def from_flags(cls, bold: bool, italic: bool) -> "FontStyle":
        if bold and italic:
            return cls.BOLD_ITALIC
        if bold:
            return cls.BOLD
        if italic:
            return cls.ITALIC
        return cls.REGULAR

    @property
    def file_suffix(self) -> str:
        return self.value


class Builtin(Enum):
    """The three standard PDF font families."""

    TIMES = "Times"
    HELVETICA = "Helvetica"
    COURIER = "Courier"

    def font_name(self, style: FontStyle) -> str:
        return _BUILTIN_NAMES[self][style]


_BUILTIN_NAMES: Dict[Builtin, Dict[FontStyle, str]] = {
    Builtin.TIMES: {
        FontStyle.REGULAR: "Times-Roman",
        FontStyle.BOLD: "Times-Bold",
        FontStyle.ITALIC: "Times-Italic",
        FontStyle.BOLD_ITALIC: "Times-BoldItalic",
    },
    Builtin.HELVETICA: {
        FontStyle.REGULAR: "Helvetica",
        FontStyle.BOLD: "Helvetica-Bold",
        FontStyle.ITALIC: "Helvetica-Oblique",
        FontStyle.BOLD_ITALIC: "Helvetica-BoldOblique",
    },
    Builtin.COURIER: {
        FontStyle.REGULAR: "Courier",
        FontStyle.BOLD: "Courier-Bold",
        FontStyle.ITALIC: "Courier-Oblique",
        FontStyle.BOLD_ITALIC: "Courier-BoldOblique",
    },
}


class _TrueTypeMetrics:
    """Metrics of a TrueType font in em units."""

    def __init__(self, data: bytes):
        try:
            font = FontToolsFont(BytesIO(data))
            units_per_em = font["head"].unitsPerEm
            hhea = font["hhea"]
            self._cmap = font.getBestCmap() or {}
            self._advances = {name: metric[0] for name, metric in font["hmtx"].metrics.items()}
            kerning: Dict[tuple, int] = {}
            if "kern" in font:
                for table in font["kern"].kernTables:
                    if getattr(table, "format", None) == 0:
                        kerning.update(table.kernTable)
        except (TTLibError, KeyError, AssertionError, struct.error) as exc:
            raise InvalidFontError("Could not parse font data", details=str(exc)) from exc

        if not units_per_em:
            raise InvalidFontError("Font has no scalable metrics", details="unitsPerEm is 0")

        self._scale = 1.0 / units_per_em
        self.ascent = hhea.ascent * self._scale
        self.descent = hhea.descent * self._scale
        self.line_gap = hhea.lineGap * self._scale
        self._kerning = kerning
        self._missing_advance = self._advances.get(".notdef", 0)

    def advance(self, char: str) -> float:
        glyph = self._cmap.get(ord(char))
        if glyph is None:
            return self._missing_advance * self._scale
        return self._advances.get(glyph, self._missing_advance) * self._scale

    def kerning(self, left: str, right: str) -> float:
        if not self._kerning:
            return 0.0
        pair = (self._cmap.get(ord(left)), self._cmap.get(ord(right)))
        return self._kerning.get(pair, 0) * self._scale


class _StandardMetrics:
    """Metrics of a standard PDF font as bundled with reportlab."""

    def __init__(self, name: str):
        if name not in pdfmetrics.standardFonts:
            raise InvalidFontError("Unknown standard PDF font", details=name)
        self._name = name
        self.ascent, self.descent = pdfmetrics.getAscentDescent(name, 1)
        self.line_gap = 0.0

    def advance(self, char: str) -> float:
        return pdfmetrics.stringWidth(char, self._name, 1)

    def kerning(self, left: str, right: str) -> float:
        return 0.0


class FontData:
    """Font metrics plus the data needed to put the font into a PDF."""

    def __init__(
        self,
        metrics: Union[_TrueTypeMetrics, _StandardMetrics],
        raw_data: Optional[bytes] = None,
        builtin_name: Optional[str] = None,
    ):
        if raw_data is None and builtin_name is None:
            raise InternalError("Font data needs either font bytes or a builtin font name")
        self.metrics = metrics
        self.raw_data = raw_data
        self.builtin_name = builtin_name

    @classmethod
    def from_bytes(cls, data: bytes, builtin_name: Optional[str] = None) -> "FontData":
        """Parses a TrueType font.

        With ``builtin_name`` the font is only used for metrics and the PDF
        references the given standard font instead of embedding ``data``.
        """
        if builtin_name is not None and builtin_name not in pdfmetrics.standardFonts:
            raise InvalidFontError("Unknown standard PDF font", details=builtin_name)
        return cls(_TrueTypeMetrics(data), raw_data=data, builtin_name=builtin_name)

    @classmethod
    def load(cls, path: Union[str, Path], builtin_name: Optional[str] = None) -> "FontData":
        path = Path(path)
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise OutputError("Failed to open font file", details=str(path)) from exc
        logger.debug("Loaded font file %s", path)
        return cls.from_bytes(data, builtin_name)

    @classmethod
    def standard(cls, name: str) -> "FontData":
        return cls(_StandardMetrics(name), builtin_name=name)

    @property
    def is_builtin(self) -> bool:
        return self.builtin_name is not None


@dataclass(frozen=True)
class FontFamily(Generic[T]):
    regular: T
    bold: T
    italic: T
    bold_italic: T

    def get(self, style: FontStyle) -> T:
        if style is FontStyle.BOLD_ITALIC:
            return self.bold_italic
        if style is FontStyle.BOLD:
            return self.bold
        if style is FontStyle.ITALIC:
            return self.italic
        return self.regular

    def map(self, func: Callable[[T], U]) -> "FontFamily[U]":
        return FontFamily(
            regular=func(self.regular),
            bold=func(self.bold),
            italic=func(self.italic),
            bold_italic=func(self.bold_italic),
        )

    def __iter__(self):
        return iter((self.regular, self.bold, self.italic, self.bold_italic))


@dataclass(frozen=True)
class Font:
    """Handle to a font stored in a :class:`FontCache`.

    Lengths returned by the methods are millimetres, font sizes are points.
    """

    cache_id: int
    index: int
    is_builtin: bool
    ascent_em: float
    descent_em: float
    line_gap_em: float

    @property
    def line_height_em(self) -> float:
        return self.ascent_em - self.descent_em + self.line_gap_em

    def get_line_height(self, font_size: float) -> float:
        return pt_to_mm(font_size * self.line_height_em)

    def glyph_height(self, font_size: float) -> float:
        return pt_to_mm(font_size * (self.ascent_em - self.descent_em))

    def ascent(self, font_size: float) -> float:
        return pt_to_mm(font_size * self.ascent_em)

    def char_width(self, font_cache: "FontCache", char: str, font_size: float) -> float:
        metrics = font_cache.get_font_data(self).metrics
        return pt_to_mm(font_size * metrics.advance(char))

    def kerning(self, font_cache: "FontCache", chars: Iterable[str]) -> List[float]:
        """Kerning adjustment in em before each character of ``chars``."""
        metrics = font_cache.get_font_data(self).metrics
        offsets: List[float] = []
        previous: Optional[str] = None
        for char in chars:
            offsets.append(metrics.kerning(previous, char) if previous is not None else 0.0)
            previous = char
        return offsets

    def str_width(self, font_cache: "FontCache", text: str, font_size: float) -> float:
        metrics = font_cache.get_font_data(self).metrics
        width = sum(metrics.advance(char) for char in text)
        width += sum(self.kerning(font_cache, text))
        return pt_to_mm(font_size * width)


_cache_ids = itertools.count(1)


class FontCache:
    """Owns every font used by one document."""

    def __init__(self, default_font_family: FontFamily[FontData]):
        self._id = next(_cache_ids)
        self._fonts: List[FontData] = []
        self._pdf_fonts: Optional[List[str]] = None
        self.default_font_family: FontFamily[Font] = self.add_font_family(default_font_family)

    @property
    def cache_id(self) -> int:
        return self._id

    def __len__(self) -> int:
        return len(self._fonts)

    def add_font(self, font_data: FontData) -> Font:
        if self._pdf_fonts is not None:
            raise InternalError("Cannot add fonts after they were loaded into the PDF")
        metrics = font_data.metrics
        font = Font(
            cache_id=self._id,
            index=len(self._fonts),
            is_builtin=font_data.is_builtin,
            ascent_em=metrics.ascent,
            descent_em=metrics.descent,
            line_gap_em=metrics.line_gap,
        )
        self._fonts.append(font_data)
        return font

    def add_font_family(self, family: FontFamily[FontData]) -> FontFamily[Font]:
        return family.map(self.add_font)

    def load_pdf_fonts(self, renderer: "Renderer") -> None:
        """Registers every cached font with ``renderer``."""
        names = []
        for font_data in self._fonts:
            if font_data.is_builtin:
                names.append(renderer.add_builtin_font(font_data.builtin_name))
            else:
                names.append(renderer.add_embedded_font(font_data.raw_data))
        self._pdf_fonts = names
        logger.debug("Loaded %d fonts into the renderer", len(names))

    def get_font_data(self, font: Font) -> FontData:
        self._check(font)
        return self._fonts[font.index]

    def get_pdf_font(self, font: Font) -> str:
        self._check(font)
        if self._pdf_fonts is None:
            raise InternalError("Fonts have not been loaded into the renderer")
        return self._pdf_fonts[font.index]

    def _check(self, font: Font) -> None:
        if font.cache_id != self._id or font.index >= len(self._fonts):
            raise InternalError(
                "Font handle used with a font cache that did not create it",
                details=f"font cache {font.cache_id}, used with {self._id}",
            )


def builtin_family(builtin: Builtin) -> FontFamily[FontData]:
    """Font family backed by a standard PDF font, nothing is embedded."""
    return FontFamily(
        regular=FontData.standard(builtin.font_name(FontStyle.REGULAR)),
        bold=FontData.standard(builtin.font_name(FontStyle.BOLD)),
        italic=FontData.standard(builtin.font_name(FontStyle.ITALIC)),
        bold_italic=FontData.standard(builtin.font_name(FontStyle.BOLD_ITALIC)),
    )


def from_files(
    directory: Union[str, Path], name: str, builtin: Optional[Builtin] = None
) -> FontFamily[FontData]:
    """Loads ``{name}-Regular.ttf``, ``{name}-Bold.ttf``, ``{name}-Italic.ttf``
    and ``{name}-BoldItalic.ttf`` from ``directory``.
    """
    directory = Path(directory)

    def load(style: FontStyle) -> FontData:
        path = directory / f"{name}-{style.file_suffix}.ttf"
        return FontData.load(path, builtin.font_name(style) if builtin else None)

    return FontFamily(
        regular=load(FontStyle.REGULAR),
        bold=load(FontStyle.BOLD),
        italic=load(FontStyle.ITALIC),
        bold_italic=load(FontStyle.BOLD_ITALIC),
    )
