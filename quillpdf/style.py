"""Text styles and styled strings.

A :class:`Style` is a set of optional overrides. Unset fields inherit from
whatever style the style is merged onto, so a style tree can be resolved by
merging from the root down to the leaf:

    >>> base = Style(font_size=10)
    >>> base.merge(Style(line_spacing=1.5).bold()).effective_font_size
    10.0

Bold and italic are sticky: once an ancestor sets them, merging can not clear
them again.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from functools import reduce
from typing import TYPE_CHECKING, Any, Iterable, Optional, Tuple, Union

from reportlab.lib import colors

from .exceptions import InvalidDataError
from .fonts import FontFamily, FontStyle

if TYPE_CHECKING:  # pragma: no cover
    from .fonts import Font, FontCache

DEFAULT_FONT_SIZE = 12.0
DEFAULT_LINE_SPACING = 1.0


@dataclass(frozen=True)
class Color:
    """A color in one of the RGB, CMYK or greyscale models, channels 0..255."""

    model: str
    values: Tuple[int, ...]

    def __post_init__(self) -> None:
        for value in self.values:
            if not 0 <= value <= 255:
                raise InvalidDataError(
                    "Color channel out of range", details=f"{value} not in 0..255"
                )

    @classmethod
    def rgb(cls, red: int, green: int, blue: int) -> "Color":
        return cls("rgb", (red, green, blue))

    @classmethod
    def cmyk(cls, cyan: int, magenta: int, yellow: int, key: int) -> "Color":
        return cls("cmyk", (cyan, magenta, yellow, key))

    @classmethod
    def greyscale(cls, value: int) -> "Color":
        return cls("greyscale", (value,))

    def to_reportlab(self) -> colors.Color:
        scaled = [value / 255.0 for value in self.values]
        if self.model == "cmyk":
            return colors.CMYKColor(*scaled)
        if self.model == "greyscale":
            return colors.Color(scaled[0], scaled[0], scaled[0])
        return colors.Color(*scaled)


class Effect(Enum):
    BOLD = "bold"
    ITALIC = "italic"


@dataclass(frozen=True)
class Style:
    """Optional text attributes merged along the element tree."""

    font_family: Optional[FontFamily] = None
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None
    color: Optional[Color] = None
    is_bold: bool = False
    is_italic: bool = False

    def __post_init__(self) -> None:
        if self.font_size is not None and self.font_size < 0:
            raise InvalidDataError("Font size must not be negative", details=str(self.font_size))
        if self.line_spacing is not None and self.line_spacing < 0:
            raise InvalidDataError(
                "Line spacing must not be negative", details=str(self.line_spacing)
            )

    @classmethod
    def coerce(cls, value: Any) -> "Style":
        """Turns ``None``, a color, an effect or a font family into a style."""
        if value is None:
            return cls()
        if isinstance(value, Style):
            return value
        if isinstance(value, Color):
            return cls(color=value)
        if isinstance(value, Effect):
            return cls(is_bold=value is Effect.BOLD, is_italic=value is Effect.ITALIC)
        if isinstance(value, FontFamily):
            return cls(font_family=value)
        raise InvalidDataError("Cannot build a style", details=repr(value))

    @classmethod
    def combine(cls, first: Any, second: Any) -> "Style":
        return cls.coerce(first).merge(second)

    @classmethod
    def from_iterable(cls, values: Iterable[Any]) -> "Style":
        return reduce(cls.combine, values, cls())

    def merge(self, other: Any) -> "Style":
        """Returns this style overridden by the set fields of ``other``."""
        other = Style.coerce(other)
        return Style(
            font_family=_pick(other.font_family, self.font_family),
            font_size=_pick(other.font_size, self.font_size),
            line_spacing=_pick(other.line_spacing, self.line_spacing),
            color=_pick(other.color, self.color),
            is_bold=self.is_bold or other.is_bold,
            is_italic=self.is_italic or other.is_italic,
        )

    def bold(self) -> "Style":
        return dataclasses.replace(self, is_bold=True)

    def italic(self) -> "Style":
        return dataclasses.replace(self, is_italic=True)

    def with_font_family(self, font_family: FontFamily) -> "Style":
        return dataclasses.replace(self, font_family=font_family)

    def with_font_size(self, font_size: float) -> "Style":
        return dataclasses.replace(self, font_size=font_size)

    def with_line_spacing(self, line_spacing: float) -> "Style":
        return dataclasses.replace(self, line_spacing=line_spacing)

    def with_color(self, color: Color) -> "Style":
        return dataclasses.replace(self, color=color)

    @property
    def effective_font_size(self) -> float:
        return float(self.font_size) if self.font_size is not None else DEFAULT_FONT_SIZE

    @property
    def effective_line_spacing(self) -> float:
        if self.line_spacing is not None:
            return float(self.line_spacing)
        return DEFAULT_LINE_SPACING

    @property
    def font_style(self) -> FontStyle:
        return FontStyle.from_flags(self.is_bold, self.is_italic)

    def font(self, font_cache: "FontCache") -> "Font":
        family = self.font_family or font_cache.default_font_family
        return family.get(self.font_style)

    def char_width(self, font_cache: "FontCache", char: str) -> float:
        return self.font(font_cache).char_width(font_cache, char, self.effective_font_size)

    def str_width(self, font_cache: "FontCache", text: str) -> float:
        """Width of ``text`` in mm, kerning included."""
        return self.font(font_cache).str_width(font_cache, text, self.effective_font_size)

    def line_height(self, font_cache: "FontCache") -> float:
        font = self.font(font_cache)
        return font.get_line_height(self.effective_font_size) * self.effective_line_spacing


def _pick(preferred, fallback):
    return preferred if preferred is not None else fallback


@dataclass
class StyledString:
    """An owned string with a style."""

    s: str
    style: Style = field(default_factory=Style)

    @classmethod
    def coerce(cls, value: Union["StyledString", "StyledStr", str]) -> "StyledString":
        if isinstance(value, StyledString):
            return value
        if isinstance(value, StyledStr):
            return cls(value.s, value.style)
        return cls(str(value))

    def width(self, font_cache: "FontCache") -> float:
        return self.style.str_width(font_cache, self.s)

    def __str__(self) -> str:
        return self.s


@dataclass(frozen=True)
class StyledStr:
    """A styled view of ``source[start:end]``.

    ``mark`` is appended when printing but is not part of the source text,
    e.g. the hyphen added when a word is split.
    """

    source: str
    start: int
    end: int
    style: Style = field(default_factory=Style)
    mark: str = ""

    @classmethod
    def of(cls, text: str, style: Optional[Style] = None) -> "StyledStr":
        return cls(text, 0, len(text), style or Style())

    @property
    def s(self) -> str:
        return self.source[self.start:self.end] + self.mark

    @property
    def text(self) -> str:
        """The source text covered by this view, without the mark."""
        return self.source[self.start:self.end]

    @property
    def consumed(self) -> int:
        return self.end - self.start

    def width(self, font_cache: "FontCache") -> float:
        return self.style.str_width(font_cache, self.s)

    def slice(self, start: int, end: Optional[int] = None) -> "StyledStr":
        """Sub-view relative to this view's start."""
        stop = self.end if end is None else self.start + end
        return StyledStr(self.source, self.start + start, stop, self.style)

    def with_mark(self, mark: str) -> "StyledStr":
        return dataclasses.replace(self, mark=mark)

    def __str__(self) -> str:
        return self.s
