"""Geometry primitives for layout calculations.

All lengths are millimetres measured from the upper left corner of the
current area. Font sizes are points; use :func:`pt_to_mm` and
:func:`mm_to_pt` to move between the two.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Union

from reportlab.lib.units import mm as POINTS_PER_MM

from .exceptions import InvalidDataError


def mm_to_pt(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) * POINTS_PER_MM


def pt_to_mm(value: float | None) -> float:
    if value is None:
        return 0.0
    return float(value) / POINTS_PER_MM


@dataclass(slots=True)
class Position:
    x: float = 0.0
    y: float = 0.0

    @classmethod
    def coerce(cls, value: Union["Position", Iterable[float]]) -> "Position":
        if isinstance(value, Position):
            return cls(value.x, value.y)
        x, y = value
        return cls(float(x), float(y))

    def __add__(self, other: "Position") -> "Position":
        return Position(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Position") -> "Position":
        return Position(self.x - other.x, self.y - other.y)


@dataclass(slots=True)
class Size:
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def coerce(cls, value: Any) -> "Size":
        """Builds a size from a ``Size``, a ``PaperSize`` or a ``(width, height)`` pair."""
        if isinstance(value, Size):
            return cls(value.width, value.height)
        if isinstance(value, PaperSize):
            return value.size
        try:
            width, height = value
            return cls(float(width), float(height))
        except (TypeError, ValueError) as exc:
            raise InvalidDataError("Invalid size", details=repr(value)) from exc

    def is_zero(self) -> bool:
        return self.width == 0 and self.height == 0

    def stack_vertical(self, other: "Size") -> "Size":
        """Places ``other`` below this size: max width, summed height."""
        return Size(max(self.width, other.width), self.height + other.height)

    def stack_horizontal(self, other: "Size") -> "Size":
        """Places ``other`` right of this size: summed width, max height."""
        return Size(self.width + other.width, max(self.height, other.height))


@dataclass(slots=True)
class Margins:
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @classmethod
    def trbl(cls, top: float, right: float, bottom: float, left: float) -> "Margins":
        return cls(float(top), float(right), float(bottom), float(left))

    @classmethod
    def vh(cls, vertical: float, horizontal: float) -> "Margins":
        return cls.trbl(vertical, horizontal, vertical, horizontal)

    @classmethod
    def all(cls, value: float) -> "Margins":
        return cls.trbl(value, value, value, value)

    @classmethod
    def coerce(cls, value: Any) -> "Margins":
        """Accepts a ``Margins``, a number, a ``(vertical, horizontal)`` pair
        or a ``(top, right, bottom, left)`` tuple.
        """
        if isinstance(value, Margins):
            return cls(value.top, value.right, value.bottom, value.left)
        if isinstance(value, (int, float)):
            return cls.all(value)
        values = tuple(value)
        if len(values) == 2:
            return cls.vh(*values)
        if len(values) == 4:
            return cls.trbl(*values)
        raise InvalidDataError("Margins need 1, 2 or 4 values", details=repr(value))

    def __add__(self, other: "Margins") -> "Margins":
        return Margins(
            top=self.top + other.top,
            right=self.right + other.right,
            bottom=self.bottom + other.bottom,
            left=self.left + other.left,
        )


class PaperSize(Enum):
    """Common paper sizes in millimetres (width, height)."""

    A4 = (210.0, 297.0)
    LEGAL = (216.0, 356.0)
    LETTER = (216.0, 279.0)

    @property
    def size(self) -> Size:
        width, height = self.value
        return Size(width, height)
