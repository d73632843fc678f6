"""The element render protocol."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Optional

from .fonts import FontCache
from .geometry import Size

if TYPE_CHECKING:  # pragma: no cover
    from .elements import FramedElement, PaddedElement, StyledElement
    from .render import Area
    from .style import Style
    from .wrap import Hyphenator


@dataclass
class RenderResult:
    """What an element placed during one render call.

    ``size`` is the space used from the origin of the area. ``has_more`` is
    true if the element has content left for the next area.
    """

    size: Size = field(default_factory=Size)
    has_more: bool = False


@dataclass
class Context:
    """Shared state for one document render pass."""

    font_cache: FontCache
    hyphenator: Optional["Hyphenator"] = None


class Element(ABC):
    """Base class for everything that can be rendered into an area.

    :meth:`render` is called once per page until it returns a result with
    ``has_more`` set to false. An element keeps track of what it already
    placed, so each call continues where the previous one stopped. An
    element that can not place anything must return an empty size.
    """

    @abstractmethod
    def render(self, context: Context, area: "Area", style: "Style") -> RenderResult:
        raise NotImplementedError

    def framed(self, line_style: Any = None) -> "FramedElement":
        from .elements import FramedElement

        return FramedElement(self, line_style)

    def padded(self, padding: Any) -> "PaddedElement":
        from .elements import PaddedElement

        return PaddedElement(self, padding)

    def styled(self, style: Any) -> "StyledElement":
        from .elements import StyledElement

        return StyledElement(self, style)
