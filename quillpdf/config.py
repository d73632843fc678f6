"""Document configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional

from .exceptions import InvalidDataError
from .geometry import Margins, PaperSize, Size

DEFAULT_FOOTER_HEIGHT = 15.0


@dataclass
class DocumentConfig:
    """Settings applied by :class:`~quillpdf.document.Document`.

    Lengths are millimetres, ``font_size`` is points.
    """

    title: str = ""
    paper_size: Any = PaperSize.A4
    margins: Any = None
    font_size: Optional[float] = None
    line_spacing: Optional[float] = None
    hyphenation_language: Optional[str] = None
    footer_height: float = DEFAULT_FOOTER_HEIGHT

    def __post_init__(self) -> None:
        self.paper_size = Size.coerce(self.paper_size)
        if self.margins is not None:
            self.margins = Margins.coerce(self.margins)
        if self.footer_height < 0:
            raise InvalidDataError("Footer height must not be negative", details=str(self.footer_height))
        if self.footer_height >= self.paper_size.height:
            raise InvalidDataError(
                "Footer height must be smaller than the page height",
                details=f"{self.footer_height} >= {self.paper_size.height}",
            )
        if self.content_height <= 0:
            raise InvalidDataError(
                "Margins leave no room for content", details=f"{self.content_height} mm"
            )

    @property
    def content_height(self) -> float:
        """Page height left for content with margins applied."""
        margins = self.margins or Margins()
        return self.paper_size.height - margins.top - margins.bottom

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DocumentConfig":
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise InvalidDataError("Unknown configuration keys", details=", ".join(unknown))
        return cls(**dict(data))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
