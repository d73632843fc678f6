"""Custom exceptions for quillpdf."""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    """Category of a :class:`QuillPdfError`."""

    INTERNAL = "internal"
    INVALID_DATA = "invalid_data"
    INVALID_FONT = "invalid_font"
    PAGE_SIZE_EXCEEDED = "page_size_exceeded"
    UNSUPPORTED_ENCODING = "unsupported_encoding"
    IO = "io"
    BACKEND = "backend"


class QuillPdfError(Exception):
    """Base exception for quillpdf errors.

    Every error carries a human-readable message and a :class:`ErrorKind`.
    """

    kind: ErrorKind = ErrorKind.INTERNAL

    def __init__(
        self,
        message: str,
        details: Optional[str] = None,
        kind: Optional[ErrorKind] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details
        if kind is not None:
            self.kind = kind

    def __str__(self) -> str:
        if self.details:
            return f"{self.message}: {self.details}"
        return self.message


class InternalError(QuillPdfError):
    """Raised when an internal invariant is violated."""

    kind = ErrorKind.INTERNAL


class InvalidDataError(QuillPdfError):
    """Raised for invalid input, e.g. a table row with the wrong cell count."""

    kind = ErrorKind.INVALID_DATA


class InvalidFontError(QuillPdfError):
    """Raised when a font cannot be used for layout."""

    kind = ErrorKind.INVALID_FONT


class PageSizeExceededError(QuillPdfError):
    """Raised when an element does not fit on an empty page."""

    kind = ErrorKind.PAGE_SIZE_EXCEEDED


class UnsupportedEncodingError(QuillPdfError):
    """Raised when a string cannot be encoded for a built-in PDF font."""

    kind = ErrorKind.UNSUPPORTED_ENCODING


class OutputError(QuillPdfError):
    """Raised when reading a font file or writing the document fails."""

    kind = ErrorKind.IO


class BackendError(QuillPdfError):
    """Raised when reportlab or fontTools fail."""

    kind = ErrorKind.BACKEND
