"""
Pytest configuration for quillpdf
"""

import logging
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import reportlab

from quillpdf.base import Context
from quillpdf.fonts import Builtin, FontCache, builtin_family
from quillpdf.geometry import PaperSize, Position
from quillpdf.render import Area, Renderer, TextSection
from quillpdf.style import Style

VERA_DIR = Path(reportlab.__file__).resolve().parent / "fonts"


@pytest.fixture(autouse=True)
def configure_logging():
    """Configure logging for tests to avoid file handler issues."""
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.WARNING)  # Only show warnings and errors during tests
    console_handler.setFormatter(logging.Formatter("%(name)s - %(levelname)s - %(message)s"))

    root_logger.addHandler(console_handler)
    root_logger.setLevel(logging.WARNING)

    yield

    root_logger.handlers.clear()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    import tempfile

    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def vera_path():
    """Path to the Bitstream Vera font shipped with reportlab."""
    path = VERA_DIR / "Vera.ttf"
    if not path.exists():
        pytest.skip("reportlab does not ship Vera.ttf")
    return path


@pytest.fixture
def font_family():
    return builtin_family(Builtin.HELVETICA)


@pytest.fixture
def font_cache(font_family):
    return FontCache(font_family)


@pytest.fixture
def context(font_cache):
    return Context(font_cache)


@pytest.fixture
def renderer(font_cache):
    renderer = Renderer(PaperSize.A4, "test")
    font_cache.load_pdf_fonts(renderer)
    return renderer


@pytest.fixture
def area(renderer):
    return renderer.first_page().area()


@pytest.fixture
def style():
    return Style()


@pytest.fixture
def printed():
    """Records every string printed through a text section."""
    calls = []
    original = TextSection.print_str

    def record(section, text, style):
        calls.append(text)
        return original(section, text, style)

    with patch.object(TextSection, "print_str", autospec=True, side_effect=record):
        yield calls


@pytest.fixture
def drawn_lines():
    """Records every line drawn on an area as absolute page positions."""
    calls = []
    original = Area.draw_line

    def record(area, points, style=None):
        calls.append([area.origin + Position.coerce(point) for point in points])
        return original(area, points, style)

    with patch.object(Area, "draw_line", autospec=True, side_effect=record):
        yield calls
