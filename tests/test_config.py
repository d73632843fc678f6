"""Tests for DocumentConfig."""

import pytest

from quillpdf.config import DEFAULT_FOOTER_HEIGHT, DocumentConfig
from quillpdf.exceptions import InvalidDataError
from quillpdf.geometry import Margins, PaperSize, Size


class TestDocumentConfig:
    """Test configuration values and validation."""

    def test_defaults(self):
        config = DocumentConfig()
        assert config.paper_size == PaperSize.A4.size
        assert config.margins is None
        assert config.footer_height == DEFAULT_FOOTER_HEIGHT
        assert config.content_height == pytest.approx(297)

    def test_coercion(self):
        config = DocumentConfig(paper_size=(100, 150), margins=(10, 5))
        assert config.paper_size == Size(100, 150)
        assert config.margins == Margins.vh(10, 5)
        assert config.content_height == pytest.approx(130)

    def test_from_dict(self):
        config = DocumentConfig.from_dict({"title": "Report", "paper_size": PaperSize.LETTER, "font_size": 11})
        assert config.title == "Report"
        assert config.paper_size == PaperSize.LETTER.size
        assert config.font_size == 11

    def test_unknown_keys(self):
        with pytest.raises(InvalidDataError) as excinfo:
            DocumentConfig.from_dict({"title": "x", "colour": "red"})
        assert "colour" in str(excinfo.value)

    def test_to_dict(self):
        data = DocumentConfig(title="t", paper_size=(100, 100)).to_dict()
        assert data["title"] == "t"
        assert data["paper_size"] == {"width": 100, "height": 100}

    @pytest.mark.parametrize("footer_height", [-1, 297, 400])
    def test_invalid_footer_height(self, footer_height):
        with pytest.raises(InvalidDataError):
            DocumentConfig(footer_height=footer_height)

    @pytest.mark.parametrize("margins", [(50, 10), (60, 10, 40, 10)])
    def test_margins_leave_no_content(self, margins):
        with pytest.raises(InvalidDataError) as excinfo:
            DocumentConfig(paper_size=(100, 100), margins=margins)
        assert "no room for content" in str(excinfo.value)

    def test_invalid_paper_size(self):
        with pytest.raises(InvalidDataError):
            DocumentConfig(paper_size="A4")
