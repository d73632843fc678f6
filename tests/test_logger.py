"""Tests for the logging helpers."""

import logging
from io import StringIO

import pytest
from rich.console import Console
from rich.logging import RichHandler

from quillpdf.utils.logger import ROOT_LOGGER_NAME, get_logger, setup_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


class TestGetLogger:
    """Test logger naming."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            (None, "quillpdf"),
            ("quillpdf", "quillpdf"),
            ("elements", "quillpdf.elements"),
            ("quillpdf.render", "quillpdf.render"),
        ],
    )
    def test_names(self, name, expected):
        assert get_logger(name).name == expected


class TestSetupLogging:
    """Test handler configuration."""

    def test_rich_handler(self):
        console = Console(file=StringIO(), width=120)
        logger = setup_logging("DEBUG", console=console)
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0], RichHandler)

        get_logger("document").info("Rendered %d page(s)", 3)
        assert "Rendered 3 page(s)" in console.file.getvalue()

    def test_plain_handler(self):
        logger = setup_logging(logging.WARNING, use_rich=False)
        assert logger.level == logging.WARNING
        assert type(logger.handlers[0]) is logging.StreamHandler

    def test_repeated_setup_replaces_handlers(self):
        setup_logging("INFO")
        logger = setup_logging("INFO")
        assert len(logger.handlers) == 1

    def test_invalid_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")
