"""Tests for logging setup."""

import io
import logging

import pytest

from rich.logging import RichHandler

from fxpack.core.utils.rich_ui import RichLoggingFilter, get_rich_handler
from fxpack.logger import setup_logging


@pytest.fixture
def root_logger(monkeypatch):
    """Let setup_logging configure the root logger as if it were untouched.

    pytest attaches its own capture handlers to the root logger, so
    ``hasHandlers`` is patched and the handler list restored afterwards.
    """
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    monkeypatch.setattr(root, "hasHandlers", lambda: False)
    monkeypatch.delenv("FXPACK_RICH_UI", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)


def added_handlers(root, before):
    return [handler for handler in root.handlers if handler not in before]


class TestSetupLogging:
    def test_plain_handler_by_default(self, root_logger):
        before = root_logger.handlers[:]
        stream = io.StringIO()

        setup_logging(stream=stream)
        logging.getLogger("fxpack.test").info("Built resource A")

        assert root_logger.level == logging.INFO
        assert len(added_handlers(root_logger, before)) == 1
        assert "| INFO  | Built resource A" in stream.getvalue()

    def test_string_level(self, root_logger):
        setup_logging(level="debug", stream=io.StringIO())

        assert root_logger.level == logging.DEBUG

    def test_log_level_env_overrides(self, root_logger, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "error")

        setup_logging(stream=io.StringIO())

        assert root_logger.level == logging.ERROR

    def test_rich_ui_raises_info_to_warning(self, root_logger, monkeypatch):
        monkeypatch.setenv("FXPACK_RICH_UI", "true")
        before = root_logger.handlers[:]

        setup_logging()

        assert root_logger.level == logging.WARNING
        [handler] = added_handlers(root_logger, before)
        assert isinstance(handler, RichHandler)

    def test_configured_root_is_left_alone(self, root_logger, monkeypatch):
        monkeypatch.setattr(root_logger, "hasHandlers", lambda: True)
        before = root_logger.handlers[:]

        setup_logging()

        assert root_logger.handlers == before


def test_rich_handler_filters_third_party_chatter():
    handler = get_rich_handler()

    assert isinstance(handler, RichHandler)
    assert any(isinstance(f, RichLoggingFilter) for f in handler.filters)
    record = logging.LogRecord("asyncio", logging.INFO, __file__, 1, "noise", None, None)
    assert handler.filter(record) is False
