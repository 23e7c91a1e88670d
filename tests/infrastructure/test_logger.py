#!/usr/bin/env python3
"""Tests for the Logger module."""

import logging
import threading

import pytest

from resourcefilter.infrastructure.logger import (
    LogLevel,
    Logger,
    get_logger,
    set_global_logger,
)


class ListHandler(logging.Handler):
    """Collects emitted records."""

    def __init__(self):
        super().__init__()
        self.records = []

    def emit(self, record):
        self.records.append(record)


@pytest.fixture
def handler() -> ListHandler:
    return ListHandler()


@pytest.fixture
def logger(handler) -> Logger:
    return Logger("resourcefilter.test", level=LogLevel.DEBUG, handlers=[handler])


class TestLogLevel:
    def test_log_levels(self):
        """Log level values match Python logging."""
        assert LogLevel.DEBUG == logging.DEBUG
        assert LogLevel.INFO == logging.INFO
        assert LogLevel.ERROR == logging.ERROR


class TestLogger:
    """Tests for Logger."""

    def test_default_console_handler(self):
        logger = Logger("resourcefilter.console")
        assert len(logger.logger.handlers) == 1
        assert isinstance(logger.logger.handlers[0], logging.StreamHandler)
        assert logger.logger.propagate is False

    def test_set_level_from_string(self, logger):
        logger.set_level("warning")
        assert logger.get_level() == LogLevel.WARNING
        assert not logger.is_enabled_for("info")
        assert logger.is_enabled_for(LogLevel.ERROR)

    def test_context_appended(self, logger, handler):
        logger.info("Fetched page", offset=0, size=3)

        record = handler.records[0]
        assert record.getMessage() == "Fetched page | offset=0 size=3"
        assert record.context == {"offset": 0, "size": 3}

    def test_message_without_context(self, logger, handler):
        logger.warning("plain")
        assert handler.records[0].getMessage() == "plain"

    def test_add_context(self, logger, handler):
        with logger.add_context(query="fetch"):
            logger.debug("inside", size=1)
        logger.debug("outside")

        assert handler.records[0].context == {"query": "fetch", "size": 1}
        assert handler.records[1].context == {}

    def test_nested_context(self, logger, handler):
        with logger.add_context(query="count"):
            with logger.add_context(offset=5):
                logger.info("nested")

        assert handler.records[0].context == {"query": "count", "offset": 5}

    def test_context_is_thread_local(self, logger, handler):
        def worker():
            logger.info("from thread")

        with logger.add_context(query="fetch"):
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert handler.records[0].context == {}

    def test_level_filtering(self, handler):
        logger = Logger("resourcefilter.quiet", level="ERROR", handlers=[handler])
        logger.info("dropped")
        logger.error("kept")
        assert [r.getMessage() for r in handler.records] == ["kept"]

    def test_exception(self, logger, handler):
        try:
            raise RuntimeError("boom")
        except RuntimeError as e:
            logger.exception("Query failed", e)

        record = handler.records[0]
        assert record.levelno == logging.ERROR
        assert record.context["exception_type"] == "RuntimeError"
        assert record.exc_info is not None

    def test_child_shares_handlers(self, logger, handler):
        child = logger.child("query")
        child.debug("from child")

        assert child.name == "resourcefilter.test.query"
        assert child.get_level() == LogLevel.DEBUG
        assert handler.records[0].name == "resourcefilter.test.query"

    def test_file_handler(self, logger, temp_dir):
        log_file = temp_dir / "resourcefilter.log"
        file_handler = logger.create_file_handler(log_file)
        logger.add_handler(file_handler)
        logger.info("to file", size=2)
        file_handler.flush()
        logger.remove_handler(file_handler)
        file_handler.close()

        assert "to file | size=2" in log_file.read_text()


class TestGlobalLogger:
    def test_get_logger_reuses_instance(self):
        assert get_logger("resourcefilter.a") is get_logger("resourcefilter.a")

    def test_get_logger_new_name(self):
        first = get_logger("resourcefilter.a")
        assert get_logger("resourcefilter.b") is not first

    def test_set_global_logger(self, logger):
        set_global_logger(logger)
        assert get_logger("resourcefilter.test") is logger
