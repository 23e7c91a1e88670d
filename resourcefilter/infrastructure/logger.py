#!/usr/bin/env python3
"""Structured logging for ResourceFilter.

This module wraps the standard logging module with:
- Structured context (key-value pairs appended to messages)
- Thread-local context management
- Optional rotating log file

Example:
    >>> logger = Logger("resourcefilter.query", level=LogLevel.DEBUG)
    >>> logger.debug("Fetched page", offset=0, limit=50, size=12)
    >>> with logger.add_context(query="fetch"):
    ...     logger.info("Traversal started")
"""

import logging
import logging.handlers
import threading
from contextlib import contextmanager
from enum import IntEnum
from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class LogLevel(IntEnum):
    """Log levels matching Python's logging module."""

    DEBUG = logging.DEBUG  # 10
    INFO = logging.INFO  # 20
    WARNING = logging.WARNING  # 30
    ERROR = logging.ERROR  # 40
    CRITICAL = logging.CRITICAL  # 50


DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


class Logger:
    """Structured logger with context support.

    Context given to a call, plus any context pushed with ``add_context`` on
    the current thread, is rendered as ``key=value`` pairs after the message
    and attached to the record as ``record.context``.
    """

    # Thread-local storage for context
    _context_stack = threading.local()

    def __init__(
        self,
        name: str = "resourcefilter",
        level: Union[LogLevel, str] = LogLevel.INFO,
        handlers: Optional[List[logging.Handler]] = None,
    ):
        """Initialize logger.

        Args:
            name: Logger name for identification
            level: Minimum log level to output
            handlers: Optional list of logging handlers
        """
        self.name = name
        self.logger = logging.getLogger(name)
        self.set_level(level)

        if handlers is None:
            handlers = [self._create_console_handler()]

        self.logger.handlers.clear()
        for handler in handlers:
            self.logger.addHandler(handler)

        self.logger.propagate = False

    def _create_console_handler(self) -> logging.StreamHandler:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def create_file_handler(
        self,
        filename: Union[str, Path],
        max_bytes: int = 10 * 1024 * 1024,  # 10MB
        backup_count: int = 5,
    ) -> logging.handlers.RotatingFileHandler:
        """Create rotating file handler.

        Args:
            filename: Path to log file
            max_bytes: Maximum size before rotation
            backup_count: Number of backup files to keep

        Returns:
            Configured rotating file handler
        """
        handler = logging.handlers.RotatingFileHandler(
            filename, maxBytes=max_bytes, backupCount=backup_count
        )
        handler.setFormatter(logging.Formatter(DEFAULT_FORMAT, datefmt=DATE_FORMAT))
        return handler

    def add_handler(self, handler: logging.Handler) -> None:
        self.logger.addHandler(handler)

    def remove_handler(self, handler: logging.Handler) -> None:
        self.logger.removeHandler(handler)

    def set_level(self, level: Union[LogLevel, str]) -> None:
        """Set the minimum log level.

        Args:
            level: New log level (LogLevel or string)
        """
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        self.logger.setLevel(level)

    def get_level(self) -> LogLevel:
        return LogLevel(self.logger.level)

    def child(self, suffix: str) -> "Logger":
        """Create a logger named ``<name>.<suffix>`` sharing this logger's handlers."""
        return Logger(
            name=f"{self.name}.{suffix}",
            level=self.get_level(),
            handlers=list(self.logger.handlers),
        )

    def _get_context(self) -> Dict[str, Any]:
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        context = {}
        for ctx in self._context_stack.stack:
            context.update(ctx)
        return context

    def _format_message(self, msg: str, context: Dict[str, Any]) -> str:
        if context:
            ctx_str = " ".join(f"{k}={v}" for k, v in context.items())
            return f"{msg} | {ctx_str}"
        return msg

    @contextmanager
    def add_context(self, **kwargs):
        """Context manager to add temporary context.

        Args:
            **kwargs: Key-value pairs to add to context

        Example:
            >>> with logger.add_context(query="count"):
            ...     logger.debug("Counting matches")
        """
        if not hasattr(self._context_stack, "stack"):
            self._context_stack.stack = [{}]

        self._context_stack.stack.append(kwargs)
        try:
            yield
        finally:
            self._context_stack.stack.pop()

    def _log(self, level: LogLevel, msg: str, context: Dict[str, Any], **kwargs) -> None:
        if self.logger.isEnabledFor(level):
            combined_context = self._get_context()
            combined_context.update(context)
            formatted_msg = self._format_message(msg, combined_context)
            self.logger.log(level, formatted_msg, extra={"context": combined_context}, **kwargs)

    def debug(self, msg: str, **context) -> None:
        self._log(LogLevel.DEBUG, msg, context)

    def info(self, msg: str, **context) -> None:
        self._log(LogLevel.INFO, msg, context)

    def warning(self, msg: str, **context) -> None:
        self._log(LogLevel.WARNING, msg, context)

    def error(self, msg: str, **context) -> None:
        self._log(LogLevel.ERROR, msg, context)

    def exception(self, msg: str, exc: Exception, **context) -> None:
        """Log exception with traceback.

        Args:
            msg: Log message
            exc: Exception to log
            **context: Additional context key-value pairs
        """
        context["exception_type"] = type(exc).__name__
        context["exception_message"] = str(exc)
        self._log(LogLevel.ERROR, msg, context, exc_info=exc)

    def is_enabled_for(self, level: Union[LogLevel, str]) -> bool:
        if isinstance(level, str):
            level = LogLevel[level.upper()]
        return self.logger.isEnabledFor(level)


# Global logger instance
_global_logger: Optional[Logger] = None


def get_logger(name: str = "resourcefilter") -> Logger:
    """Get or create a logger instance.

    Args:
        name: Logger name

    Returns:
        Logger instance
    """
    global _global_logger
    if _global_logger is None or _global_logger.name != name:
        _global_logger = Logger(name=name)
    return _global_logger


def set_global_logger(logger: Optional[Logger]) -> None:
    """Set the global logger instance.

    Args:
        logger: Logger to use globally (None resets it)
    """
    global _global_logger
    _global_logger = logger
