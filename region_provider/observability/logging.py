"""Structured logging configuration for the region data layer.

This module provides structured logging built on structlog, with
correlation ID tracking and a region context that is merged into every
event emitted while a plugin fetch or sync is in progress.
"""

import logging
import sys
from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger

# Context variables for fetch/sync tracking
_correlation_id: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_region_context: ContextVar[dict[str, Any]] = ContextVar("region_context", default={})


class StructuredLogger:
    """Structured logging manager.

    Example:
        >>> logger = StructuredLogger()
        >>> logger.setup_logging(json_format=False)
        >>> log = logger.get_logger("region_provider.plugins")
        >>> log.info("fetch_started", data_type="meetings")
    """

    def __init__(self):
        self._configured = False

    def setup_logging(
        self,
        json_format: bool = True,
        log_level: str = "INFO",
        extra_processors: list | None = None,
    ) -> None:
        """Setup structured logging configuration.

        Args:
            json_format: Whether to output JSON format (vs. console)
            log_level: Minimum log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            extra_processors: Additional structlog processors
        """
        if self._configured:
            return

        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=getattr(logging, log_level.upper()),
        )

        processors = [
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            self._add_correlation_id,
            self._add_region_context,
        ]

        if extra_processors:
            processors.extend(extra_processors)

        processors.extend([
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
        ])

        if json_format:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        self._configured = True

    def _add_correlation_id(
        self,
        logger: FilteringBoundLogger,
        method_name: str,
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        """Add the correlation ID to log events."""
        corr_id = _correlation_id.get()
        if corr_id:
            event_dict["correlation_id"] = corr_id
        return event_dict

    def _add_region_context(
        self,
        logger: FilteringBoundLogger,
        method_name: str,
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        """Add the current region context to log events.

        Explicit event keys win over context values.
        """
        for key, value in _region_context.get().items():
            event_dict.setdefault(key, value)
        return event_dict

    def get_logger(self, name: str) -> FilteringBoundLogger:
        """Get a logger instance.

        Args:
            name: Logger name (usually module name)

        Returns:
            Configured structlog logger
        """
        if not self._configured:
            self.setup_logging()
        return structlog.get_logger(name)


# Global logger instance
_structured_logger: StructuredLogger | None = None


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a structured logger.

    Args:
        name: Logger name

    Returns:
        Structured logger instance
    """
    global _structured_logger
    if _structured_logger is None:
        _structured_logger = StructuredLogger()
    return _structured_logger.get_logger(name)


def setup_logging(
    json_format: bool = True,
    log_level: str = "INFO",
    **kwargs: Any,
) -> StructuredLogger:
    """Setup structured logging globally.

    Args:
        json_format: Whether to output JSON
        log_level: Minimum log level
        **kwargs: Additional configuration

    Returns:
        Configured StructuredLogger
    """
    global _structured_logger
    _structured_logger = StructuredLogger()
    _structured_logger.setup_logging(
        json_format=json_format,
        log_level=log_level,
        **kwargs,
    )
    return _structured_logger


def get_correlation_id() -> str | None:
    """Get the current correlation ID."""
    return _correlation_id.get()


def get_region_context() -> dict[str, Any]:
    """Get a copy of the current region context."""
    return dict(_region_context.get())


@contextmanager
def correlation_id_scope(correlation_id: str) -> Generator[None, None, None]:
    """Context manager for correlation ID scope.

    Example:
        >>> with correlation_id_scope("sync-2024-11-05"):
        ...     await service.sync_all()
    """
    token = _correlation_id.set(correlation_id)
    try:
        yield
    finally:
        _correlation_id.reset(token)


@contextmanager
def region_context_scope(**context: Any) -> Generator[None, None, None]:
    """Context manager adding region identifiers to every log event.

    Nested scopes extend the enclosing context.

    Example:
        >>> with region_context_scope(region_id="california", data_type="meetings"):
        ...     logger.info("fetch_started")
    """
    token = _region_context.set({**_region_context.get(), **context})
    try:
        yield
    finally:
        _region_context.reset(token)
