"""Observability package for the region data layer.

Provides structured logging with correlation IDs and region context.
"""

from region_provider.observability.logging import (
    StructuredLogger,
    correlation_id_scope,
    get_logger,
    region_context_scope,
    setup_logging,
)

__all__ = [
    "StructuredLogger",
    "correlation_id_scope",
    "get_logger",
    "region_context_scope",
    "setup_logging",
]
