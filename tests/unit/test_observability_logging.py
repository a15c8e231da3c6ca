"""Unit tests for structured logging helpers."""

from unittest.mock import patch

import pytest
import structlog

from region_provider.observability import logging as logging_module
from region_provider.observability.logging import (
    StructuredLogger,
    correlation_id_scope,
    get_correlation_id,
    get_region_context,
    region_context_scope,
    setup_logging,
)


@pytest.fixture(autouse=True)
def reset_global_logger(monkeypatch):
    monkeypatch.setattr(logging_module, "_structured_logger", None)


@pytest.mark.unit
class TestStructuredLogger:
    """Tests for logger setup."""

    def test_setup_console_renderer(self):
        with patch.object(logging_module.structlog, "configure") as configure, \
                patch.object(logging_module.logging, "basicConfig"):
            setup_logging(json_format=False, log_level="debug")

        processors = configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)

    def test_setup_json_renderer_with_extra_processors(self):
        def extra(logger, method_name, event_dict):
            return event_dict

        with patch.object(logging_module.structlog, "configure") as configure, \
                patch.object(logging_module.logging, "basicConfig") as basic_config:
            setup_logging(log_level="WARNING", extra_processors=[extra])

        processors = configure.call_args.kwargs["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)
        assert extra in processors
        assert basic_config.call_args.kwargs["level"] == logging_module.logging.WARNING

    def test_setup_only_once(self):
        structured = StructuredLogger()
        with patch.object(logging_module.structlog, "configure") as configure, \
                patch.object(logging_module.logging, "basicConfig"):
            structured.setup_logging()
            structured.setup_logging()

        configure.assert_called_once()


@pytest.mark.unit
class TestLoggingContext:
    """Tests for correlation and region context."""

    def test_correlation_id_scope(self):
        assert get_correlation_id() is None

        with correlation_id_scope("sync-abc"):
            assert get_correlation_id() == "sync-abc"
            event = StructuredLogger()._add_correlation_id(None, "info", {"event": "x"})
            assert event["correlation_id"] == "sync-abc"

        assert get_correlation_id() is None

    def test_region_context_scopes_nest(self):
        with region_context_scope(region_id="california"):
            with region_context_scope(data_type="meetings"):
                assert get_region_context() == {"region_id": "california", "data_type": "meetings"}
            assert get_region_context() == {"region_id": "california"}

        assert get_region_context() == {}

    def test_region_context_does_not_override_event_keys(self):
        with region_context_scope(region_id="california", data_type="meetings"):
            event = StructuredLogger()._add_region_context(
                None, "info", {"event": "x", "data_type": "propositions"}
            )

        assert event == {"event": "x", "region_id": "california", "data_type": "propositions"}
