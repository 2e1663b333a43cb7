"""
Unit tests for observability features.

Tests cover:
- Structured logging with JSON format
- Route context stamped onto log records
- Logging configuration from settings
- Prometheus text exposition
"""

import io
import json
import logging
import sys

import pytest

from routematch.compiler.compiler import compile_routes, to_route
from routematch.core import observability
from routematch.core.errors import MissingMatchError
from routematch.core.observability import (
    RouteContextFilter,
    StructuredFormatter,
    configure_logging,
    configure_structured_logging,
    get_route_name,
    metrics_text,
    reset_route_name,
    set_route_name,
)
from routematch.schemas.service_profile import RouteSpec


@pytest.fixture
def json_log_stream():
    """Capture routematch logs as JSON lines, the way configure_structured_logging emits them."""
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    handler.addFilter(RouteContextFilter())
    handler.setFormatter(StructuredFormatter())

    logger = logging.getLogger("routematch")
    previous_level = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield stream
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def _lines(stream: io.StringIO) -> list[dict]:
    return [json.loads(line) for line in stream.getvalue().splitlines()]


class TestRouteContext:
    """Tests for the route context variable."""

    @pytest.mark.anyio
    async def test_set_and_reset(self):
        assert get_route_name() is None

        token = set_route_name("r1")
        assert get_route_name() == "r1"

        reset_route_name(token)
        assert get_route_name() is None

    @pytest.mark.anyio
    async def test_route_context_cleared_after_failure(self):
        with pytest.raises(MissingMatchError):
            to_route(RouteSpec(name="broken"))

        assert get_route_name() is None


class TestStructuredFormatter:
    """Tests for JSON log output."""

    @pytest.mark.anyio
    async def test_standard_fields(self):
        record = logging.LogRecord(
            "routematch.test", logging.INFO, __file__, 10, "hello %s", ("world",), None
        )

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "routematch.test"
        assert entry["message"] == "hello world"
        assert "route" not in entry
        assert "extra" not in entry

    @pytest.mark.anyio
    async def test_extra_and_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            exc_info = sys.exc_info()

        record = logging.LogRecord(
            "routematch.test", logging.ERROR, __file__, 10, "failed", (), exc_info
        )
        record.routes = 3

        entry = json.loads(StructuredFormatter().format(record))

        assert entry["exception"] == {"type": "ValueError", "message": "boom"}
        assert entry["extra"] == {"routes": 3}

    @pytest.mark.anyio
    async def test_route_logs_carry_route_name(self, json_log_stream, books_route):
        to_route(books_route)

        entries = _lines(json_log_stream)
        route_entries = [e for e in entries if e["logger"] == "routematch.compiler.compiler"]
        assert route_entries
        assert route_entries[0]["route"] == "GET /books/{id}"

    @pytest.mark.anyio
    async def test_batch_logs_have_no_route(self, json_log_stream, profile_routes):
        compile_routes(profile_routes)

        entries = _lines(json_log_stream)
        messages = [e["message"] for e in entries if "route" not in e]
        assert "Starting compilation of 3 routes" in messages
        assert any(m.startswith("Successfully compiled 3 routes") for m in messages)


class TestLoggingConfiguration:
    """Tests for root logger configuration."""

    @pytest.fixture(autouse=True)
    def _restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    @pytest.mark.anyio
    async def test_configure_structured_logging(self):
        configure_structured_logging("debug")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, StructuredFormatter)

    @pytest.mark.anyio
    async def test_configure_logging_plain_text(self, monkeypatch):
        monkeypatch.setattr(observability.settings, "observability_structured_logs", False)
        monkeypatch.setattr(observability.settings, "app_log_level", "WARNING")

        configure_logging()

        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert not any(isinstance(h.formatter, StructuredFormatter) for h in root.handlers)

    @pytest.mark.anyio
    async def test_configure_logging_structured(self, monkeypatch):
        monkeypatch.setattr(observability.settings, "observability_structured_logs", True)

        configure_logging()

        assert isinstance(logging.getLogger().handlers[0].formatter, StructuredFormatter)


class TestMetricsText:
    """Tests for Prometheus exposition."""

    @pytest.mark.anyio
    async def test_metrics_text_lists_compiler_metrics(self, profile_routes):
        compile_routes(profile_routes)

        text = metrics_text()

        assert "routematch_compilations_total" in text
        assert "routematch_compile_duration_seconds_bucket" in text
        assert "routematch_compiled_routes_count" in text
