"""
Observability module for the route match compiler.

Provides:
- Structured logging with JSON format
- Route context (the route being converted) attached to every log line
- Prometheus metrics for batch compilation

Usage:
    from routematch.core.observability import (
        configure_logging,
        get_route_name,
        metrics,
    )
"""

import json
import logging
from contextvars import ContextVar, Token
from datetime import UTC, datetime

from prometheus_client import CollectorRegistry, Counter, Histogram, generate_latest

from routematch.core.config import settings

# ============================================================================
# Context Variables
# ============================================================================

# Name of the route currently being converted
_route_ctx: ContextVar[str | None] = ContextVar("route", default=None)


def get_route_name() -> str | None:
    """Get the name of the route being converted, if any."""
    return _route_ctx.get()


def set_route_name(name: str | None) -> Token:
    """Set the route name for the current context."""
    return _route_ctx.set(name)


def reset_route_name(token: Token) -> None:
    """Restore the route name that was current before `set_route_name`."""
    _route_ctx.reset(token)


# ============================================================================
# Structured Logging Configuration
# ============================================================================

# LogRecord attributes that are not user-supplied extras
_RESERVED_RECORD_KEYS = frozenset(
    {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
        "getMessage",
        "exc_info",
        "exc_text",
        "stack_info",
        "message",
        "asctime",
        "route",
    }
)


class RouteContextFilter(logging.Filter):
    """Stamp each record with the route being converted when it is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.route = get_route_name()
        return True


class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs logs as JSON with standard fields:
    - timestamp: ISO 8601 format
    - level: Log level
    - logger: Logger name
    - message: Log message
    - route: Route being converted (if stamped by RouteContextFilter)
    - exception: Exception type and message (if any)
    - extra: Any additional context from logging.extra
    """

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        route = getattr(record, "route", None)
        if route is not None:
            log_entry["route"] = route

        if record.exc_info:
            log_entry["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
            }

        log_entry["function"] = record.funcName
        log_entry["line"] = record.lineno

        # These come from logger.info("msg", extra={"key": "value"})
        extra_keys = {k: v for k, v in record.__dict__.items() if k not in _RESERVED_RECORD_KEYS}
        if extra_keys:
            log_entry["extra"] = extra_keys

        return json.dumps(log_entry, default=str)


def configure_structured_logging(level: str = "INFO") -> None:
    """
    Configure root logger with structured JSON formatting.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    handler = logging.StreamHandler()
    handler.addFilter(RouteContextFilter())
    handler.setFormatter(StructuredFormatter())
    root_logger.addHandler(handler)


def configure_logging() -> None:
    """Configure logging from settings: JSON lines or plain text."""
    if settings.observability_structured_logs:
        configure_structured_logging(settings.app_log_level)
    else:
        logging.basicConfig(
            level=settings.app_log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
            force=True,
        )


# ============================================================================
# Prometheus Metrics
# ============================================================================

# Use a custom registry to avoid conflicts with the host process's metrics
_registry = CollectorRegistry()


class Metrics:
    """Centralized metrics for route compilation."""

    def __init__(self, registry: CollectorRegistry) -> None:
        self.registry = registry

        # Compilation success/failure count
        self.compilations_total = Counter(
            "routematch_compilations_total",
            "Total route batch compilations",
            ["status"],
            registry=self.registry,
        )

        self.compile_duration_seconds = Histogram(
            "routematch_compile_duration_seconds",
            "Route batch compilation duration in seconds",
            buckets=(0.0005, 0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0),
            registry=self.registry,
        )

        self.compiled_routes = Histogram(
            "routematch_compiled_routes",
            "Number of routes in a compiled batch",
            buckets=(1, 5, 10, 25, 50, 100, 250, 500),
            registry=self.registry,
        )


# Global metrics instance
metrics = Metrics(_registry)


def record_compilation(status: str, duration: float, route_count: int) -> None:
    """
    Record one batch compilation.

    Args:
        status: "success" or "error"
        duration: Compilation duration in seconds
        route_count: Number of routes compiled (ignored on error)
    """
    if not settings.observability_metrics_enabled:
        return

    metrics.compilations_total.labels(status=status).inc()
    metrics.compile_duration_seconds.observe(duration)
    if status == "success":
        metrics.compiled_routes.observe(route_count)


def metrics_text() -> str:
    """Render the compiler registry in Prometheus text exposition format."""
    return generate_latest(metrics.registry).decode("utf-8")
