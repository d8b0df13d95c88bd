"""Logging and tracing for jsonmock.

Log lines are structlog events routed through stdlib logging to stderr,
so generated JSON on stdout is never interleaved with them. Template
loading and generation run inside ``traced`` blocks, which open an
OpenTelemetry span (a no-op unless an SDK is installed) and log the
outcome with its duration.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

import structlog
from opentelemetry import trace
from opentelemetry.trace import Status, StatusCode

if TYPE_CHECKING:
    from opentelemetry.trace import Span

TRACER_NAME = "jsonmock"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

logger = structlog.get_logger(__name__)


def _shared_processors(timestamps: bool) -> list[Any]:
    processors: list[Any] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
    ]
    if timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="iso", utc=True))
    processors += [
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    return processors


def configure_logging(
    log_level: str = "WARNING",
    *,
    json_logs: bool = False,
    timestamps: bool = True,
) -> None:
    """Route jsonmock log events to stderr.

    Args:
        log_level: One of DEBUG, INFO, WARNING, ERROR (case-insensitive).
        json_logs: Render one JSON object per line instead of console text.
        timestamps: Prefix events with an ISO-8601 UTC timestamp.

    Raises:
        ValueError: If ``log_level`` is not a known level.

    Example:
        >>> configure_logging("DEBUG", json_logs=True)
    """
    level = log_level.upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Unknown log level {log_level!r}; expected one of {', '.join(LOG_LEVELS)}")

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if json_logs
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    structlog.configure(
        processors=[*_shared_processors(timestamps), renderer],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))
    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(getattr(logging, level))


@contextmanager
def traced(operation: str, **attributes: Any) -> Iterator[Span]:
    """Run a block inside a span and log how it ended.

    Attributes are recorded on the span with a ``jsonmock.`` prefix and
    added to every log event. Logs ``<operation>_started`` (debug),
    ``<operation>_completed`` (info, with ``duration_ms``) or
    ``<operation>_failed`` (error) and re-raises any exception.

    Example:
        >>> with traced("load_template", source="countries.json5"):
        ...     text = Path("countries.json5").read_text()
    """
    tracer = trace.get_tracer(TRACER_NAME)
    span_attributes = {f"jsonmock.{key}": str(value) for key, value in attributes.items()}
    log = logger.bind(**attributes)

    with tracer.start_as_current_span(operation, attributes=span_attributes) as span:
        log.debug(f"{operation}_started")
        started = time.perf_counter()
        try:
            yield span
        except Exception as exc:
            span.set_status(Status(StatusCode.ERROR, str(exc)))
            span.record_exception(exc)
            log.error(f"{operation}_failed", error=str(exc), error_type=type(exc).__name__)
            raise
        duration_ms = round((time.perf_counter() - started) * 1000, 3)
        span.set_status(Status(StatusCode.OK))
        log.info(f"{operation}_completed", duration_ms=duration_ms)
