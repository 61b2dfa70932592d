"""Logging setup shared by the web and CLI entry points.

Every record carries the wizard session id bound by the caller plus the
trace/span ids of the active OpenTelemetry span, so console lines and exported
log records can be joined to the session's trace.
"""

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Optional

from opentelemetry._logs import set_logger_provider
from opentelemetry.exporter.otlp.proto.grpc._log_exporter import OTLPLogExporter
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.resources import Resource
from opentelemetry.trace import get_current_span

from stack_builder.core.config import get_otlp_endpoint, get_otlp_headers, get_service_name

LOG_FORMAT = (
    "%(asctime)s %(levelname)s %(name)s "
    "[session=%(session_id)s trace=%(trace_id)s span=%(span_id)s] %(message)s"
)

_session_id: ContextVar[str] = ContextVar("stack_builder_session_id", default="-")

_LOGGING_CONFIGURED = False


@contextmanager
def bind_session_id(session_id: str) -> Iterator[None]:
    """Stamp ``session_id`` on every record logged inside the block."""
    token = _session_id.set(session_id)
    try:
        yield
    finally:
        _session_id.reset(token)


class TraceContextFilter(logging.Filter):
    """Attach session, trace and span ids to records."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401
        record.session_id = _session_id.get()

        span_context = get_current_span().get_span_context()
        if span_context and span_context.is_valid:
            record.trace_id = format(span_context.trace_id, "032x")
            record.span_id = format(span_context.span_id, "016x")
        else:
            record.trace_id = "-"
            record.span_id = "-"

        return True


def _build_otel_handler(service_name: str, level: int) -> Optional[logging.Handler]:
    endpoint = get_otlp_endpoint()
    if not endpoint:
        return None

    try:
        provider = LoggerProvider(
            resource=Resource.create({"service.name": get_service_name(service_name)})
        )
        provider.add_log_record_processor(
            BatchLogRecordProcessor(
                OTLPLogExporter(
                    endpoint=endpoint,
                    headers=get_otlp_headers(),
                    insecure=endpoint.startswith("http://"),
                )
            )
        )
        set_logger_provider(provider)
        return LoggingHandler(logger_provider=provider, level=level)
    except Exception as exc:  # pragma: no cover - exporter misconfiguration
        sys.stderr.write(f"Failed to initialize OpenTelemetry logging exporter: {exc}\n")
        return None


def setup_logging(
    name: str = "stack_builder",
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    service_name: Optional[str] = None,
) -> logging.Logger:
    """
    Configure root logging once per process.

    Console output always goes to stdout; ``log_file`` adds a file sink and an
    OTLP endpoint (OTLP_ENDPOINT / OTEL_EXPORTER_OTLP_ENDPOINT) adds export.
    Later calls only adjust the level of the named logger.
    """
    global _LOGGING_CONFIGURED

    logger = logging.getLogger(name)
    logger.setLevel(level)

    if _LOGGING_CONFIGURED:
        return logger

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    trace_filter = TraceContextFilter()
    formatter = logging.Formatter(LOG_FORMAT)

    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file))
    for handler in handlers:
        handler.setFormatter(formatter)

    otel_handler = _build_otel_handler(service_name or name, level)
    if otel_handler:
        handlers.append(otel_handler)

    for handler in handlers:
        handler.setLevel(level)
        handler.addFilter(trace_filter)
        root_logger.addHandler(handler)

    _LOGGING_CONFIGURED = True
    return logger
