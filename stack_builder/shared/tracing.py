"""Tracing setup utilities.

Spans are exported over OTLP/gRPC when ``ENABLE_OTEL=true``. Without it the
OpenTelemetry API stays on its no-op tracer, so ``get_tracer`` is always safe
to call from handlers and tests.
"""

from __future__ import annotations

import logging

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from stack_builder.core.config import (
    DEFAULT_OTLP_ENDPOINT,
    get_otlp_endpoint,
    get_otlp_headers,
    get_service_name,
    is_otel_enabled,
)

logger = logging.getLogger(__name__)

_TRACING_CONFIGURED = False


def configure_tracing(service_name: str) -> None:
    """Install an OTLP-exporting tracer provider when ENABLE_OTEL is true."""

    global _TRACING_CONFIGURED
    if _TRACING_CONFIGURED:
        return

    if not is_otel_enabled():
        logger.debug("Tracing disabled (ENABLE_OTEL not set to true)")
        _TRACING_CONFIGURED = True
        return

    service = get_service_name(service_name)
    endpoint = get_otlp_endpoint(DEFAULT_OTLP_ENDPOINT)

    try:
        provider = TracerProvider(resource=Resource.create({"service.name": service}))
        provider.add_span_processor(
            BatchSpanProcessor(
                OTLPSpanExporter(
                    endpoint=endpoint,
                    headers=get_otlp_headers(),
                    insecure=endpoint.startswith("http://"),
                )
            )
        )
        trace.set_tracer_provider(provider)
        logger.info(f"Tracing export configured to {endpoint} for {service}")
    except Exception as e:
        logger.warning(f"Failed to configure tracing: {e}")

    _TRACING_CONFIGURED = True


def get_tracer(instrumenting_module_name: str) -> trace.Tracer:
    """Return a tracer from the globally configured provider."""
    return trace.get_tracer(instrumenting_module_name)
