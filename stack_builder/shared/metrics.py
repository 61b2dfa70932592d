"""OpenTelemetry metrics for Stack Builder.

This module provides metrics counters for monitoring application behavior:
- option_toggles_total: Count of option toggles by category
- flow_transitions_total: Count of flow step changes by target step
- connect_submissions_total: Count of contact submissions by outcome
- errors_total: Count of errors by type

Metrics are exported to OTLP endpoint when ENABLE_OTEL=true.
"""

from __future__ import annotations

import logging
from typing import Optional

from opentelemetry import metrics
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import OTLPMetricExporter

from stack_builder.core.config import (
    DEFAULT_OTLP_ENDPOINT,
    get_otlp_endpoint,
    get_otlp_headers,
    is_otel_enabled,
)

logger = logging.getLogger(__name__)

_METRICS_CONFIGURED = False
_meter: Optional[metrics.Meter] = None
_toggles_counter = None
_transitions_counter = None
_submissions_counter = None
_errors_counter = None


def configure_metrics() -> None:
    """Configure OpenTelemetry metrics with OTLP exporter."""
    global _METRICS_CONFIGURED, _meter, _toggles_counter, _transitions_counter
    global _submissions_counter, _errors_counter

    if _METRICS_CONFIGURED:
        return

    if not is_otel_enabled():
        logger.debug("Metrics disabled (ENABLE_OTEL not set to true)")
        _METRICS_CONFIGURED = True
        return

    try:
        otlp_endpoint = get_otlp_endpoint(DEFAULT_OTLP_ENDPOINT)
        if not otlp_endpoint.startswith("http://") and not otlp_endpoint.startswith("https://"):
            otlp_endpoint = f"http://{otlp_endpoint}"

        logger.info(f"Configuring metrics export to OTLP endpoint: {otlp_endpoint}")

        exporter = OTLPMetricExporter(
            endpoint=otlp_endpoint, headers=get_otlp_headers(), insecure=True
        )
        reader = PeriodicExportingMetricReader(exporter, export_interval_millis=5000)
        provider = MeterProvider(metric_readers=[reader])
        metrics.set_meter_provider(provider)

        _meter = metrics.get_meter("stack_builder")

        _toggles_counter = _meter.create_counter(
            name="option_toggles_total",
            description="Total number of option toggles processed",
            unit="1",
        )

        _transitions_counter = _meter.create_counter(
            name="flow_transitions_total",
            description="Total number of flow step transitions requested",
            unit="1",
        )

        _submissions_counter = _meter.create_counter(
            name="connect_submissions_total",
            description="Total number of contact form submissions",
            unit="1",
        )

        _errors_counter = _meter.create_counter(
            name="errors_total",
            description="Total number of errors by type",
            unit="1",
        )

        logger.info("OpenTelemetry metrics configured successfully")
        _METRICS_CONFIGURED = True

    except Exception as e:
        logger.warning(f"Failed to configure metrics: {e}")
        _METRICS_CONFIGURED = True


def increment_toggles(session_id: str, category_id: str) -> None:
    """
    Increment option toggles counter.

    Args:
        session_id: Session identifier for attribution
        category_id: Category the toggled option belongs to
    """
    if _toggles_counter:
        _toggles_counter.add(1, {"session_id": session_id, "category_id": category_id})


def increment_transitions(session_id: str, target_step: str, allowed: bool = True) -> None:
    """
    Increment flow transitions counter.

    Args:
        session_id: Session identifier for attribution
        target_step: Requested flow step
        allowed: Whether the transition actually happened
    """
    if _transitions_counter:
        _transitions_counter.add(
            1, {"session_id": session_id, "target_step": target_step, "allowed": str(allowed)}
        )


def increment_submissions(session_id: str, success: bool = True) -> None:
    """
    Increment contact submissions counter.

    Args:
        session_id: Session identifier for attribution
        success: Whether the submission succeeded
    """
    if _submissions_counter:
        _submissions_counter.add(1, {"session_id": session_id, "success": str(success)})


def increment_errors(error_type: str, session_id: Optional[str] = None) -> None:
    """
    Increment errors counter.

    Args:
        error_type: Type/category of error (e.g., 'validation_error', 'workflow_error')
        session_id: Optional session identifier for attribution
    """
    if _errors_counter:
        attributes = {"error_type": error_type}
        if session_id:
            attributes["session_id"] = session_id
        _errors_counter.add(1, attributes)
