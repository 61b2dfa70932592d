"""Tests for OpenTelemetry metrics module."""

import os
import pytest
from unittest.mock import MagicMock, patch

import stack_builder.shared.metrics as metrics_module
from stack_builder.shared.metrics import (
    configure_metrics,
    increment_errors,
    increment_submissions,
    increment_toggles,
    increment_transitions,
)


@pytest.fixture(autouse=True)
def reset_metrics_state():
    """Restore module-level metric globals around each test."""
    saved = {
        name: getattr(metrics_module, name)
        for name in (
            "_METRICS_CONFIGURED",
            "_meter",
            "_toggles_counter",
            "_transitions_counter",
            "_submissions_counter",
            "_errors_counter",
        )
    }
    yield
    for name, value in saved.items():
        setattr(metrics_module, name, value)


class TestMetricsConfiguration:
    """Tests for metrics configuration."""

    def test_configure_metrics_disabled_by_default(self):
        """Metrics stay disabled when ENABLE_OTEL is not set."""
        metrics_module._METRICS_CONFIGURED = False
        with patch.dict(os.environ, {}, clear=True):
            configure_metrics()
        assert metrics_module._toggles_counter is None

    @patch("stack_builder.shared.metrics.OTLPMetricExporter")
    @patch("stack_builder.shared.metrics.PeriodicExportingMetricReader")
    @patch("stack_builder.shared.metrics.MeterProvider")
    @patch("stack_builder.shared.metrics.metrics.set_meter_provider")
    @patch("stack_builder.shared.metrics.metrics.get_meter")
    def test_configure_metrics_enabled(
        self, mock_get_meter, mock_set_provider, mock_provider_class, mock_reader_class, mock_exporter_class
    ):
        """Counters are created when ENABLE_OTEL is true."""
        metrics_module._METRICS_CONFIGURED = False

        with patch.dict(os.environ, {"ENABLE_OTEL": "true", "OTLP_ENDPOINT": "localhost:4317/"}):
            mock_provider = MagicMock()
            mock_provider_class.return_value = mock_provider
            mock_meter = MagicMock()
            mock_get_meter.return_value = mock_meter

            configure_metrics()

            call_kwargs = mock_exporter_class.call_args.kwargs
            assert call_kwargs["endpoint"] == "http://localhost:4317"
            assert call_kwargs["insecure"] is True
            mock_set_provider.assert_called_once_with(mock_provider)
            mock_get_meter.assert_called_once_with("stack_builder")

            names = [c.kwargs["name"] for c in mock_meter.create_counter.call_args_list]
            assert names == [
                "option_toggles_total",
                "flow_transitions_total",
                "connect_submissions_total",
                "errors_total",
            ]


class TestMetricsIncrement:
    """Tests for metric increment helpers."""

    def test_increments_are_noops_without_counters(self):
        metrics_module._toggles_counter = None
        metrics_module._transitions_counter = None
        metrics_module._submissions_counter = None
        metrics_module._errors_counter = None

        increment_toggles("s1", "logs")
        increment_transitions("s1", "connect", allowed=False)
        increment_submissions("s1", success=False)
        increment_errors("validation_error")

    def test_increment_toggles(self):
        counter = MagicMock()
        metrics_module._toggles_counter = counter

        increment_toggles("s1", "logs")

        counter.add.assert_called_once_with(1, {"session_id": "s1", "category_id": "logs"})

    def test_increment_transitions(self):
        counter = MagicMock()
        metrics_module._transitions_counter = counter

        increment_transitions("s1", "connect", allowed=False)

        counter.add.assert_called_once_with(
            1, {"session_id": "s1", "target_step": "connect", "allowed": "False"}
        )

    def test_increment_submissions(self):
        counter = MagicMock()
        metrics_module._submissions_counter = counter

        increment_submissions("s1")

        counter.add.assert_called_once_with(1, {"session_id": "s1", "success": "True"})

    def test_increment_errors_without_session(self):
        counter = MagicMock()
        metrics_module._errors_counter = counter

        increment_errors("workflow_error")

        counter.add.assert_called_once_with(1, {"error_type": "workflow_error"})
