"""Google Docs MCP Metrics Configuration.

Local-only metrics collection using OpenTelemetry with a Prometheus reader.
Counts tool calls and document batch updates and times each tool call.
"""

from __future__ import annotations

import os
import socket
import time
from typing import Any

from opentelemetry import metrics
from opentelemetry.exporter.prometheus import PrometheusMetricReader
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from prometheus_client import CONTENT_TYPE_LATEST
from prometheus_client import generate_latest

SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "gdocs-seo-mcp")
SERVICE_VERSION = os.getenv("OTEL_SERVICE_VERSION", "1.0.0")
DEPLOYMENT_ENVIRONMENT = os.getenv("DEPLOYMENT_ENVIRONMENT", "local")


def is_test_environment() -> bool:
    """Detect if running in test environment."""
    return "PYTEST_CURRENT_TEST" in os.environ or "CI" in os.environ or "GITHUB_ACTIONS" in os.environ


# Off by default under test and CI
default_metrics_enabled = "false" if is_test_environment() else "true"
METRICS_ENABLED = os.getenv("MCP_METRICS_ENABLED", default_metrics_enabled).lower() == "true"

meter = None
tool_calls_counter = None
tool_duration_histogram = None
tool_result_size_histogram = None
batch_updates_counter = None
batch_commands_counter = None
prometheus_reader = None

_metrics_initialized = False


def get_resource() -> Resource:
    return Resource.create(
        {
            "service.name": SERVICE_NAME,
            "service.version": SERVICE_VERSION,
            "deployment.environment": DEPLOYMENT_ENVIRONMENT,
            "host.name": socket.gethostname(),
        }
    )


def initialize_metrics():
    """Create the meter provider, the Prometheus reader and all instruments."""
    global meter, tool_calls_counter, tool_duration_histogram, tool_result_size_histogram
    global batch_updates_counter, batch_commands_counter, prometheus_reader

    if not METRICS_ENABLED:
        return

    prometheus_reader = PrometheusMetricReader()
    metrics.set_meter_provider(MeterProvider(resource=get_resource(), metric_readers=[prometheus_reader]))
    meter = metrics.get_meter(__name__)

    tool_calls_counter = meter.create_counter(
        name="mcp_tool_calls_total",
        description="Total number of MCP tool calls",
        unit="1",
    )
    tool_duration_histogram = meter.create_histogram(
        name="mcp_tool_duration_seconds",
        description="Wall-clock duration of MCP tool calls",
        unit="s",
    )
    tool_result_size_histogram = meter.create_histogram(
        name="mcp_tool_result_bytes",
        description="Size of successful tool results",
        unit="By",
    )
    batch_updates_counter = meter.create_counter(
        name="docs_batch_updates_total",
        description="Total number of document batchUpdate calls",
        unit="1",
    )
    batch_commands_counter = meter.create_counter(
        name="docs_batch_commands_total",
        description="Total number of edit commands sent in batchUpdate calls",
        unit="1",
    )


def is_metrics_enabled() -> bool:
    return METRICS_ENABLED and meter is not None


def record_tool_call_start(tool_name: str, args: tuple, kwargs: dict) -> float | None:
    """Return the start time of a tool call, or None when metrics are off."""
    if not is_metrics_enabled():
        return None
    return time.time()


def _record_tool_call_end(tool_name: str, start_time: float | None, attributes: dict[str, str]):
    attributes = {"tool_name": tool_name, "environment": DEPLOYMENT_ENVIRONMENT, **attributes}
    if tool_calls_counter:
        tool_calls_counter.add(1, attributes)
    if start_time and tool_duration_histogram:
        tool_duration_histogram.record(time.time() - start_time, attributes)


def record_tool_call_success(tool_name: str, start_time: float | None, result_size: int = 0):
    if not is_metrics_enabled():
        return

    _record_tool_call_end(tool_name, start_time, {"status": "success"})
    if tool_result_size_histogram:
        tool_result_size_histogram.record(result_size, {"tool_name": tool_name})


def record_tool_call_error(tool_name: str, start_time: float | None, error: Exception):
    if not is_metrics_enabled():
        return

    _record_tool_call_end(tool_name, start_time, {"status": "error", "error_type": type(error).__name__})


def record_batch_update(command_count: int, status: str = "success"):
    """Record one document batchUpdate and the number of commands it carried."""
    if not is_metrics_enabled():
        return

    attributes = {"status": status, "environment": DEPLOYMENT_ENVIRONMENT}
    if batch_updates_counter:
        batch_updates_counter.add(1, attributes)
    if batch_commands_counter:
        batch_commands_counter.add(command_count, attributes)


def get_metrics_export() -> tuple[str, str]:
    """Export metrics in Prometheus format."""
    if not is_metrics_enabled() or not prometheus_reader:
        return "# Metrics not available\n", "text/plain"

    return generate_latest().decode("utf-8"), CONTENT_TYPE_LATEST


def get_metrics_summary() -> dict[str, Any]:
    if not is_metrics_enabled():
        return {"status": "disabled"}

    return {
        "status": "active",
        "service_name": SERVICE_NAME,
        "service_version": SERVICE_VERSION,
        "environment": DEPLOYMENT_ENVIRONMENT,
        "prometheus_enabled": prometheus_reader is not None,
    }


def ensure_metrics_initialized():
    """Initialize metrics once, when the server starts."""
    global _metrics_initialized
    if _metrics_initialized:
        return

    if METRICS_ENABLED and not is_test_environment():
        initialize_metrics()
    _metrics_initialized = True


def shutdown_metrics():
    if prometheus_reader:
        prometheus_reader.shutdown()
