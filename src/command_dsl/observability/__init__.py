"""
observability/__init__.py

PURPOSE: OpenTelemetry tracing for command file parsing.
DEPENDENCIES: opentelemetry-api, opentelemetry-sdk (optional)

ARCHITECTURE NOTES:
Tracing is opt-in:
- Spans are no-ops until init_telemetry() installs an SDK provider
- Console output by default when enabled
- OTLP export when endpoint is configured
"""

from command_dsl.observability.telemetry import get_tracer, init_telemetry, shutdown_telemetry

__all__ = ["init_telemetry", "get_tracer", "shutdown_telemetry"]
