"""
telemetry.py

PURPOSE: OpenTelemetry initialization and tracer lookup.
DEPENDENCIES: opentelemetry-api; opentelemetry-sdk and
    opentelemetry-exporter-otlp from the "observability" extra

ARCHITECTURE NOTES:
Modules call get_tracer(__name__) at import time. The API hands out proxy
tracers that record nothing until a provider is installed, so parsing
costs nothing when tracing is off. init_telemetry() installs the SDK
provider once at startup; without the extra it logs and leaves tracing off.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from opentelemetry import trace

if TYPE_CHECKING:
    from command_dsl.config import OpenTelemetrySettings

logger = logging.getLogger(__name__)

_provider: object | None = None


def init_telemetry(settings: OpenTelemetrySettings) -> None:
    """
    Install an SDK tracer provider if tracing is enabled.

    Safe to call more than once; only the first enabled call has an effect.

    Args:
        settings: OpenTelemetry configuration settings.
    """
    global _provider

    if _provider is not None:
        logger.debug("Telemetry already initialized")
        return

    if not settings.enabled:
        logger.debug("Telemetry disabled")
        return

    try:
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
    except ImportError:
        logger.warning(
            "OpenTelemetry SDK not installed, spans will not be exported. "
            "Install with: pip install command-dsl[observability]"
        )
        return

    provider = TracerProvider(resource=Resource.create({"service.name": settings.service_name}))
    provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))

    if settings.endpoint:
        try:
            from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
        except ImportError:
            logger.warning("OTLP exporter not available, using console only")
        else:
            provider.add_span_processor(
                BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.endpoint))
            )
            logger.info(f"OTLP exporter configured: {settings.endpoint}")

    trace.set_tracer_provider(provider)
    _provider = provider
    logger.info(f"Telemetry initialized: service={settings.service_name}")


def get_tracer(name: str) -> trace.Tracer:
    """
    Get a tracer for the given module name.

    Args:
        name: Module name (typically __name__).

    Returns:
        A tracer that follows whichever provider is installed.
    """
    return trace.get_tracer(name)


def shutdown_telemetry() -> None:
    """Flush and shut down the installed provider, if any."""
    global _provider

    shutdown = getattr(_provider, "shutdown", None)
    if shutdown is not None:
        shutdown()
        logger.debug("Telemetry shutdown complete")
    _provider = None
