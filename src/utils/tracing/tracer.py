"""
Tracer initialization and configuration for OpenTelemetry.

Exporters are opt-in: spans go to an OTLP collector only when an endpoint
is configured, and to the console only when asked for.
"""

import logging
import os

from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor, ConsoleSpanExporter
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

logger = logging.getLogger(__name__)

DEFAULT_SERVICE_NAME = "row-validation"

_tracer: trace.Tracer | None = None
_provider: TracerProvider | None = None


def initialize_tracing(
    service_name: str = DEFAULT_SERVICE_NAME,
    otlp_endpoint: str | None = None,
    console_export: bool = False,
    sampling_rate: float = 1.0,
) -> trace.Tracer:
    """
    Initialize distributed tracing with OpenTelemetry.

    Args:
        service_name: Name of the service for identification
        otlp_endpoint: OTLP collector endpoint (e.g. "localhost:4317").
            Falls back to the OTLP_ENDPOINT environment variable.
        console_export: If True, also export spans to the console
        sampling_rate: Sampling rate 0.0-1.0 (1.0 = trace everything)

    Returns:
        Configured tracer instance
    """
    global _tracer, _provider

    if _tracer is not None:
        logger.debug("Tracing already initialized, returning existing tracer")
        return _tracer

    provider = TracerProvider(
        resource=Resource(attributes={SERVICE_NAME: service_name}),
        sampler=TraceIdRatioBased(sampling_rate),
    )

    exporters = []

    endpoint = otlp_endpoint or os.getenv("OTLP_ENDPOINT")
    if endpoint:
        provider.add_span_processor(
            BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint, insecure=True))
        )
        exporters.append("OTLP")
        logger.info(f"OTLP exporter configured: {endpoint}")

    if console_export or os.getenv("TRACE_CONSOLE", "").lower() == "true":
        provider.add_span_processor(BatchSpanProcessor(ConsoleSpanExporter()))
        exporters.append("Console")

    if not exporters:
        logger.debug("No trace exporters configured, spans will not be exported")

    _provider = provider
    _tracer = provider.get_tracer(service_name)

    logger.debug(
        f"Tracing initialized: {service_name} "
        f"(exporters: {', '.join(exporters) or 'none'}, sampling: {sampling_rate})"
    )
    return _tracer


def get_tracer() -> trace.Tracer:
    """
    Get the tracer instance, initializing tracing with defaults if needed.
    """
    if _tracer is None:
        return initialize_tracing()
    return _tracer


def shutdown_tracing() -> None:
    """
    Flush pending spans and shut the tracer provider down.

    Should be called before application exit.
    """
    global _tracer, _provider

    if _provider is None:
        return

    try:
        _provider.shutdown()
        logger.debug("Tracing shutdown complete")
    except Exception as e:
        logger.error(f"Error during tracing shutdown: {e}")
    finally:
        _provider = None
        _tracer = None
