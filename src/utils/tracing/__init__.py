"""
Distributed tracing using OpenTelemetry.

Instruments record loading, row validation runs and CLI commands.
"""

from .context import add_span_attributes, add_span_event, trace_operation
from .decorators import trace_function
from .tracer import get_tracer, initialize_tracing, shutdown_tracing

__all__ = [
    "initialize_tracing",
    "get_tracer",
    "shutdown_tracing",
    "trace_operation",
    "trace_function",
    "add_span_attributes",
    "add_span_event",
]
