"""
Context managers and utilities for span management.

Provides context managers for creating spans and adding attributes/events
to the current span without explicit span references.
"""

from contextlib import contextmanager

from opentelemetry import trace

from .tracer import get_tracer


def _attribute_value(value):
    if isinstance(value, (bool, int, float, str)):
        return value
    return str(value)


@contextmanager
def trace_operation(
    operation_name: str,
    kind: trace.SpanKind = trace.SpanKind.INTERNAL,
    **attributes
):
    """
    Context manager for tracing operations.

    Creates a span, adds attributes, records errors and ensures the span
    is ended.

    Args:
        operation_name: Name of the operation being traced
        kind: Span kind (INTERNAL, CLIENT, SERVER, etc.)
        **attributes: Custom attributes to add to the span

    Yields:
        Span instance for adding custom events/attributes

    Example:
        >>> with trace_operation("validate_rows", key_columns="id") as span:
        ...     result = validator.validate(source, target)
        ...     span.set_attribute("rows_compared", result.rows_compared)
    """
    tracer = get_tracer()

    with tracer.start_as_current_span(operation_name, kind=kind) as span:
        for key, value in attributes.items():
            span.set_attribute(key, _attribute_value(value))

        try:
            yield span
        except Exception as e:
            span.set_attribute("error", True)
            span.set_attribute("error.type", type(e).__name__)
            span.set_attribute("error.message", str(e))
            span.record_exception(e)
            raise


def add_span_attributes(**attributes):
    """
    Add attributes to the current span.

    Example:
        >>> with trace_operation("load_records"):
        ...     records = load_records(path)
        ...     add_span_attributes(record_count=len(records))
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        for key, value in attributes.items():
            current_span.set_attribute(key, _attribute_value(value))


def add_span_event(name: str, **attributes):
    """
    Add an event to the current span.

    Args:
        name: Event name
        **attributes: Event attributes
    """
    current_span = trace.get_current_span()
    if current_span.is_recording():
        attrs = {k: _attribute_value(v) for k, v in attributes.items()}
        current_span.add_event(name, attributes=attrs)
