"""
Prometheus metrics for the row validation tool

Usage:
    from utils.metrics import MetricsPublisher, ValidationMetrics

    publisher = MetricsPublisher(port=9091)
    publisher.start()

    metrics = ValidationMetrics()
    metrics.record_rows_compared(1000)
"""

from .publisher import ApplicationInfo, MetricsPublisher
from .registry import get_or_create_metric
from .validation import ValidationMetrics

__all__ = [
    "MetricsPublisher",
    "ApplicationInfo",
    "ValidationMetrics",
    "get_or_create_metric",
]
