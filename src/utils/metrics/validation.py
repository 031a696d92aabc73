"""
Metrics for row validation runs.

Tracks rows compared, discrepancies by finding kind, and batch timings.
"""

import logging

from prometheus_client import REGISTRY, CollectorRegistry, Counter, Gauge, Histogram

from .registry import get_or_create_metric

logger = logging.getLogger(__name__)


class ValidationMetrics:
    """
    Metrics for row validation

    Safe to instantiate more than once against the same registry; existing
    collectors are reused.
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize validation metrics

        Args:
            registry: Custom Prometheus registry (default: global REGISTRY)
        """
        self.registry = registry or REGISTRY

        self.rows_compared_total = get_or_create_metric(
            lambda: Counter(
                "validation_rows_compared_total",
                "Total number of source rows compared",
                registry=self.registry,
            ),
            "validation_rows_compared_total",
            registry=self.registry,
        )

        self.discrepancies_total = get_or_create_metric(
            lambda: Counter(
                "validation_discrepancies_total",
                "Total number of rows with at least one finding",
                registry=self.registry,
            ),
            "validation_discrepancies_total",
            registry=self.registry,
        )

        self.findings_total = get_or_create_metric(
            lambda: Counter(
                "validation_findings_total",
                "Total number of findings by kind",
                ["kind"],
                registry=self.registry,
            ),
            "validation_findings_total",
            registry=self.registry,
        )

        self.batch_duration_seconds = get_or_create_metric(
            lambda: Histogram(
                "validation_batch_duration_seconds",
                "Time to compare one batch of rows",
                buckets=(0.001, 0.005, 0.01, 0.05, 0.1, 0.5, 1.0, 5.0),
                registry=self.registry,
            ),
            "validation_batch_duration_seconds",
            registry=self.registry,
        )

        self.last_run_timestamp = get_or_create_metric(
            lambda: Gauge(
                "validation_last_run_timestamp",
                "Unix timestamp of the last completed validation run",
                registry=self.registry,
            ),
            "validation_last_run_timestamp",
            registry=self.registry,
        )

    def record_rows_compared(self, count: int) -> None:
        self.rows_compared_total.inc(count)

    def record_discrepancy(self, kinds) -> None:
        """
        Record one discrepant row

        Args:
            kinds: Finding kinds (enum members or strings) present on the row
        """
        self.discrepancies_total.inc()
        for kind in kinds:
            self.findings_total.labels(kind=getattr(kind, "value", kind)).inc()

    def record_run_completed(self, timestamp: float) -> None:
        self.last_run_timestamp.set(timestamp)
