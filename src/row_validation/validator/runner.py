"""
Batch row validation.

This module drives the row comparator over a whole dataset: it pairs source
and target records by key, compares the pairs in batches on a thread pool,
and aggregates the discrepancies.
"""

import logging
import time
from collections.abc import Iterable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor
from itertools import islice

from opentelemetry import trace

from utils.logging import ContextLogger
from utils.metrics import ValidationMetrics
from utils.tracing import add_span_event, trace_operation

from ..compare import ComparisonConfig, Discrepancy, Record, compare_rows
from ..sources import pair_records
from .result import ValidationResult

logger = logging.getLogger(__name__)

Pair = tuple[Record, Record | None]


def _batched(pairs: Iterable[Pair], size: int) -> Iterator[list[Pair]]:
    iterator = iter(pairs)
    while batch := list(islice(iterator, size)):
        yield batch


class RowValidator:
    """Validates every source row against its target counterpart."""

    def __init__(
        self,
        config: ComparisonConfig,
        key_columns: Sequence[str],
        max_workers: int = 4,
        batch_size: int = 1000,
        failures_to_fetch: int = 100,
        metrics: ValidationMetrics | None = None,
    ):
        """
        Initialize row validator.

        Args:
            config: Tolerances and mode flags for each comparison
            key_columns: Columns used to match source rows to target rows
            max_workers: Maximum concurrent comparison workers
            batch_size: Number of row pairs compared per task
            failures_to_fetch: Maximum discrepancies kept in the result
                (0 keeps all of them). Every discrepancy is still counted.
            metrics: Metrics sink (default: metrics on the global registry)

        Raises:
            ValueError: If a sizing parameter is out of range
        """
        if not key_columns:
            raise ValueError("At least one key column is required")
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        if batch_size < 1:
            raise ValueError(f"batch_size must be at least 1, got {batch_size}")
        if failures_to_fetch < 0:
            raise ValueError(f"failures_to_fetch cannot be negative, got {failures_to_fetch}")

        self.config = config
        self.key_columns = list(key_columns)
        self.max_workers = max_workers
        self.batch_size = batch_size
        self.failures_to_fetch = failures_to_fetch
        self.metrics = metrics or ValidationMetrics()

    def validate(
        self,
        source_records: Iterable[Record],
        target_records: Iterable[Record],
    ) -> ValidationResult:
        """
        Compare every source record with its matching target record.

        Args:
            source_records: Records read from the source system
            target_records: Records read from the target system

        Returns:
            ValidationResult with counts and retained discrepancies in source order
        """
        with trace_operation(
            "validate_rows",
            kind=trace.SpanKind.INTERNAL,
            key_columns=",".join(self.key_columns),
            max_workers=self.max_workers,
            compare_timestamps=self.config.compare_timestamps,
        ) as span:
            start = time.monotonic()
            result = ValidationResult()

            pairs = pair_records(source_records, target_records, self.key_columns)
            batches = _batched(pairs, self.batch_size)

            run_logger = ContextLogger(__name__, key_columns=",".join(self.key_columns))
            run_logger.info(
                f"Starting row validation: workers={self.max_workers}, "
                f"batch_size={self.batch_size}"
            )

            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                # map() yields in submission order, which keeps output deterministic
                for batch_size, discrepancies in executor.map(self._compare_batch, batches):
                    result.rows_compared += batch_size
                    self.metrics.record_rows_compared(batch_size)

                    for discrepancy in discrepancies:
                        self._record(result, discrepancy)

            result.duration_seconds = time.monotonic() - start
            self.metrics.record_run_completed(time.time())

            span.set_attribute("rows_compared", result.rows_compared)
            span.set_attribute("discrepancy_count", result.discrepancy_count)
            add_span_event("validation_completed", passed=result.passed)

            run_logger.info(
                f"Row validation complete: {result.rows_compared} rows compared, "
                f"{result.discrepancy_count} discrepancies "
                f"in {result.duration_seconds:.2f}s"
            )
            if result.truncated:
                run_logger.warning(
                    f"Only the first {self.failures_to_fetch} of "
                    f"{result.discrepancy_count} discrepancies were kept"
                )

            return result

    def _compare_batch(self, batch: list[Pair]) -> tuple[int, list[Discrepancy]]:
        with self.metrics.batch_duration_seconds.time():
            discrepancies = []
            for source, target in batch:
                discrepancy = compare_rows(source, target, self.config)
                if discrepancy is not None:
                    discrepancies.append(discrepancy)
            return len(batch), discrepancies

    def _record(self, result: ValidationResult, discrepancy: Discrepancy) -> None:
        keep = (
            self.failures_to_fetch == 0
            or len(result.discrepancies) < self.failures_to_fetch
        )
        result.add(discrepancy, keep=keep)
        self.metrics.record_discrepancy(discrepancy.kinds)

        if keep:
            logger.debug(f"Discrepancy found\n{discrepancy}")
