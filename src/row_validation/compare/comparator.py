"""
Row comparator.

Decides whether a source row and its (optional) target row are equivalent
under the configured tolerances, and describes every discrepancy otherwise.
The comparison is a pure function: no I/O, no shared state.
"""

from .config import ComparisonConfig
from .findings import Discrepancy, Finding
from .records import (
    WRITETIME_SUFFIX,
    Record,
    is_metadata_column,
    is_ttl_column,
    is_writetime_column,
)
from .values import values_differ


def compare_rows(
    source: Record,
    target: Record | None,
    config: ComparisonConfig,
) -> Discrepancy | None:
    """
    Compare a source row against its target row

    Structural checks run first and short-circuit: missing target row,
    column count, then column names. Structurally comparable rows get value,
    TTL and writetime comparison, merged into a single discrepancy.

    Args:
        source: Row read from the source system
        target: Matching row read from the target system, or None if absent
        config: Tolerances and mode flags

    Returns:
        None if the rows are equivalent, otherwise a Discrepancy listing
        every finding in order
    """
    if target is None:
        if _target_could_have_expired(source, config):
            return None
        return Discrepancy(source, None, (Finding.missing_target_row(),))

    if len(source) != len(target):
        return Discrepancy(source, target, (Finding.column_count_mismatch(),))

    if source.column_names != target.column_names:
        return Discrepancy(source, target, (Finding.column_name_mismatch(),))

    findings = []

    differing_columns = differing_values(source, target, config)
    if differing_columns:
        findings.append(Finding.value_mismatch(differing_columns))

    if config.compare_timestamps:
        ttl_entries = differing_timestamps(
            source, target, is_ttl_column, config.ttl_tolerance_millis
        )
        if ttl_entries:
            findings.append(Finding.ttl_mismatch(ttl_entries))

        writetime_entries = differing_timestamps(
            source, target, is_writetime_column, config.writetime_tolerance_micros
        )
        if writetime_entries:
            findings.append(Finding.writetime_mismatch(writetime_entries))

    if not findings:
        return None
    return Discrepancy(source, target, tuple(findings))


def _target_could_have_expired(source: Record, config: ComparisonConfig) -> bool:
    """
    Check whether a missing target row is explained by TTL expiry.

    The row may legitimately have expired between the two reads if every
    TTL on the source is within the TTL tolerance.
    """
    if not config.compare_timestamps:
        return False

    ttl_values = [
        source.get_long(name)
        for name in source.column_names
        if is_ttl_column(name) and source.get(name) is not None
    ]
    if not ttl_values:
        return False
    return all(ttl <= config.ttl_tolerance_millis for ttl in ttl_values)


def differing_values(
    source: Record,
    target: Record,
    config: ComparisonConfig,
) -> list[str]:
    """
    Names of regular (non-metadata) columns whose values differ

    Columns are returned in record order.
    """
    differing = []

    for name in source.column_names:
        if is_metadata_column(name):
            continue

        if not values_differ(source.get(name), target.get(name), config.floating_point_tolerance):
            continue

        if _written_before_cutoff(name, source, target, config):
            continue

        differing.append(name)

    return differing


def _written_before_cutoff(
    name: str,
    source: Record,
    target: Record,
    config: ComparisonConfig,
) -> bool:
    """
    Whether a value diff should be ignored because of the writetime cutoff.

    Reads from the two systems are not atomic, so a diff on a column whose
    both writetimes are below the cutoff is not reported. Only applies when
    timestamps are not being compared.
    """
    if config.compare_timestamps:
        return False

    writetime_name = name + WRITETIME_SUFFIX
    if writetime_name not in source:
        return False

    source_writetime = source.get_long(writetime_name)
    target_writetime = target.get_long(writetime_name)
    if source_writetime is None or target_writetime is None:
        return False

    return (
        source_writetime < config.writetime_cutoff
        and target_writetime < config.writetime_cutoff
    )


def differing_timestamps(
    source: Record,
    target: Record,
    column_filter,
    tolerance: int,
) -> list[tuple[str, int]]:
    """
    Compare TTL or writetime columns

    Args:
        source: Source row
        target: Target row
        column_filter: Predicate selecting the metadata columns to compare
        tolerance: Maximum allowed absolute difference, in the column's unit

    Returns:
        List of (column, difference) in record order. A value present on one
        side only is reported with that value as the difference.
    """
    entries = []

    for name in source.column_names:
        if not column_filter(name):
            continue

        left = source.get_long(name)
        right = target.get_long(name)

        if left is not None and right is not None:
            difference = abs(left - right)
            if difference > tolerance:
                entries.append((name, difference))
        elif left is not None:
            entries.append((name, left))
        elif right is not None:
            entries.append((name, right))

    return entries
