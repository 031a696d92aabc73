"""
Tolerance-aware row comparison.

This submodule decides whether a source row and its target row are
equivalent, accounting for:
- Floating point and decimal representation noise
- TTL expiry between the two reads
- Concurrent writes landing between non-atomic reads (writetime cutoff)
"""

from .comparator import compare_rows, differing_timestamps, differing_values
from .config import ComparisonConfig
from .findings import Discrepancy, Finding, FindingKind
from .records import Record, is_metadata_column, is_ttl_column, is_writetime_column
from .values import ValueKind, value_kind, values_differ

__all__ = [
    'compare_rows',
    'differing_values',
    'differing_timestamps',
    'ComparisonConfig',
    'Discrepancy',
    'Finding',
    'FindingKind',
    'Record',
    'ValueKind',
    'value_kind',
    'values_differ',
    'is_metadata_column',
    'is_ttl_column',
    'is_writetime_column',
]
