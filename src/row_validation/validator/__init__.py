"""
Dataset-level validation built on the row comparator.

Pairs source and target records by key, compares them in parallel
batches, and aggregates the discrepancies into a ValidationResult.
"""

from .result import ValidationResult
from .runner import RowValidator

__all__ = [
    'RowValidator',
    'ValidationResult',
]
