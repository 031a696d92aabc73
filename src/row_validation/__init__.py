"""
Row validation for data migrations

Checks that every row read from a source system has an equivalent row in
the target system, tolerating floating point noise, expired TTLs, and
writes that land between the two non-atomic reads.

Components:
- compare: The pure row comparator (records, findings, tolerances)
- sources: JSON Lines record loading and key-based pairing
- validator: Parallel batch validation over whole datasets
- report: Report generation and export
- settings: YAML/environment configuration
- cli: The row-validate command

Usage:
    from row_validation.compare import ComparisonConfig, Record, compare_rows

    discrepancy = compare_rows(source_record, target_record, ComparisonConfig())
"""

__version__ = "1.0.0"
__all__ = ["compare", "sources", "validator", "report", "settings", "cli"]
