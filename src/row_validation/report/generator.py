"""
Report generation for validation results.

Turns a ValidationResult into a report dictionary with a status, finding
counts, a human readable summary and recommended follow-up actions.
"""

from datetime import UTC, datetime
from typing import Any

from ..compare import ComparisonConfig, FindingKind
from ..sources import encode_value
from ..validator import ValidationResult

# Follow-up action per finding kind
RECOMMENDATIONS = {
    FindingKind.MISSING_TARGET_ROW: (
        "Rows are missing from the target. Re-run the migration for the affected "
        "keys, or enable compareTimestamps if the rows carry TTLs that may have expired."
    ),
    FindingKind.COLUMN_COUNT_MISMATCH: (
        "Source and target expose a different number of columns. Check that the "
        "target schema matches the source and that both reads select the same columns."
    ),
    FindingKind.COLUMN_NAME_MISMATCH: (
        "Column names or their order differ between source and target. Align the "
        "column selection of both reads."
    ),
    FindingKind.VALUE_MISMATCH: (
        "Column values differ. Inspect the listed columns; raise "
        "floatingPointTolerance only if the differences are representational noise."
    ),
    FindingKind.TTL_MISMATCH: (
        "TTLs differ beyond ttlToleranceMillis. Verify that the migration preserves TTLs."
    ),
    FindingKind.WRITETIME_MISMATCH: (
        "Writetimes differ beyond writetimeToleranceMillis. Verify that the migration "
        "preserves write timestamps."
    ),
}


def _encode_row(row: dict[str, Any] | None) -> dict[str, Any] | None:
    if row is None:
        return None
    return {name: encode_value(value) for name, value in row.items()}


def _discrepancy_entry(discrepancy) -> dict[str, Any]:
    entry = discrepancy.to_dict()
    entry["source_row"] = _encode_row(entry["source_row"])
    entry["target_row"] = _encode_row(entry["target_row"])
    entry["text"] = str(discrepancy)
    return entry


def _generate_summary(result: ValidationResult) -> str:
    if result.rows_compared == 0:
        return "No rows were compared"

    if result.passed:
        return f"All {result.rows_compared:,} rows match within the configured tolerances"

    rate = result.discrepancy_count / result.rows_compared * 100
    summary = (
        f"{result.discrepancy_count:,} of {result.rows_compared:,} rows "
        f"({rate:.2f}%) have discrepancies"
    )
    if result.structural_count:
        summary += (
            f"; {result.structural_count:,} missing from the target "
            f"or with a different column layout"
        )
    if result.truncated:
        summary += f"; showing the first {len(result.discrepancies):,}"
    return summary


def _generate_recommendations(result: ValidationResult) -> list[str]:
    return [
        RECOMMENDATIONS[kind]
        for kind in FindingKind
        if result.finding_counts.get(kind.value)
    ]


def generate_report(
    result: ValidationResult,
    config: ComparisonConfig | None = None,
) -> dict[str, Any]:
    """
    Generate a validation report

    Args:
        result: Outcome of a validation run
        config: Comparison configuration used for the run (echoed in the report)

    Returns:
        Dictionary containing:
        - status: PASS, FAIL, or NO_DATA
        - rows_compared / discrepancy_count / finding_counts
        - discrepancies: Retained discrepancy details
        - truncated: Whether some discrepancies were dropped
        - summary: Human-readable summary
        - recommendations: List of recommended actions
        - configuration: Tolerances and flags of the run
        - duration_seconds / timestamp
    """
    if result.rows_compared == 0:
        status = "NO_DATA"
    elif result.passed:
        status = "PASS"
    else:
        status = "FAIL"

    return {
        "status": status,
        "rows_compared": result.rows_compared,
        "discrepancy_count": result.discrepancy_count,
        "finding_counts": {
            kind.value: result.finding_counts.get(kind.value, 0) for kind in FindingKind
        },
        "structural_count": result.structural_count,
        "discrepancies": [_discrepancy_entry(d) for d in result.discrepancies],
        "truncated": result.truncated,
        "summary": _generate_summary(result),
        "recommendations": _generate_recommendations(result),
        "configuration": config.to_dict() if config is not None else {},
        "duration_seconds": round(result.duration_seconds, 3),
        "timestamp": result.timestamp.isoformat(),
        "generated_at": datetime.now(UTC).isoformat(),
    }
