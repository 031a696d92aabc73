"""
Report formatting and export utilities.

This module exports validation reports as JSON, CSV, or console text.
"""

import csv
import json
from typing import Any


def export_report_json(report: dict[str, Any], output_path: str) -> None:
    """
    Export report to JSON file

    Args:
        report: Report dictionary
        output_path: Path to output file
    """
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(report, f, indent=2, default=str)


def export_report_csv(report: dict[str, Any], output_path: str) -> None:
    """
    Export report to CSV file, one line per finding

    Args:
        report: Report dictionary
        output_path: Path to output file
    """
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f)

        writer.writerow([
            "Source Row",
            "Target Row",
            "Finding",
            "Description",
        ])

        for discrepancy in report.get("discrepancies", []):
            source_row = json.dumps(discrepancy.get("source_row"), default=str)
            target_row = json.dumps(discrepancy.get("target_row"), default=str)
            for finding in discrepancy.get("findings", []):
                writer.writerow([
                    source_row,
                    target_row,
                    finding.get("kind", ""),
                    finding.get("description", ""),
                ])


def format_report_console(report: dict[str, Any]) -> str:
    """
    Format report for console output

    Args:
        report: Report dictionary

    Returns:
        Formatted string for console display
    """
    lines = []

    lines.append("=" * 80)
    lines.append("ROW VALIDATION REPORT")
    lines.append("=" * 80)
    lines.append(f"Status: {report['status']}")
    lines.append(f"Timestamp: {report['timestamp']}")
    lines.append(f"Rows Compared: {report['rows_compared']:,}")
    lines.append(f"Rows With Discrepancies: {report['discrepancy_count']:,}")
    lines.append("")

    lines.append("SUMMARY")
    lines.append("-" * 80)
    lines.append(report['summary'])
    lines.append("")

    counts = {kind: count for kind, count in report.get('finding_counts', {}).items() if count}
    if counts:
        lines.append("FINDINGS")
        lines.append("-" * 80)
        for kind, count in counts.items():
            lines.append(f"{kind}: {count:,}")
        lines.append("")

    if report['discrepancies']:
        lines.append("DISCREPANCIES")
        lines.append("-" * 80)
        for disc in report['discrepancies']:
            lines.append(disc['text'])
            lines.append("")

    if report['recommendations']:
        lines.append("RECOMMENDATIONS")
        lines.append("-" * 80)
        for i, rec in enumerate(report['recommendations'], 1):
            lines.append(f"{i}. {rec}")
        lines.append("")

    lines.append("=" * 80)

    return "\n".join(lines)
