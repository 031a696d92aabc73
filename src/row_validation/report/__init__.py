"""
Validation report generation and formatting.

This submodule builds reports from validation results, with support for
console, JSON and CSV output.
"""

from .formatters import export_report_csv, export_report_json, format_report_console
from .generator import generate_report

__all__ = [
    'generate_report',
    'export_report_json',
    'export_report_csv',
    'format_report_console',
]
