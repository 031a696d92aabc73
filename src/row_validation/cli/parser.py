"""
Command-line argument parser configuration.

This module sets up the argument parser for the row-validate CLI tool,
defining all commands and their options.
"""

import argparse


def create_parser() -> argparse.ArgumentParser:
    """
    Create and configure the argument parser for the CLI.

    Returns:
        Configured ArgumentParser instance
    """
    parser = argparse.ArgumentParser(
        prog="row-validate",
        description="Tolerance-aware row validation for data migrations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a target export against the source export, keyed by id
  row-validate run --source source.jsonl --target target.jsonl --key-columns id

  # Compare TTLs and writetimes as well, with settings from a YAML file
  row-validate run --source s.jsonl --target t.jsonl --config validation.yaml --compare-timestamps

  # Save a JSON report and render it later
  row-validate run --source s.jsonl --target t.jsonl --format json --output report.json
  row-validate report --input report.json --format console
        """
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='INFO',
        help='Logging level (default: INFO)'
    )
    parser.add_argument(
        '--log-json',
        action='store_true',
        help='Emit logs as JSON lines'
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    # ========== Run command ==========
    run_parser = subparsers.add_parser('run', help='Validate target records against source records')
    run_parser.add_argument(
        '--source',
        required=True,
        help='JSON Lines file of source records'
    )
    run_parser.add_argument(
        '--target',
        required=True,
        help='JSON Lines file of target records'
    )
    run_parser.add_argument(
        '--config',
        help='YAML file with a "validation" section'
    )
    run_parser.add_argument(
        '--key-columns',
        help='Comma-separated list of key columns (default: id)'
    )
    run_parser.add_argument(
        '--compare-timestamps',
        action=argparse.BooleanOptionalAction,
        default=None,
        help='Compare TTL and writetime columns'
    )
    run_parser.add_argument(
        '--floating-point-tolerance',
        type=float,
        help='Absolute tolerance for float and decimal values'
    )
    run_parser.add_argument(
        '--ttl-tolerance-millis',
        type=int,
        help='Maximum allowed TTL difference'
    )
    run_parser.add_argument(
        '--writetime-tolerance-millis',
        type=int,
        help='Maximum allowed writetime difference in milliseconds'
    )
    run_parser.add_argument(
        '--writetime-cutoff',
        type=int,
        help='Writetime (microseconds) below which value diffs on both sides are ignored'
    )
    run_parser.add_argument(
        '--failures-to-fetch',
        type=int,
        help='Maximum number of discrepancies to report (0 = all)'
    )
    run_parser.add_argument(
        '--workers',
        type=int,
        help='Number of parallel comparison workers'
    )
    run_parser.add_argument(
        '--batch-size',
        type=int,
        help='Number of rows compared per task'
    )
    run_parser.add_argument(
        '--format',
        choices=['console', 'json', 'csv'],
        default='console',
        help='Output format (default: console)'
    )
    run_parser.add_argument(
        '--output',
        help='Output file path for report (required for json and csv formats)'
    )
    run_parser.add_argument(
        '--metrics-port',
        type=int,
        help='Expose Prometheus metrics on this port while running'
    )

    # ========== Report command ==========
    report_parser = subparsers.add_parser('report', help='Render a report from a previous run')
    report_parser.add_argument(
        '--input',
        required=True,
        help='Input JSON report file'
    )
    report_parser.add_argument(
        '--format',
        choices=['console', 'json', 'csv'],
        default='console',
        help='Output format (default: console)'
    )
    report_parser.add_argument(
        '--output',
        help='Output file path (required for json and csv formats)'
    )

    return parser
