"""
CLI command implementations.

- run: validate a target dataset against a source dataset
- report: render a report saved by a previous run
"""

import argparse
import json
import logging
from typing import Any

from utils.metrics import ApplicationInfo, MetricsPublisher
from utils.tracing import trace_operation

from .. import __version__
from ..report import (
    export_report_csv,
    export_report_json,
    format_report_console,
    generate_report,
)
from ..settings import load_settings
from ..sources import RecordFormatError, load_records
from ..validator import RowValidator

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1


def _write_report(report: dict[str, Any], output_format: str, output: str | None) -> None:
    """Write a report in the requested format."""
    if output_format == 'console':
        text = format_report_console(report)
        if output:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text + "\n")
            logger.info(f"Console report saved to {output}")
        else:
            print(text)
        return

    if not output:
        raise ValueError(f"--output is required for {output_format} format")

    if output_format == 'json':
        export_report_json(report, output)
    else:
        export_report_csv(report, output)
    logger.info(f"{output_format.upper()} report saved to {output}")


def cmd_run(args: argparse.Namespace) -> int:
    """
    Run a validation

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code: 0 when every row matches, 1 otherwise
    """
    logger.info("Starting row validation run")

    try:
        settings = load_settings(
            args.config,
            compare_timestamps=args.compare_timestamps,
            floating_point_tolerance=args.floating_point_tolerance,
            ttl_tolerance_millis=args.ttl_tolerance_millis,
            writetime_tolerance_millis=args.writetime_tolerance_millis,
            writetime_cutoff=args.writetime_cutoff,
            failures_to_fetch=args.failures_to_fetch,
            key_columns=args.key_columns,
            max_workers=args.workers,
            batch_size=args.batch_size,
        )
        config = settings.comparison_config()

        if args.metrics_port:
            MetricsPublisher(port=args.metrics_port).start()
            ApplicationInfo(version=__version__)

        with trace_operation("cli_run", source=args.source, target=args.target):
            source_records = load_records(args.source)
            target_records = load_records(args.target)

            validator = RowValidator(
                config,
                key_columns=settings.key_columns,
                max_workers=settings.max_workers,
                batch_size=settings.batch_size,
                failures_to_fetch=settings.failures_to_fetch,
            )
            result = validator.validate(source_records, target_records)

        report = generate_report(result, config)
        _write_report(report, args.format, args.output)

    except RecordFormatError as e:
        logger.error(f"Malformed record file: {e}")
        return EXIT_FAILURE
    except (OSError, ValueError, KeyError, RuntimeError) as e:
        logger.error(f"Validation failed: {e}", exc_info=True)
        return EXIT_FAILURE

    if result.passed:
        logger.info("Validation passed")
        return EXIT_OK

    logger.warning(f"Validation found {result.discrepancy_count} row(s) with discrepancies")
    return EXIT_FAILURE


def cmd_report(args: argparse.Namespace) -> int:
    """
    Render a report saved by a previous run

    Args:
        args: Parsed command-line arguments

    Returns:
        Process exit code
    """
    try:
        with open(args.input, encoding='utf-8') as f:
            report = json.load(f)
        _write_report(report, args.format, args.output)
    except (OSError, ValueError, KeyError) as e:
        logger.error(f"Failed to render report: {e}", exc_info=True)
        return EXIT_FAILURE

    return EXIT_OK

