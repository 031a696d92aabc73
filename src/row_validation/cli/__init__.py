"""
Command-line interface for row validation.

Available commands:
- run: Validate target records against source records
- report: Render a report from a previous run
"""

import sys

from utils.logging import setup_logging
from utils.tracing import shutdown_tracing

from .commands import cmd_report, cmd_run
from .parser import create_parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the row-validate CLI"""
    parser = create_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level, json_format=args.log_json)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == 'run':
            exit_code = cmd_run(args)
        else:
            exit_code = cmd_report(args)
    finally:
        shutdown_tracing()

    sys.exit(exit_code)


__all__ = [
    'main',
    'cmd_run',
    'cmd_report',
    'create_parser',
]


if __name__ == '__main__':
    main()
