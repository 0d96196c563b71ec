"""Command-line entry point for the desk calculator."""

import argparse
import io
import logging
from logging.handlers import RotatingFileHandler
import os
import sys
from typing import List

import yaml

from deskcalc.deskcalc import DeskCalc
from deskcalc.deskcalc_config import DeskCalcConfig
from deskcalc.deskcalc_error import DeskCalcStreamError
from deskcalc.deskcalc_token_stream import DeskCalcTokenStream


def setup_logging(log_file: str | None, level: int | str) -> None:
    """Configure logging, to a rotating log file if one is given and to stderr otherwise."""
    handler: logging.Handler
    if log_file:
        # Keep up to 5 log files, max 1MB each
        handler = RotatingFileHandler(
            log_file,
            maxBytes=1024*1024,
            backupCount=4,
            encoding='utf-8'
        )

    else:
        handler = logging.StreamHandler(sys.stderr)

    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[handler],
        force=True
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        prog="deskcalc",
        description="Desk calculator: evaluates statements such as 'x = 2 * (3 + 4); x / 7;'",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s "r = 2.5; area = pi * r * r;"   # Evaluate statements given as an argument
  %(prog)s --file sums.txt                # Evaluate statements from a file
  %(prog)s < sums.txt                     # Evaluate statements from standard input
  %(prog)s --init-config deskcalc.yaml    # Create a default configuration file

The exit status is the number of statements that failed.
        """
    )

    source_group = parser.add_mutually_exclusive_group()
    source_group.add_argument('expression', nargs='?',
                              help='Statements to evaluate (default: read standard input)')
    source_group.add_argument('--file', '-f', help='Read statements from a file')

    parser.add_argument('--config', '-c', help='Configuration file path (YAML)')
    parser.add_argument('--precision', '-p', type=int, help='Significant digits in printed results')
    parser.add_argument('--log-file', help='Write log messages to a rotating log file')
    parser.add_argument('--verbose', '-v', action='store_true', help='Verbose (debug) logging')
    parser.add_argument('--init-config', metavar='PATH', help='Write a default configuration file and exit')
    parser.add_argument('--force', action='store_true', help='Overwrite an existing file with --init-config')
    return parser


def handle_init_config(path: str, force: bool) -> int:
    """Write a default configuration file."""
    if os.path.exists(path) and not force:
        print(f"Configuration file already exists: {path}", file=sys.stderr)
        print("Use --force to overwrite.", file=sys.stderr)
        return 1

    DeskCalcConfig.create_default().save_to_file(path)
    print(f"Created configuration file: {path}")
    return 0


def load_config(args: argparse.Namespace) -> DeskCalcConfig:
    """
    Load the configuration named on the command line and apply overrides.

    Raises:
        FileNotFoundError: If the configuration file does not exist
        ValueError: If a setting is invalid
        yaml.YAMLError: If the configuration file is not valid YAML
    """
    config = DeskCalcConfig.load_from_file(args.config) if args.config else DeskCalcConfig.create_default()

    if args.precision is not None:
        config.precision = args.precision

    if args.verbose:
        config.log_level = "DEBUG"

    config.validate()
    return config


def open_stream(args: argparse.Namespace) -> DeskCalcTokenStream:
    """
    Create the token stream for the input selected on the command line.

    Raises:
        OSError: If the input file cannot be opened
    """
    if args.expression is not None:
        return DeskCalcTokenStream.owning(io.StringIO(args.expression))

    if args.file is not None:
        return DeskCalcTokenStream.owning(open(args.file, 'r', encoding='utf-8'))

    return DeskCalcTokenStream.borrowing(sys.stdin)


def main(argv: List[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.init_config:
        return handle_init_config(args.init_config, args.force)

    try:
        config = load_config(args)

    except (FileNotFoundError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    setup_logging(args.log_file, config.log_level)
    logger = logging.getLogger("DeskCalcMain")

    try:
        stream = open_stream(args)

    except OSError as e:
        print(f"Error: cannot open input: {e}", file=sys.stderr)
        return 1

    calc = DeskCalc(config)
    with stream:
        try:
            return calc.run(stream, sys.stdout, sys.stderr)

        except DeskCalcStreamError as e:
            logger.debug("Input failed, ending session: %s", e.message)
            print(str(e), file=sys.stderr)
            return calc.error_count + 1


if __name__ == "__main__":
    sys.exit(main())
