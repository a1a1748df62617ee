#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Qatch - Quick Patch Tool, command line entry point.

    qatch --target game.exe --backup --find-replace "74 ?? 8B:EB ?? 8B"
    qatch -t fw.bin -f "DE AD BE EF" -r "CA FE BA BE" -fr 4142:4344

Find/replace pairs keep the order they were given in, whether they come from
``--find``/``--replace`` or from the combined ``--find-replace`` form. Pairs
from a config file run after the command line pairs.
"""

import sys
import logging
import argparse
from typing import List, Optional, Sequence

from .config import load_config
from .controller import patch_file, write_report_json
from .exceptions import BaseError, ConfigurationError
from .logging_config import setup_logging
from .version import load_version

logger = logging.getLogger(__name__)

FIND_WITHOUT_REPLACE = "--find requires corresponding --replace"
BAD_COMBINED_FORMAT = "Invalid find-replace format. Use <find>:<replace>"


class _FindAction(argparse.Action):
    """--find: remember the pattern until the matching --replace shows up."""

    def __call__(self, parser, namespace, values, option_string=None):
        if namespace.pending_find is not None:
            namespace.arg_errors.append(FIND_WITHOUT_REPLACE)
        namespace.pending_find = values


class _ReplaceAction(argparse.Action):
    """--replace: close the pending --find pair."""

    def __call__(self, parser, namespace, values, option_string=None):
        if namespace.pending_find is None:
            logger.warning("Ignoring %s %s without a preceding --find", option_string, values)
            return
        namespace.pairs.append((namespace.pending_find, values))
        namespace.pending_find = None


class _FindReplaceAction(argparse.Action):
    """--find-replace: ``<find>:<replace>``, split on the first colon."""

    def __call__(self, parser, namespace, values, option_string=None):
        find, sep, replace = values.partition(":")
        if not sep:
            namespace.arg_errors.append(BAD_COMBINED_FORMAT)
            return
        namespace.pairs.append((find, replace))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qatch",
        description="Qatch - Quick Patch Tool. Find and replace hex byte patterns "
                    "(with ?? wildcards) inside a binary file.",
    )
    parser.add_argument("--target", "-t", metavar="TARGET", help="Target file to patch")
    parser.add_argument("--backup", "-b", action="store_true", default=None,
                        help="Create backup with .BAK extension")
    parser.add_argument("--find", "-f", metavar="PATTERN", action=_FindAction,
                        help="Find pattern (requires --replace)")
    parser.add_argument("--replace", "-r", metavar="PATTERN", action=_ReplaceAction,
                        help="Replace pattern (requires --find)")
    parser.add_argument("--find-replace", "-fr", metavar="F:R", action=_FindReplaceAction,
                        help="Combined find and replace pattern")
    parser.add_argument("--config", "-c", metavar="PATH",
                        help="JSON or YAML config file (default: $QATCH_CONFIG)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Search and report without writing the target")
    parser.add_argument("--report-json", metavar="PATH", help="Write a JSON report of the run")
    parser.add_argument("--log-level", metavar="LEVEL", help="Log level for stderr output")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    parser.add_argument("--version", action="store_true", help="Show version information")
    return parser


def parse_arguments(argv: Sequence[str], parser: Optional[argparse.ArgumentParser] = None) -> argparse.Namespace:
    """Parse ``argv``; collected pairs end up in ``args.pairs``, problems in ``args.arg_errors``."""
    parser = parser or build_parser()
    namespace = argparse.Namespace(pairs=[], arg_errors=[], pending_find=None)
    args = parser.parse_args(list(argv), namespace=namespace)
    if args.pending_find is not None:
        args.arg_errors.append(FIND_WITHOUT_REPLACE)
        args.pending_find = None
    return args


def main(argv: Optional[List[str]] = None) -> int:
    """Main function, returns the process exit code."""
    parser = build_parser()
    argv = sys.argv[1:] if argv is None else list(argv)

    if not argv:
        parser.print_help()
        return 0

    args = parse_arguments(argv, parser)

    if args.version:
        print(f"Qatch v{load_version()}")
        return 0

    for error in args.arg_errors:
        print(f"Error: {error}")

    try:
        config = load_config(args.config)
    except BaseError as e:
        print(f"Error: {e}")
        return 1

    try:
        setup_logging(
            log_level=args.log_level or config.logging.level,
            log_file=config.logging.file,
            structured_json=True if (args.log_json or config.logging.json_output) else None,
        )
    except OSError as e:
        error = ConfigurationError(f"Cannot open log file {config.logging.file}: {e.strerror or e}",
                                   error_code="LOG_FILE_ERROR", file_path=str(config.logging.file))
        print(f"Error: {error}")
        return 1

    pairs = list(args.pairs) + config.patch_pairs()

    if not args.target:
        print("Error: Target path is required")
        return 1

    if not pairs:
        print("Error: At least one find-replace pattern required")
        return 1

    backup = config.backup.enabled if args.backup is None else args.backup

    try:
        result = patch_file(
            args.target,
            pairs,
            backup=backup,
            backup_suffix=config.backup.suffix,
            dry_run=args.dry_run,
            log_cb=print,
        )
        if args.report_json:
            write_report_json(result, args.report_json)
    except BaseError as e:
        logger.debug("Patch run failed: %s", e.to_dict())
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
