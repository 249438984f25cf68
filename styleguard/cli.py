"""Command-line entry point for styleguard."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import List

from . import __version__, rules
from .config import LintConfig, load_config
from .engine import Engine
from .errors import ConfigError, NoInputError
from .report import FORMATS, format_summary_line, render
from .result import Report

logger = logging.getLogger("styleguard")

EXIT_FATAL = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="styleguard",
        description="Check Swift sources against the style guide conventions",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log progress to stderr (repeat for debug output).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser("check", help="Check files or directories")
    check_parser.add_argument("paths", nargs="*", help="Files or directories to check.")
    check_parser.add_argument("--config", default=None, help="Path to a YAML config file.")
    check_parser.add_argument(
        "--format",
        choices=list(FORMATS),
        default="text",
        help="Report format (defaults to text).",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit non-zero on warnings as well as errors.",
    )
    check_parser.add_argument(
        "--out",
        "--output",
        dest="output_path",
        default=None,
        help="Write the report to this file instead of stdout.",
    )
    check_parser.add_argument("--workers", type=int, default=None, help="Worker threads (overrides config).")
    check_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Abort outstanding files after this many seconds (overrides config).",
    )

    rules_parser = subparsers.add_parser("rules", help="List the configured rules")
    rules_parser.add_argument("--config", default=None, help="Path to a YAML config file.")
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def _effective_config(args: argparse.Namespace) -> LintConfig:
    config = load_config(args.config)
    changes = {}
    if args.strict:
        changes["strict"] = True
    if args.workers is not None:
        if args.workers < 1:
            raise ConfigError("--workers must be a positive integer")
        changes["workers"] = args.workers
    if args.timeout is not None:
        if args.timeout <= 0:
            raise ConfigError("--timeout must be a positive number of seconds")
        changes["timeout"] = args.timeout
    return dataclasses.replace(config, **changes) if changes else config


def write_output(report: Report, output_path: str | None, report_format: str) -> None:
    payload = render(report, report_format)
    if output_path:
        output_file = Path(output_path)
        output_file.parent.mkdir(parents=True, exist_ok=True)
        output_file.write_text(payload + "\n", encoding="utf-8")
        print(format_summary_line(report))
        print(f"Report written to {output_path}")
    else:
        print(payload)


def run_check(args: argparse.Namespace) -> int:
    config = _effective_config(args)
    report = Engine().run(args.paths, config)
    write_output(report, args.output_path, args.format)
    return report.exit_code(strict=config.strict)


def run_rules(args: argparse.Namespace) -> int:
    ruleset = rules.load(load_config(args.config))
    width = max((len(rule.id) for rule in ruleset), default=0)
    for rule in ruleset:
        print(f"{rule.id:<{width}}  {rule.severity.value:<7}  {rule.description}")
    return 0


def main(argv: List[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    try:
        if args.command == "check":
            return run_check(args)
        if args.command == "rules":
            return run_rules(args)
    except (ConfigError, NoInputError) as exc:
        logger.debug("Fatal error", exc_info=True)
        print(f"styleguard: error: {exc}", file=sys.stderr)
        return EXIT_FATAL

    parser.error(f"Unsupported command: {args.command}")
    return EXIT_FATAL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
