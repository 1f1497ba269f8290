"""
HTMLVal CLI — Command-line interface for validating documents.
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from htmlval import __version__
from htmlval.core.context import ValidationRequest
from htmlval.core.engine import get_engine
from htmlval.core.logging import LogChannel, configure_logging, get_logger
from htmlval.output.report import (
    DocumentReport,
    DocumentStatus,
    ValidationReport,
    build_report,
    document_report,
    save,
    to_json,
    unreadable_document,
)
from htmlval.rules.loader import RulesetError, get_rules, load_rules_from_path
from htmlval.rules.models import RuleTables

# Exit codes
EXIT_OK = 0
EXIT_INVALID = 1
EXIT_UNREADABLE = 2

STDIN = "-"

log = get_logger(LogChannel.SYSTEM)


def main(argv: Optional[list[str]] = None) -> int:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="htmlval",
        description="HTML5 structural validator",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"htmlval {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Check command
    check_parser = subparsers.add_parser("check", help="Validate HTML documents")
    check_parser.add_argument(
        "paths",
        nargs="*",
        default=[STDIN],
        help="Files to validate (use - for stdin, the default)",
    )
    check_parser.add_argument(
        "-o",
        "--output",
        type=str,
        default=None,
        help="Output file path (default: stdout)",
    )
    check_parser.add_argument(
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format: text (default) or json report",
    )
    check_parser.add_argument(
        "--rules",
        type=str,
        default=None,
        help="Path to an alternative ruleset YAML file",
    )
    check_parser.add_argument(
        "--warnings-as-errors",
        action="store_true",
        help="Treat documents with warnings as failed",
    )

    # Logging configuration
    check_parser.add_argument(
        "--log-level",
        type=str,
        choices=["silent", "info", "verbose", "debug"],
        default=None,
        help="Log verbosity level (default: info, or HTMLVAL_LOG_LEVEL env var)",
    )
    check_parser.add_argument(
        "--log-channel",
        type=str,
        default=None,
        help="Comma-separated log channels to show (pipeline,lexer,tree,rules,document,system). Default: all",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return EXIT_OK

    if args.command == "check":
        return run_check(args)

    return EXIT_OK


def run_check(args: argparse.Namespace) -> int:
    """Run the check command."""
    # Configure logging first
    channels = None
    if args.log_channel:
        channels = [ch.strip() for ch in args.log_channel.split(",")]

    configure_logging(
        level=args.log_level,
        channels=channels,
        force=True,
    )

    try:
        rules = load_rules_from_path(Path(args.rules)) if args.rules else get_rules()
    except (OSError, RulesetError) as e:
        print(f"htmlval: cannot load rules: {e}", file=sys.stderr)
        return EXIT_UNREADABLE

    documents = [check_source(source, rules, args.warnings_as_errors) for source in args.paths]
    report = build_report(documents)

    if args.format == "json":
        if args.output:
            save(report, args.output)
        else:
            print(to_json(report))
    else:
        output = format_text(report)
        if args.output:
            Path(args.output).write_text(output + "\n", encoding="utf-8")
        else:
            print(output)

    return exit_code(report)


def check_source(source: str, rules: RuleTables, warnings_as_errors: bool = False) -> DocumentReport:
    """Read one input and validate it; unreadable inputs become error entries."""
    try:
        text = read_source(source)
    except (OSError, UnicodeDecodeError) as e:
        log.error("input_unreadable", source=source, error=str(e))
        return unreadable_document(source, str(e))

    request = ValidationRequest(text=text, source=source)
    result = get_engine().validate(request, rules=rules)
    return document_report(result, source=source, warnings_as_errors=warnings_as_errors)


def read_source(source: str) -> str:
    if source == STDIN:
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def format_text(report: ValidationReport) -> str:
    """
    Render a report as ``path:line:col: type [rule] message`` lines.

    Each document ends with a one-line verdict; a run over several
    documents ends with the totals.
    """
    lines: list[str] = []
    for doc in report.results:
        for diagnostic in doc.errors + doc.warnings:
            lines.append(diagnostic.format(doc.source))

        if doc.unreadable:
            lines.append(f"{doc.source}: Error - {doc.message}")
        elif doc.status == DocumentStatus.SUCCESS:
            lines.append(
                f"{doc.source}: Validation PASSED - No errors found, {doc.warning_count} warning(s)"
            )
        else:
            lines.append(
                f"{doc.source}: Validation FAILED - {doc.error_count} error(s), "
                f"{doc.warning_count} warning(s)"
            )

    if report.total_documents > 1:
        lines.append("=" * 80)
        lines.append(report.summary())

    return "\n".join(lines)


def exit_code(report: ValidationReport) -> int:
    """0 when every document passed, 2 if any input was unreadable, else 1."""
    if any(doc.unreadable for doc in report.results):
        return EXIT_UNREADABLE
    return EXIT_OK if report.all_passed else EXIT_INVALID


if __name__ == "__main__":
    sys.exit(main())
