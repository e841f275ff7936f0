"""
Main Entry Point - Reference Document Tooling

Lint the README's SQL/pandas examples, list them, show one with both
results, or export them as a JSON catalog.
"""

import logging
import sys
from typing import List, Optional

import pandas as pd

from cheatsheet.coreutils.config import Settings
from cheatsheet.coreutils.errors import CheatsheetError
from cheatsheet.coreutils.logging import setup_logging
from cheatsheet.extract.document import load_document
from cheatsheet.load.local_storage import default_path, save_catalog, save_report
from cheatsheet.orchestration.pipeline import LintPipeline
from cheatsheet.validation.equivalence import to_frame
from cheatsheet.validation.sql_checks import referenced_tables

logger = logging.getLogger(__name__)


def run_lint(
    settings: Settings,
    only: Optional[List[int]] = None,
    compare: bool = True,
    strict: bool = False,
    report_path: Optional[str] = None,
) -> int:
    """
    Lint the reference document

    Returns:
        int: Process exit code
    """
    document = load_document(settings.doc_path)
    pipeline = LintPipeline(settings)
    report = pipeline.run(document, numbers=only, compare=compare)

    if report_path:
        save_report(report.to_dict(), report_path)

    summary = report.summary()
    print(
        f"{summary['passed']}/{summary['examples']} examples passed "
        f"({summary['errors']} errors, {summary['warnings']} warnings)"
    )
    for finding in report.findings:
        print(f"  {finding}")

    return 0 if report.ok(strict=strict) else 1


def run_list(settings: Settings) -> int:
    document = load_document(settings.doc_path)
    for example in document:
        tables = ", ".join(sorted(referenced_tables(example.sql))) or "-"
        print(f"{example.number:>3}. {example.title}  [{tables}]")
    return 0


def run_show(settings: Settings, number: int) -> int:
    """Print one example with the SQL and pandas results side by side"""
    document = load_document(settings.doc_path)
    example = document.get(number)
    pipeline = LintPipeline(settings)
    sql_outcome, python_outcome = pipeline.execute_example(example)

    print(f"{example.number}. {example.title}")
    print(example.description)
    print("\n-- SQL " + "-" * 40)
    print(example.sql)
    if sql_outcome.frame is not None:
        print(sql_outcome.frame.to_string(index=False))
    print("\n-- pandas " + "-" * 37)
    print(example.python)
    if python_outcome.has_value:
        value = python_outcome.value
        if isinstance(value, (pd.DataFrame, pd.Series)) or pd.api.types.is_scalar(value):
            print(to_frame(value).to_string(index=False))
        else:
            print(repr(value))

    for finding in sql_outcome.findings + python_outcome.findings:
        print(f"  {finding}")
    return 0 if sql_outcome.ok and python_outcome.ok else 1


def run_export(settings: Settings, output: Optional[str] = None) -> int:
    document = load_document(settings.doc_path)
    path = output or default_path(settings.output_dir, "examples")
    save_catalog(document, path)
    print(f"✅ Exported {len(document)} examples to {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    import argparse

    parser = argparse.ArgumentParser(description="SQL ↔ pandas reference tooling")
    parser.add_argument("--doc", help="Path to the reference document")
    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable verbose logging"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    lint = commands.add_parser("lint", help="Check every example")
    lint.add_argument("--only", type=int, nargs="+", help="Example numbers to check")
    lint.add_argument(
        "--no-compare",
        action="store_true",
        help="Run both sides but skip result comparison",
    )
    lint.add_argument(
        "--strict", action="store_true", help="Treat warnings as failures"
    )
    lint.add_argument("--report", help="Write a JSON report to this path")

    commands.add_parser("list", help="List examples and the tables they use")

    show = commands.add_parser("show", help="Show one example with its results")
    show.add_argument("number", type=int)

    export = commands.add_parser("export", help="Write the examples as JSON")
    export.add_argument("--output", help="Output path (dated file in output dir by default)")

    args = parser.parse_args(argv)

    try:
        settings = Settings.from_env()
    except ValueError as e:
        print(f"❌ Invalid configuration: {e}", file=sys.stderr)
        return 1

    if args.doc:
        settings.doc_path = args.doc

    log_level = logging.DEBUG if args.verbose else getattr(
        logging, settings.log_level, logging.INFO
    )
    setup_logging(log_level, settings.log_dir)

    try:
        if args.command == "lint":
            return run_lint(
                settings,
                only=args.only,
                compare=not args.no_compare,
                strict=args.strict,
                report_path=args.report,
            )
        elif args.command == "list":
            return run_list(settings)
        elif args.command == "show":
            return run_show(settings, args.number)
        elif args.command == "export":
            return run_export(settings, args.output)
        else:
            raise ValueError(f"Unknown command: {args.command}")

    except (CheatsheetError, FileNotFoundError, KeyError) as e:
        logger.error(f"❌ {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
