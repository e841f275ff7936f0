"""
Lint Pipeline Orchestrator

Runs every check on every example of the reference document:
1. Description lint
2. Directive sanity (tables named by df/state exist)
3. SQL syntax, then SQL run against the fixtures
4. Python syntax, then Python run against the same fixtures
5. Result comparison

A failed step skips the steps that depend on it; nothing is raised for a
single bad example.
"""

import logging
from datetime import datetime
from typing import Dict, List, Optional, Tuple

import pandas as pd
import polars as pl

from cheatsheet.coreutils.config import Settings
from cheatsheet.extract.schemas import Example, ExampleDocument
from cheatsheet.fixtures.tables import fixture_tables, as_pandas
from cheatsheet.validation.schemas import Finding, SqlOutcome, PythonOutcome, ERROR, WARNING
from cheatsheet.validation.descriptions import lint_description
from cheatsheet.validation.sql_checks import check_sql_syntax, run_sql
from cheatsheet.validation.python_checks import check_python_syntax, run_python
from cheatsheet.validation.equivalence import compare_results
from .report import ExampleReport, LintReport

logger = logging.getLogger(__name__)


class LintPipeline:
    """Orchestrates the checks over a reference document"""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        tables: Optional[Dict[str, pl.DataFrame]] = None,
    ):
        """
        Initialize the lint pipeline

        Args:
            settings: Tolerances and limits (read from the environment if not provided)
            tables: Fixture tables (the built-in ones if not provided)
        """
        self.settings = settings or Settings.from_env()
        self.tables = tables if tables is not None else fixture_tables()
        self.frames: Dict[str, pd.DataFrame] = as_pandas(self.tables)

    def check_directives(self, example: Example) -> List[Finding]:
        """Tables named by directives must be fixture tables"""
        findings = []
        directives = example.directives
        for key, table in (("df", directives.df_table), ("state", directives.state_table)):
            if table is not None and table not in self.tables:
                findings.append(
                    Finding(
                        example.number,
                        "directives",
                        ERROR,
                        f"{key} names unknown table '{table}' "
                        f"(known: {', '.join(sorted(self.tables))})",
                    )
                )
        return findings

    def execute_example(self, example: Example) -> Tuple[SqlOutcome, PythonOutcome]:
        """Run both sides of an example without comparing them"""
        if example.directives.sql_mode == "parse":
            sql_outcome = SqlOutcome()
        else:
            sql_outcome = run_sql(example, self.tables)
        python_outcome = run_python(example, self.frames)
        return sql_outcome, python_outcome

    def check_example(self, example: Example, compare: bool = True) -> ExampleReport:
        """
        Run every check on one example

        Args:
            example: Example to check
            compare: Whether to compare SQL and Python results

        Returns:
            ExampleReport: Findings and skipped steps
        """
        report = ExampleReport(number=example.number, title=example.title)
        findings = report.findings

        findings.extend(
            lint_description(example, self.settings.max_description_length)
        )

        directive_findings = self.check_directives(example)
        findings.extend(directive_findings)

        _, sql_syntax = check_sql_syntax(example)
        findings.extend(sql_syntax)
        python_syntax = check_python_syntax(example)
        findings.extend(python_syntax)

        if directive_findings:
            report.skipped.extend(["sql-run", "python-run", "compare"])
            return report

        sql_outcome = None
        if sql_syntax:
            report.skipped.append("sql-run")
        elif example.directives.sql_mode == "parse":
            report.skipped.append("sql-run")
        else:
            sql_outcome = run_sql(example, self.tables)
            findings.extend(sql_outcome.findings)

        python_outcome = None
        if python_syntax:
            report.skipped.append("python-run")
        else:
            python_outcome = run_python(example, self.frames)
            findings.extend(python_outcome.findings)

        can_compare = (
            compare
            and example.directives.compare
            and sql_outcome is not None
            and sql_outcome.ok
            and sql_outcome.frame is not None
            and python_outcome is not None
            and python_outcome.ok
        )
        if not can_compare:
            report.skipped.append("compare")
        elif not python_outcome.has_value:
            findings.append(
                Finding(
                    example.number,
                    "compare",
                    WARNING,
                    "Python block ends without an expression or a `result` variable",
                )
            )
            report.skipped.append("compare")
        else:
            findings.extend(
                compare_results(
                    example.number,
                    sql_outcome.frame,
                    python_outcome.value,
                    sql_outcome.ordered,
                    rtol=self.settings.rtol,
                    atol=self.settings.atol,
                )
            )

        return report

    def run(
        self,
        document: ExampleDocument,
        numbers: Optional[List[int]] = None,
        compare: Optional[bool] = None,
    ) -> LintReport:
        """
        Lint the document

        Args:
            document: Parsed reference document
            numbers: Only check these examples (all when omitted)
            compare: Override settings.compare_results

        Returns:
            LintReport: Findings for every checked example
        """
        if compare is None:
            compare = self.settings.compare_results

        examples = document.select(numbers)
        logger.info(f"🚀 Linting {len(examples)} examples from {document.path or '<text>'}")
        if not compare:
            logger.info("🔍 Result comparison disabled")

        report = LintReport(document=document.path)
        for example in examples:
            example_report = self.check_example(example, compare=compare)
            report.results.append(example_report)

            if example_report.ok:
                logger.info(f"✅ {example.label}")
            else:
                logger.error(f"❌ {example.label}")
            for finding in example_report.findings:
                log = logger.error if finding.is_error else logger.warning
                log(f"   {finding}")

        report.finished_at = datetime.now()
        summary = report.summary()
        logger.info(
            f"Lint finished: {summary['passed']}/{summary['examples']} passed, "
            f"{summary['errors']} errors, {summary['warnings']} warnings"
        )
        return report
