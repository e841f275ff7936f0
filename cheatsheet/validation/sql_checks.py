"""
SQL Checks - Validation Layer

DuckDB parses every SQL block and runs it against an in-memory copy of the
fixture tables.
"""

import re
import logging
from typing import Dict, List, Set, Tuple

import duckdb
import polars as pl

from cheatsheet.coreutils.errors import SqlCheckError
from cheatsheet.extract.schemas import Example
from cheatsheet.fixtures.tables import register_fixtures
from .schemas import Finding, SqlOutcome, ERROR, WARNING

logger = logging.getLogger(__name__)

_LITERAL_RE = re.compile(r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"")
_COMMENT_RE = re.compile(r"--[^\n]*|/\*.*?\*/", re.DOTALL)
_ORDER_BY_RE = re.compile(r"\bORDER\s+BY\b", re.IGNORECASE)


def strip_literals(sql: str) -> str:
    """Blank out comments, string literals and quoted identifiers"""
    sql = _COMMENT_RE.sub(" ", sql)
    return _LITERAL_RE.sub("''", sql)


def top_level_text(sql: str) -> str:
    """Keep only the characters outside any parentheses"""
    depth = 0
    kept = []
    for char in strip_literals(sql):
        if char == "(":
            depth += 1
            kept.append(" ")
        elif char == ")":
            depth = max(depth - 1, 0)
            kept.append(" ")
        else:
            kept.append(char if depth == 0 else " ")
    return "".join(kept)


def is_ordered(statement: str) -> bool:
    """True when the statement itself sorts its result (not a window or subquery)"""
    return bool(_ORDER_BY_RE.search(top_level_text(statement)))


def split_statements(sql: str) -> List[str]:
    """
    Parse a SQL block into its statements

    Args:
        sql: One or more SQL statements

    Returns:
        List[str]: Statement texts in order

    Raises:
        SqlCheckError: The block does not parse
    """
    conn = duckdb.connect(":memory:")
    try:
        statements = _extract(conn, sql)
    finally:
        conn.close()
    return [statement.query for statement in statements]


def _extract(conn: duckdb.DuckDBPyConnection, sql: str) -> list:
    try:
        statements = conn.extract_statements(sql)
    except duckdb.Error as e:
        raise SqlCheckError(str(e)) from e
    if not statements:
        raise SqlCheckError("SQL block contains no statements")
    return statements


def referenced_tables(sql: str) -> Set[str]:
    """Table names a SQL block reads or writes (empty when it does not parse)"""
    conn = duckdb.connect(":memory:")
    try:
        return {name.lower() for name in conn.get_table_names(sql)}
    except duckdb.Error:
        return set()
    finally:
        conn.close()


def check_sql_syntax(example: Example) -> Tuple[List[str], List[Finding]]:
    """
    Check that an example's SQL block is valid standalone SQL

    Returns:
        Tuple of the parsed statements and any findings
    """
    try:
        statements = split_statements(example.sql)
    except SqlCheckError as e:
        return [], [Finding(example.number, "sql-syntax", ERROR, str(e))]

    logger.debug(f"{example.label}: {len(statements)} SQL statement(s) parsed")
    return statements, []


def run_sql(example: Example, tables: Dict[str, pl.DataFrame]) -> SqlOutcome:
    """
    Run an example's SQL against the fixture tables

    The result is the output of the last SELECT, or the contents of the
    state table after all statements ran when the example names one.

    Args:
        example: Example to run
        tables: Fixture tables

    Returns:
        SqlOutcome: Result frame, order sensitivity and findings
    """
    outcome = SqlOutcome()

    conn = duckdb.connect(":memory:")
    try:
        statements = _extract(conn, example.sql)
    except SqlCheckError as e:
        conn.close()
        outcome.findings.append(Finding(example.number, "sql-syntax", ERROR, str(e)))
        return outcome

    try:
        register_fixtures(conn, tables)

        result = None
        for statement in statements:
            cursor = conn.execute(statement.query)
            result = cursor

        state_table = example.directives.state_table
        if state_table:
            outcome.frame = conn.execute(f'SELECT * FROM "{state_table}"').df()
            outcome.ordered = False
        elif result is not None and _returns_rows(statements[-1], result):
            outcome.frame = result.df()
            outcome.ordered = is_ordered(statements[-1].query)
        else:
            outcome.findings.append(
                Finding(
                    example.number,
                    "sql-run",
                    WARNING,
                    "last statement returns no rows and no state table is named",
                )
            )

        if example.directives.ordered is not None:
            outcome.ordered = example.directives.ordered

    except duckdb.Error as e:
        outcome.findings.append(
            Finding(example.number, "sql-run", ERROR, f"{type(e).__name__}: {e}")
        )
    finally:
        conn.close()

    if outcome.frame is not None:
        logger.debug(
            f"{example.label}: SQL returned {len(outcome.frame)} rows "
            f"(ordered={outcome.ordered})"
        )
    return outcome


def _returns_rows(statement, cursor: duckdb.DuckDBPyConnection) -> bool:
    # DML reports a changed-row count, which is not a query result
    expected = statement.expected_result_type
    return (
        duckdb.ExpectedResultType.QUERY_RESULT in expected
        and cursor.description is not None
    )
