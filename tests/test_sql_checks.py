"""
Test SQL Checks - Parsing and running SQL blocks on DuckDB
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cheatsheet.coreutils.errors import SqlCheckError
from cheatsheet.extract.schemas import Directives, Example
from cheatsheet.fixtures.tables import fixture_tables
from cheatsheet.validation.sql_checks import (
    check_sql_syntax,
    is_ordered,
    referenced_tables,
    run_sql,
    split_statements,
    strip_literals,
)


def make_example(sql: str, **directives) -> Example:
    return Example(
        number=1,
        title="Test",
        description="Test example.",
        sql=sql,
        python="df",
        directives=Directives(**directives),
    )


def test_split_statements():
    statements = split_statements("SELECT 1; SELECT 2;")
    assert len(statements) == 2

    with pytest.raises(SqlCheckError):
        split_statements("SELEC name FROM employees")
    with pytest.raises(SqlCheckError):
        split_statements("   ")


def test_check_sql_syntax_reports_parse_errors():
    statements, findings = check_sql_syntax(make_example("SELECT name FROM employees;"))
    assert len(statements) == 1
    assert findings == []

    _, findings = check_sql_syntax(make_example("SELECT name FROM WHERE;"))
    assert len(findings) == 1
    assert findings[0].check == "sql-syntax"
    assert findings[0].is_error


def test_is_ordered_ignores_windows_and_literals():
    assert is_ordered("SELECT * FROM employees ORDER BY salary DESC")
    assert not is_ordered("SELECT * FROM employees")
    assert not is_ordered(
        "SELECT name, RANK() OVER (PARTITION BY department ORDER BY salary) FROM employees"
    )
    assert not is_ordered("SELECT 'ORDER BY' AS label FROM employees")
    assert not is_ordered("SELECT * FROM employees -- ORDER BY salary")
    assert is_ordered(
        "SELECT SUM(amount) OVER (ORDER BY sale_date) FROM sales ORDER BY sale_date"
    )


def test_strip_literals():
    assert "secret" not in strip_literals("SELECT 'secret' /* hidden */")
    assert "hidden" not in strip_literals("SELECT 1 /* hidden */")


def test_referenced_tables():
    tables = referenced_tables(
        "SELECT o.order_id FROM orders o JOIN customers c ON o.customer_id = c.customer_id"
    )
    assert tables == {"orders", "customers"}
    assert referenced_tables("NOT SQL AT ALL (") == set()


def test_run_sql_select():
    print("🧪 Testing run_sql() with a SELECT...")
    outcome = run_sql(
        make_example("SELECT name, salary FROM employees WHERE salary > 80000 ORDER BY salary DESC;"),
        fixture_tables(),
    )

    assert outcome.ok
    assert outcome.ordered
    assert list(outcome.frame.columns) == ["name", "salary"]
    assert outcome.frame["name"].tolist() == ["Alice Johnson", "Grace Lee", "Eve Davis"]
    print("✅ SELECT returned the three top earners in order")


def test_run_sql_state_table_after_update():
    outcome = run_sql(
        make_example(
            "UPDATE employees SET salary = salary + 1 WHERE department = 'HR';",
            state_table="employees",
        ),
        fixture_tables(),
    )

    assert outcome.ok
    assert not outcome.ordered
    frame = outcome.frame
    assert len(frame) == 10
    assert frame.loc[frame["department"] == "HR", "salary"].tolist() == [51001.0]


def test_run_sql_does_not_leak_between_runs():
    tables = fixture_tables()
    run_sql(make_example("DELETE FROM orders;", state_table="orders"), tables)
    outcome = run_sql(make_example("SELECT * FROM orders;"), tables)
    assert len(outcome.frame) == 10


def test_run_sql_ordered_directive_overrides():
    outcome = run_sql(
        make_example("SELECT name FROM employees;", ordered=True), fixture_tables()
    )
    assert outcome.ordered


def test_run_sql_reports_binder_errors():
    outcome = run_sql(make_example("SELECT missing_column FROM employees;"), fixture_tables())
    assert not outcome.ok
    assert outcome.frame is None
    assert outcome.findings[0].check == "sql-run"


def test_run_sql_without_result_warns():
    outcome = run_sql(
        make_example("CREATE INDEX idx_department ON employees (department);"),
        fixture_tables(),
    )
    assert outcome.ok
    assert outcome.frame is None
    assert outcome.findings[0].severity == "warning"


def test_run_sql_parenthesised_union_returns_rows():
    print("🧪 Testing run_sql() with a parenthesised UNION ALL...")
    outcome = run_sql(
        make_example(
            "(SELECT name FROM employees WHERE department = 'HR') "
            "UNION ALL "
            "(SELECT name FROM employees WHERE department = 'HR');"
        ),
        fixture_tables(),
    )

    assert outcome.ok
    assert outcome.findings == []
    assert len(outcome.frame) == 2
    print("✅ Set query result captured")


def test_run_sql_dml_without_state_table_warns():
    outcome = run_sql(
        make_example("DELETE FROM logs WHERE level = 'DEBUG';"), fixture_tables()
    )
    assert outcome.frame is None
    assert outcome.findings[0].severity == "warning"
