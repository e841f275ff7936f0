"""
Python Checks - Validation Layer

Compiles each pandas snippet and executes it with the fixture tables bound
to the names the snippet expects (`df`, `orders`, `customers`, ...).
"""

import ast
import logging
import warnings
from datetime import date, datetime, timedelta
from typing import Any, Dict, List, Optional

import pandas as pd

from cheatsheet.extract.schemas import Example
from .schemas import Finding, PythonOutcome, ERROR, WARNING

logger = logging.getLogger(__name__)

FILENAME = "<example>"


def check_python_syntax(example: Example) -> List[Finding]:
    """Check that an example's Python block compiles"""
    try:
        compile(example.python, FILENAME, "exec")
    except SyntaxError as e:
        return [
            Finding(
                example.number,
                "python-syntax",
                ERROR,
                f"line {e.lineno}: {e.msg}",
            )
        ]
    return []


def build_namespace(
    example: Example, frames: Dict[str, pd.DataFrame]
) -> Dict[str, Any]:
    """
    Build the globals a snippet runs with

    Every fixture table is bound to its own name as a fresh copy; `df` is the
    same object as the example's df table, so in-place edits show up in both.
    """
    namespace: Dict[str, Any] = {
        "__builtins__": __builtins__,
        "pd": pd,
        "datetime": datetime,
        "date": date,
        "timedelta": timedelta,
    }
    for name, frame in frames.items():
        namespace[name] = frame.copy()

    df_table = example.directives.df_table
    if df_table in namespace:
        namespace["df"] = namespace[df_table]
    return namespace


def state_variable(example: Example) -> Optional[str]:
    """Name of the variable holding the state table after the snippet ran"""
    state_table = example.directives.state_table
    if not state_table:
        return None
    if example.directives.df_table == state_table:
        return "df"
    return state_table


def run_python(example: Example, frames: Dict[str, pd.DataFrame]) -> PythonOutcome:
    """
    Execute an example's Python block

    With a state table the result is the variable holding it; otherwise the
    final expression's value, else a variable named `result`.

    Args:
        example: Example to run
        frames: Fixture tables as pandas DataFrames

    Returns:
        PythonOutcome: Result value and findings
    """
    outcome = PythonOutcome()

    try:
        tree = ast.parse(example.python, FILENAME, "exec")
    except SyntaxError as e:
        outcome.findings.append(
            Finding(example.number, "python-syntax", ERROR, f"line {e.lineno}: {e.msg}")
        )
        return outcome

    tail = None
    if tree.body and isinstance(tree.body[-1], ast.Expr):
        tail = ast.Expression(body=tree.body.pop().value)

    namespace = build_namespace(example, frames)

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        # library-internal deprecations are not about the snippet
        warnings.simplefilter("ignore", DeprecationWarning)
        warnings.simplefilter("ignore", PendingDeprecationWarning)
        try:
            exec(compile(tree, FILENAME, "exec"), namespace)
            tail_value = None
            if tail is not None:
                tail_value = eval(compile(tail, FILENAME, "eval"), namespace)
        except Exception as e:
            outcome.findings.append(
                Finding(
                    example.number,
                    "python-run",
                    ERROR,
                    f"{type(e).__name__}: {e}",
                )
            )
            return outcome

    for warning in caught:
        outcome.findings.append(
            Finding(
                example.number,
                "python-run",
                WARNING,
                f"{warning.category.__name__}: {warning.message}",
            )
        )

    variable = state_variable(example)
    if variable is not None:
        outcome.value = namespace.get(variable)
        outcome.has_value = variable in namespace
    elif tail is not None:
        outcome.value = tail_value
        outcome.has_value = True
    elif "result" in namespace:
        outcome.value = namespace["result"]
        outcome.has_value = True

    logger.debug(
        f"{example.label}: Python produced {type(outcome.value).__name__}"
    )
    return outcome
