"""
Result Equivalence - Validation Layer

Brings a DuckDB result and a pandas result to a common Polars form and
compares them. Columns are matched by position, so an alias in SQL and a
differently named pandas column still line up.
"""

import inspect
import logging
from typing import Any, List, Optional

import pandas as pd
import polars as pl
from polars.testing import assert_frame_equal

from .schemas import Finding, ERROR

logger = logging.getLogger(__name__)

# polars 1.32.3 renamed the tolerance keywords
_TOLERANCE_KEYS = (
    ("rel_tol", "abs_tol")
    if "rel_tol" in inspect.signature(assert_frame_equal).parameters
    else ("rtol", "atol")
)


def to_frame(value: Any) -> pd.DataFrame:
    """
    Turn a snippet result into a pandas DataFrame

    Named indexes (e.g. from groupby) become columns unless a column of that
    name already exists; unnamed ones are dropped.
    """
    if isinstance(value, pd.DataFrame):
        frame = value
    elif isinstance(value, pd.Series):
        frame = value.to_frame()
    elif isinstance(value, pd.Index):
        frame = value.to_frame(index=False)
    elif pd.api.types.is_scalar(value):
        frame = pd.DataFrame({"value": [value]})
    else:
        raise TypeError(f"Cannot compare a result of type {type(value).__name__}")

    kept = [
        name for name in frame.index.names
        if name is not None and name not in frame.columns
    ]
    if kept:
        dropped = [
            level for level, name in enumerate(frame.index.names)
            if name not in kept
        ]
        if dropped:
            frame = frame.reset_index(level=dropped, drop=True)
        return frame.reset_index()
    return frame.reset_index(drop=True)


def normalize_frame(
    frame: pd.DataFrame, column_names: Optional[List[str]] = None
) -> pl.DataFrame:
    """
    Convert a pandas DataFrame to a Polars DataFrame with comparable dtypes

    Args:
        frame: Result to normalize
        column_names: Labels to apply by position (defaults to the frame's own)

    Returns:
        pl.DataFrame: Numerics as Float64, temporals as naive Datetime(us),
        categoricals as String, NaN as null
    """
    frame = frame.copy()
    if column_names is not None:
        frame.columns = list(column_names)
    else:
        frame.columns = [str(col) for col in frame.columns]

    df = pl.from_pandas(frame, nan_to_null=True)

    casts = []
    for col, dtype in df.schema.items():
        if dtype == pl.Boolean:
            continue
        if dtype.is_numeric():
            casts.append(pl.col(col).cast(pl.Float64))
        elif dtype == pl.Date:
            casts.append(pl.col(col).cast(pl.Datetime("us")))
        elif isinstance(dtype, pl.Datetime):
            casts.append(
                pl.col(col).dt.replace_time_zone(None).dt.cast_time_unit("us")
            )
        elif isinstance(dtype, (pl.Categorical, pl.Enum)):
            casts.append(pl.col(col).cast(pl.String))

    if casts:
        df = df.with_columns(casts)
    return df


def compare_results(
    example_number: int,
    sql_frame: pd.DataFrame,
    python_value: Any,
    ordered: bool,
    rtol: float = 1e-6,
    atol: float = 1e-9,
) -> List[Finding]:
    """
    Compare the SQL result with the pandas result

    Args:
        example_number: Example being checked
        sql_frame: Result of the SQL block
        python_value: Result of the Python block
        ordered: Whether row order is part of the answer
        rtol: Relative tolerance for floats
        atol: Absolute tolerance for floats

    Returns:
        List[Finding]: Empty when the results agree
    """
    try:
        python_frame = to_frame(python_value)
    except (TypeError, ValueError) as e:
        return [Finding(example_number, "compare", ERROR, str(e))]

    sql_columns = [str(col) for col in sql_frame.columns]
    if len(python_frame.columns) != len(sql_columns):
        return [
            Finding(
                example_number,
                "compare",
                ERROR,
                f"SQL returns {len(sql_columns)} columns {sql_columns}, "
                f"pandas returns {len(python_frame.columns)} "
                f"{[str(col) for col in python_frame.columns]}",
            )
        ]

    left = normalize_frame(sql_frame, sql_columns)
    right = normalize_frame(python_frame, sql_columns)

    if left.height != right.height:
        return [
            Finding(
                example_number,
                "compare",
                ERROR,
                f"SQL returns {left.height} rows, pandas returns {right.height}",
            )
        ]

    if not ordered:
        left = left.sort(left.columns, nulls_last=True)
        right = right.sort(right.columns, nulls_last=True)

    rel_key, abs_key = _TOLERANCE_KEYS
    try:
        assert_frame_equal(
            left,
            right,
            check_dtypes=False,
            check_exact=False,
            **{rel_key: rtol, abs_key: atol},
        )
    except AssertionError as e:
        message = " ".join(str(e).split())
        return [Finding(example_number, "compare", ERROR, f"results differ: {message}")]

    logger.debug(f"#{example_number}: results match ({left.height} rows)")
    return []
