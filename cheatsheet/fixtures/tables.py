"""
Fixture Tables

Builds the example tables, hands pandas copies to the Python snippets and
materializes the same rows inside DuckDB for the SQL snippets.
"""

import logging
from datetime import date, datetime
from typing import Dict, Optional, List

import duckdb
import pandas as pd
import polars as pl

from cheatsheet.coreutils.errors import FixtureError
from .schemas import (
    EMPLOYEES_SCHEMA,
    CUSTOMERS_SCHEMA,
    ORDERS_SCHEMA,
    PRODUCTS_SCHEMA,
    SALES_SCHEMA,
    USERS_SCHEMA,
    LOGS_SCHEMA,
    FIXTURE_SCHEMAS,
)

logger = logging.getLogger(__name__)

# Salaries are unique so that ORDER BY salary has a single right answer
EMPLOYEES_ROWS = [
    (1, "Alice Johnson", "Engineering", 95000.0, date(2018, 3, 15), None, "alice.johnson@example.com"),
    (2, "Bob Smith", "Engineering", 72000.0, date(2019, 7, 1), 1, "bob.smith@example.com"),
    (3, "Carol White", "Sales", 58000.0, date(2020, 1, 20), 5, "carol.white@example.com"),
    (4, "David Brown", "Sales", 49500.0, date(2021, 5, 10), 5, None),
    (5, "Eve Davis", "Sales", 81000.0, date(2017, 11, 3), None, "eve.davis@example.com"),
    (6, "Frank Miller", "Marketing", 54000.0, date(2022, 2, 14), 8, "frank.miller@example.com"),
    (7, "Grace Lee", "Engineering", 88000.0, date(2020, 9, 30), 1, "grace.lee@example.com"),
    (8, "Henry Wilson", "Marketing", 67000.0, date(2016, 6, 21), None, None),
    (9, "Irene Clark", "HR", 51000.0, date(2023, 1, 9), None, "irene.clark@example.com"),
    (10, "Jack Taylor", "Engineering", 63500.0, date(2022, 8, 15), 1, "jack.taylor@example.com"),
]

# Customer 105 never orders (anti-join and left join examples)
CUSTOMERS_ROWS = [
    (101, "Maria", "Garcia", "Madrid", date(2022, 1, 10)),
    (102, "John", "Smith", "London", date(2022, 3, 22)),
    (103, "Aiko", "Sato", "Tokyo", date(2022, 6, 5)),
    (104, "Liam", "Stone", "London", date(2023, 2, 17)),
    (105, "Sofia", "Rossi", "Rome", date(2023, 4, 30)),
    (106, "Noah", "Schmidt", "Berlin", date(2023, 7, 12)),
]

ORDERS_ROWS = [
    (1001, 101, date(2023, 1, 5), 250.0),
    (1002, 102, date(2023, 1, 18), 120.5),
    (1003, 101, date(2023, 2, 11), 75.25),
    (1004, 103, date(2023, 3, 3), 310.0),
    (1005, 104, date(2023, 3, 31), 89.99),
    (1006, 102, date(2023, 4, 14), 45.0),
    (1007, 106, date(2023, 5, 20), 199.0),
    (1008, 103, date(2023, 6, 8), 60.0),
    (1009, 101, date(2023, 7, 22), 130.0),
    (1010, 104, date(2023, 8, 9), 220.0),
]

PRODUCTS_ROWS = [
    (1, "Laptop", "Electronics", 1200.0),
    (2, "Headphones", "Electronics", 199.99),
    (3, "Coffee Maker", "Home", 89.5),
    (4, "Desk Chair", "Furniture", 249.0),
    (5, "Notebook", "Office", 4.99),
    (6, "Monitor", "Electronics", 329.0),
    (7, "Bookshelf", "Furniture", 149.0),
    (8, "Blender", "Home", 59.99),
]

# Regional totals are distinct; sales 9 and 10 share a date
SALES_ROWS = [
    (1, 1, "North", 1200.0, 1, date(2023, 1, 3)),
    (2, 2, "South", 399.98, 2, date(2023, 1, 15)),
    (3, 3, "East", 89.5, 1, date(2023, 1, 28)),
    (4, 6, "West", 658.0, 2, date(2023, 2, 2)),
    (5, 1, "South", 2400.0, 2, date(2023, 2, 19)),
    (6, 5, "North", 24.95, 5, date(2023, 2, 25)),
    (7, 4, "East", 249.0, 1, date(2023, 3, 7)),
    (8, 8, "West", 119.98, 2, date(2023, 3, 18)),
    (9, 7, "North", 149.0, 1, date(2023, 3, 30)),
    (10, 2, "East", 199.99, 1, date(2023, 3, 30)),
]

USERS_ROWS = [
    (1, "jdoe", "jdoe@example.com", datetime(2022, 1, 15, 8, 30), datetime(2023, 6, 1, 9, 15)),
    (2, "asmith", "anna.smith@mail.org", datetime(2022, 4, 2, 14, 0), datetime(2023, 5, 20, 18, 45)),
    (3, "bchen", "bchen@example.com", datetime(2022, 9, 12, 10, 5), datetime(2023, 6, 3, 7, 5)),
    (4, "mlopez", "m.lopez@company.co", datetime(2023, 1, 30, 16, 20), datetime(2023, 3, 11, 12, 0)),
    (5, "kpatel", "kpatel@mail.org", datetime(2023, 5, 5, 9, 0), None),
]

LOGS_ROWS = [
    (1, 1, "INFO", "User login succeeded", datetime(2023, 6, 1, 9, 15)),
    (2, 2, "DEBUG", "Cache warm-up complete", datetime(2023, 6, 1, 9, 20)),
    (3, 3, "ERROR", "Payment service timeout", datetime(2023, 6, 1, 10, 2)),
    (4, 1, "WARN", "Slow query detected", datetime(2023, 6, 1, 10, 30)),
    (5, 4, "ERROR", "Database connection timeout", datetime(2023, 6, 2, 8, 0)),
    (6, 5, "INFO", "Report exported", datetime(2023, 6, 2, 11, 45)),
    (7, 2, "DEBUG", "Retrying request", datetime(2023, 6, 2, 12, 0)),
    (8, 3, "ERROR", "Invalid token for session", datetime(2023, 6, 3, 7, 10)),
]

_FIXTURE_ROWS = {
    "employees": (EMPLOYEES_ROWS, EMPLOYEES_SCHEMA),
    "customers": (CUSTOMERS_ROWS, CUSTOMERS_SCHEMA),
    "orders": (ORDERS_ROWS, ORDERS_SCHEMA),
    "products": (PRODUCTS_ROWS, PRODUCTS_SCHEMA),
    "sales": (SALES_ROWS, SALES_SCHEMA),
    "users": (USERS_ROWS, USERS_SCHEMA),
    "logs": (LOGS_ROWS, LOGS_SCHEMA),
}


def validate_fixture_schema(name: str, df: pl.DataFrame) -> bool:
    """
    Validate a fixture table against its declared schema

    Args:
        name: Table name
        df: Table contents

    Returns:
        bool: True if valid, raises exception if invalid
    """
    expected = FIXTURE_SCHEMAS.get(name)
    if expected is None:
        raise FixtureError(f"Unknown fixture table: {name}")

    if df.schema != expected:
        raise FixtureError(
            f"Schema mismatch for {name}: expected {expected}, got {df.schema}"
        )

    if df.height == 0:
        raise FixtureError(f"Fixture table {name} is empty")

    return True


def fixture_tables(names: Optional[List[str]] = None) -> Dict[str, pl.DataFrame]:
    """
    Build the fixture tables

    Args:
        names: Subset of table names (all tables when omitted)

    Returns:
        Dict[str, pl.DataFrame]: Table name to contents
    """
    tables = {}
    for name in names or list(_FIXTURE_ROWS):
        if name not in _FIXTURE_ROWS:
            raise FixtureError(f"Unknown fixture table: {name}")
        rows, schema = _FIXTURE_ROWS[name]
        df = pl.DataFrame(rows, schema=schema, orient="row")
        validate_fixture_schema(name, df)
        tables[name] = df

    logger.debug(f"Built {len(tables)} fixture tables")
    return tables


def as_pandas(tables: Dict[str, pl.DataFrame]) -> Dict[str, pd.DataFrame]:
    """
    Convert fixture tables to pandas

    Temporal columns become datetime64[us]; integer columns with nulls
    become float64, as pandas would load them.
    """
    frames = {}
    for name, df in tables.items():
        temporal = [col for col, dtype in df.schema.items() if dtype.is_temporal()]
        frame = df.to_pandas()
        for col in temporal:
            frame[col] = pd.to_datetime(frame[col]).astype("datetime64[us]")
        frames[name] = frame
    return frames


def register_fixtures(
    conn: duckdb.DuckDBPyConnection, tables: Dict[str, pl.DataFrame]
) -> None:
    """
    Materialize fixture tables in a DuckDB connection

    Real tables rather than views, so UPDATE/DELETE/INSERT examples work.
    """
    for name, df in tables.items():
        staging = f"_fixture_{name}"
        conn.register(staging, df.to_arrow())
        conn.execute(f'CREATE OR REPLACE TABLE "{name}" AS SELECT * FROM "{staging}"')
        conn.unregister(staging)
    logger.debug(f"Registered {len(tables)} fixture tables in DuckDB")
