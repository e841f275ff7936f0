"""
Fixture Table Schemas

One Polars schema per example table named in the reference document.
"""

import polars as pl

EMPLOYEES_SCHEMA = pl.Schema(
    [
        ("employee_id", pl.Int64()),
        ("name", pl.String()),
        ("department", pl.String()),
        ("salary", pl.Float64()),
        ("hire_date", pl.Date()),
        ("manager_id", pl.Int64()),
        ("email", pl.String()),
    ]
)

CUSTOMERS_SCHEMA = pl.Schema(
    [
        ("customer_id", pl.Int64()),
        ("first_name", pl.String()),
        ("last_name", pl.String()),
        ("city", pl.String()),
        ("signup_date", pl.Date()),
    ]
)

ORDERS_SCHEMA = pl.Schema(
    [
        ("order_id", pl.Int64()),
        ("customer_id", pl.Int64()),
        ("order_date", pl.Date()),
        ("total", pl.Float64()),
    ]
)

PRODUCTS_SCHEMA = pl.Schema(
    [
        ("product_id", pl.Int64()),
        ("product_name", pl.String()),
        ("category", pl.String()),
        ("price", pl.Float64()),
    ]
)

SALES_SCHEMA = pl.Schema(
    [
        ("sale_id", pl.Int64()),
        ("product_id", pl.Int64()),
        ("region", pl.String()),
        ("amount", pl.Float64()),
        ("quantity", pl.Int64()),
        ("sale_date", pl.Date()),
    ]
)

USERS_SCHEMA = pl.Schema(
    [
        ("user_id", pl.Int64()),
        ("username", pl.String()),
        ("email", pl.String()),
        ("created_at", pl.Datetime("us")),
        ("last_login", pl.Datetime("us")),
    ]
)

LOGS_SCHEMA = pl.Schema(
    [
        ("log_id", pl.Int64()),
        ("user_id", pl.Int64()),
        ("level", pl.String()),
        ("message", pl.String()),
        ("logged_at", pl.Datetime("us")),
    ]
)

FIXTURE_SCHEMAS = {
    "employees": EMPLOYEES_SCHEMA,
    "customers": CUSTOMERS_SCHEMA,
    "orders": ORDERS_SCHEMA,
    "products": PRODUCTS_SCHEMA,
    "sales": SALES_SCHEMA,
    "users": USERS_SCHEMA,
    "logs": LOGS_SCHEMA,
}
