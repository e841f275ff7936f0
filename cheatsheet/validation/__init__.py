"""
Validation Layer - Checks on Each Example

Every check takes an example (plus fixtures where it executes code) and
returns findings instead of raising.
- SQL: parse with DuckDB, then run against the fixtures
- Python: compile, then execute in a namespace holding the fixtures
- Equivalence: normalize both results with Polars and compare
- Descriptions: shape of the one-line summary
"""
