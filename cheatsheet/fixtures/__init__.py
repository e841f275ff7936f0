"""
Fixture Layer - Example Tables

Small, deterministic versions of the tables the reference document talks
about, shared by the SQL and the pandas side of every check.
"""
