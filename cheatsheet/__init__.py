"""
cheatsheet - SQL ↔ pandas reference tooling

Parses the README's numbered examples, runs every SQL block on DuckDB and
every pandas block in a prepared namespace, and reports where they disagree.
"""

__version__ = "0.1.0"
