"""
Extract Layer - Reading the Reference Document

This layer turns the Markdown reference into example records.
- No imports from validation or load layers
- Structural problems are collected and raised together
- No execution of the SQL or Python it reads
"""
