"""
Load Layer - Persistence

Writes lint reports and the example catalog to local JSON files.
- No business logic, just I/O operations
"""
