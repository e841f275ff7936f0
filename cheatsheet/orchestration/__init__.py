"""
Orchestration Layer - Workflow Coordination

This layer coordinates the lint workflow.
- Pure workflow coordination
- No check logic of its own
- Composes extract, validation, and load operations
"""
