"""
Description Lint - Validation Layer

Shape checks on the one-line description of each example, plus keyword
hints that point at descriptions which may not match their SQL. Whether a
description is actually accurate stays a human call; hints only warn.
"""

import re
import logging
from typing import List, Tuple

from cheatsheet.extract.schemas import Example
from .schemas import Finding, ERROR, WARNING
from .sql_checks import strip_literals, top_level_text

logger = logging.getLogger(__name__)

DEFAULT_MAX_LENGTH = 120

# (feature name, pattern over the SQL, words the description should contain one of)
KEYWORD_HINTS: List[Tuple[str, re.Pattern, Tuple[str, ...]]] = [
    ("JOIN", re.compile(r"\bJOIN\b", re.I), ("join", "combine", "match", "pair", "along with", "together with")),
    ("GROUP BY", re.compile(r"\bGROUP\s+BY\b", re.I), ("group", "per ", "each", " by ")),
    ("DISTINCT", re.compile(r"\bDISTINCT\b", re.I), ("distinct", "unique", "different")),
    ("window function", re.compile(r"\bOVER\s*\(", re.I), ("rank", "running", "cumulative", "window", "within")),
    ("UPDATE", re.compile(r"^\s*UPDATE\b", re.I | re.M), ("update", "raise", "change", "modify", "set ")),
    ("DELETE", re.compile(r"^\s*DELETE\b", re.I | re.M), ("delete", "remove", "drop")),
    ("INSERT", re.compile(r"^\s*INSERT\b", re.I | re.M), ("insert", "add", "append")),
    ("LIMIT", re.compile(r"\bLIMIT\b", re.I), ("top", "first", "limit", "page", "highest", "lowest")),
]

# ORDER BY only counts when it sorts the result, not inside OVER (...)
ORDER_BY_HINT = (
    "ORDER BY",
    re.compile(r"\bORDER\s+BY\b", re.I),
    ("sort", "order", "rank", "top", "highest", "lowest", "largest", "smallest",
     "page", "newest", "oldest", "earliest", "latest", "chronolog", "running"),
)


def lint_description(
    example: Example, max_length: int = DEFAULT_MAX_LENGTH
) -> List[Finding]:
    """
    Lint one example's description

    Args:
        example: Example to lint
        max_length: Longest allowed description

    Returns:
        List[Finding]: Shape errors and keyword-hint warnings
    """
    findings = []
    text = example.description

    def error(message: str):
        findings.append(Finding(example.number, "description", ERROR, message))

    if not text.strip():
        error("description is missing")
        return findings

    if "\n" in text:
        error("description spans more than one line")
    if not text[0].isupper():
        error("description should start with an uppercase letter")
    if not text.rstrip().endswith("."):
        error("description should end with a period")
    if len(text) > max_length:
        error(f"description is {len(text)} characters, limit is {max_length}")

    lowered = f" {text.lower()} "
    sql = strip_literals(example.sql)
    checks = [(feature, pattern, words, sql) for feature, pattern, words in KEYWORD_HINTS]
    checks.append((*ORDER_BY_HINT, top_level_text(example.sql)))

    for feature, pattern, words, searched in checks:
        if pattern.search(searched) and not any(word in lowered for word in words):
            findings.append(
                Finding(
                    example.number,
                    "description",
                    WARNING,
                    f"SQL uses {feature} but the description mentions none of {list(words)}",
                )
            )

    return findings
