"""
Error types shared across layers.

Per-example problems are reported as findings, not raised. These exceptions
cover the failures that stop a whole run.
"""

from typing import List


class CheatsheetError(Exception):
    """Base class for cheatsheet errors"""


class DocumentFormatError(CheatsheetError):
    """The reference document does not follow the section layout"""

    def __init__(self, problems: List[str]):
        self.problems = list(problems)
        message = f"{len(self.problems)} problem(s) in document:\n" + "\n".join(
            f"  - {problem}" for problem in self.problems
        )
        super().__init__(message)


class SqlCheckError(CheatsheetError):
    """A SQL block could not be parsed"""


class FixtureError(CheatsheetError):
    """A fixture table does not match its declared schema"""
