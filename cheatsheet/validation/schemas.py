"""
Validation Layer Schemas

Findings and the outcomes of executing one side of an example.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

import pandas as pd

ERROR = "error"
WARNING = "warning"
SEVERITIES = (ERROR, WARNING)


@dataclass
class Finding:
    example: int
    check: str
    severity: str
    message: str

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity}")

    @property
    def is_error(self) -> bool:
        return self.severity == ERROR

    def __str__(self) -> str:
        return f"#{self.example} [{self.severity}] {self.check}: {self.message}"


@dataclass
class SqlOutcome:
    frame: Optional[pd.DataFrame] = None
    ordered: bool = False
    findings: List[Finding] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(f.is_error for f in self.findings)


@dataclass
class PythonOutcome:
    value: Any = None
    has_value: bool = False
    findings: List[Finding] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not any(f.is_error for f in self.findings)
