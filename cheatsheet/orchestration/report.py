"""
Lint Report

Per-example findings collected by the pipeline, with summary counts.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Any, Dict, List, Optional

from cheatsheet.validation.schemas import Finding


@dataclass
class ExampleReport:
    number: int
    title: str
    findings: List[Finding] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)

    @property
    def errors(self) -> List[Finding]:
        return [f for f in self.findings if f.is_error]

    @property
    def warnings(self) -> List[Finding]:
        return [f for f in self.findings if not f.is_error]

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass
class LintReport:
    document: Optional[str]
    results: List[ExampleReport] = field(default_factory=list)
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def error_count(self) -> int:
        return sum(len(r.errors) for r in self.results)

    @property
    def warning_count(self) -> int:
        return sum(len(r.warnings) for r in self.results)

    @property
    def findings(self) -> List[Finding]:
        return [f for r in self.results for f in r.findings]

    def ok(self, strict: bool = False) -> bool:
        """No errors (and, when strict, no warnings either)"""
        if strict:
            return self.error_count == 0 and self.warning_count == 0
        return self.error_count == 0

    def summary(self) -> Dict[str, Any]:
        return {
            "examples": len(self.results),
            "passed": sum(1 for r in self.results if r.ok),
            "failed": sum(1 for r in self.results if not r.ok),
            "errors": self.error_count,
            "warnings": self.warning_count,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "document": self.document,
            "started_at": self.started_at.isoformat(),
            "finished_at": self.finished_at.isoformat() if self.finished_at else None,
            "summary": self.summary(),
            "results": [asdict(r) for r in self.results],
        }
