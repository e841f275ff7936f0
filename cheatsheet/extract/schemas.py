"""
Extract Layer Schemas

Records produced from the reference document.
"""

from dataclasses import dataclass, field, asdict
from typing import Optional, List, Dict, Any, Iterator

DEFAULT_DF_TABLE = "employees"

# Directive keys accepted in `<!-- key: value -->` comments
DIRECTIVE_KEYS = {"df", "compare", "sql", "state", "ordered"}


@dataclass
class Directives:
    df_table: str = DEFAULT_DF_TABLE
    compare: bool = True
    sql_mode: str = "run"
    state_table: Optional[str] = None
    # None means "decide from the SQL"
    ordered: Optional[bool] = None


@dataclass
class Example:
    number: int
    title: str
    description: str
    sql: str
    python: str
    directives: Directives = field(default_factory=Directives)
    line: int = 0

    @property
    def label(self) -> str:
        return f"#{self.number} {self.title}"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class ExampleDocument:
    path: Optional[str]
    examples: List[Example]

    def get(self, number: int) -> Example:
        for example in self.examples:
            if example.number == number:
                return example
        raise KeyError(f"No example numbered {number}")

    def select(self, numbers: Optional[List[int]] = None) -> List[Example]:
        """Return the requested examples in document order (all when numbers is None)"""
        if not numbers:
            return list(self.examples)
        return [self.get(number) for number in sorted(set(numbers))]

    def __iter__(self) -> Iterator[Example]:
        return iter(self.examples)

    def __len__(self) -> int:
        return len(self.examples)
