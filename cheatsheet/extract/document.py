"""
Document Reader - Extract Layer

Parses the reference Markdown into numbered examples. A section looks like:

    ### 3. Filter rows
    <!-- df: employees -->
    Keep employees earning more than 60,000.

    ```sql
    SELECT * FROM employees WHERE salary > 60000;
    ```

    ```python
    df[df['salary'] > 60000]
    ```
"""

import re
import logging
from pathlib import Path
from typing import Optional, List, Dict, Any, Tuple, Union

from cheatsheet.coreutils.errors import DocumentFormatError
from .schemas import Directives, Example, ExampleDocument, DIRECTIVE_KEYS

logger = logging.getLogger(__name__)

SECTION_RE = re.compile(r"^#{2,3}\s+(\d+)\.\s+(.+?)\s*#*\s*$")
HEADING_RE = re.compile(r"^#{1,6}\s")
FENCE_RE = re.compile(r"^```\s*([A-Za-z0-9_+-]*)\s*$")
DIRECTIVE_RE = re.compile(r"^<!--\s*([A-Za-z_-]+)\s*:\s*(.*?)\s*-->$")

PYTHON_LANGS = {"python", "py", "python3"}
BOOLEAN_VALUES = {"true": True, "yes": True, "on": True, "false": False, "no": False, "off": False}


def _parse_directives(
    raw: Dict[str, str], label: str, problems: List[str]
) -> Directives:
    directives = Directives()

    for key, value in raw.items():
        value = value.strip()
        if key == "df":
            if not value.isidentifier():
                problems.append(f"{label}: df directive needs a table name, got {value!r}")
            else:
                directives.df_table = value
        elif key == "state":
            if not value.isidentifier():
                problems.append(f"{label}: state directive needs a table name, got {value!r}")
            else:
                directives.state_table = value
        elif key == "sql":
            if value not in ("run", "parse"):
                problems.append(f"{label}: sql directive must be 'run' or 'parse', got {value!r}")
            else:
                directives.sql_mode = value
        elif key in ("compare", "ordered"):
            flag = BOOLEAN_VALUES.get(value.lower())
            if flag is None:
                problems.append(f"{label}: {key} directive must be on/off, got {value!r}")
            elif key == "compare":
                directives.compare = flag
            else:
                directives.ordered = flag

    return directives


def _finish_section(
    section: Dict[str, Any], problems: List[str]
) -> Optional[Example]:
    label = f"line {section['line']} (#{section['number']} {section['title']})"
    before = len(problems)

    for lang in ("sql", "python"):
        blocks = section["blocks"][lang]
        if not blocks:
            problems.append(f"{label}: missing ```{lang} block")
        elif len(blocks) > 1:
            problems.append(f"{label}: {len(blocks)} ```{lang} blocks, expected one")

    directives = _parse_directives(section["directives"], label, problems)

    if len(problems) > before:
        return None

    return Example(
        number=section["number"],
        title=section["title"],
        description="\n".join(section["description"]),
        sql=section["blocks"]["sql"][0],
        python=section["blocks"]["python"][0],
        directives=directives,
        line=section["line"],
    )


def parse_document(text: str, path: Optional[str] = None) -> ExampleDocument:
    """
    Parse the reference document into examples

    Args:
        text: Markdown source
        path: Where the text came from (for messages and reports)

    Returns:
        ExampleDocument: All numbered examples in document order

    Raises:
        DocumentFormatError: One or more sections are malformed
    """
    problems: List[str] = []
    examples: List[Example] = []
    section: Optional[Dict[str, Any]] = None
    # every numbered heading, including sections later dropped as malformed
    headers: List[Tuple[int, int]] = []

    fence_lang: Optional[str] = None
    fence_line = 0
    fence_body: List[str] = []
    # description collection stops at the first code block or blank line after text
    description_open = True

    def close_section():
        if section is not None:
            example = _finish_section(section, problems)
            if example is not None:
                examples.append(example)

    for lineno, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()

        if fence_lang is not None:
            if stripped == "```":
                if section is not None and fence_lang in ("sql", "python"):
                    section["blocks"][fence_lang].append("\n".join(fence_body).strip("\n"))
                fence_lang = None
                fence_body = []
            else:
                fence_body.append(line)
            continue

        fence = FENCE_RE.match(stripped)
        if fence:
            lang = fence.group(1).lower()
            fence_lang = "python" if lang in PYTHON_LANGS else (lang or "text")
            fence_line = lineno
            fence_body = []
            description_open = False
            continue

        heading = SECTION_RE.match(stripped)
        if heading:
            close_section()
            headers.append((lineno, int(heading.group(1))))
            section = {
                "number": int(heading.group(1)),
                "title": heading.group(2).strip(),
                "line": lineno,
                "directives": {},
                "description": [],
                "blocks": {"sql": [], "python": []},
            }
            description_open = True
            continue

        if HEADING_RE.match(stripped):
            # an unnumbered heading ends the current section
            close_section()
            section = None
            continue

        if section is None:
            continue

        directive = DIRECTIVE_RE.match(stripped)
        if directive:
            key = directive.group(1).lower()
            if key not in DIRECTIVE_KEYS:
                problems.append(f"line {lineno}: unknown directive '{key}'")
            elif key in section["directives"]:
                problems.append(f"line {lineno}: directive '{key}' given twice")
            else:
                section["directives"][key] = directive.group(2)
            continue

        if not stripped:
            if section["description"]:
                description_open = False
            continue

        if description_open:
            section["description"].append(stripped)

    if fence_lang is not None:
        problems.append(f"line {fence_line}: code block is never closed")
    close_section()

    # Numbering and titles across the whole document
    seen_titles: Dict[str, int] = {}
    for expected, (line, number) in enumerate(headers, start=1):
        if number != expected:
            problems.append(
                f"line {line}: example numbered {number}, expected {expected}"
            )
            break
    for example in examples:
        key = example.title.lower()
        if key in seen_titles:
            problems.append(
                f"line {example.line}: title '{example.title}' already used by #{seen_titles[key]}"
            )
        else:
            seen_titles[key] = example.number

    if problems:
        raise DocumentFormatError(problems)

    logger.debug(f"Parsed {len(examples)} examples from {path or '<text>'}")
    return ExampleDocument(path=path, examples=examples)


def load_document(path: Union[str, Path]) -> ExampleDocument:
    """
    Read and parse the reference document from disk

    Args:
        path: Path to the Markdown file

    Returns:
        ExampleDocument: Parsed examples
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Document not found: {path}")

    logger.info(f"📖 Loading reference document: {path}")
    document = parse_document(path.read_text(encoding="utf-8"), str(path))
    logger.info(f"✅ Loaded {len(document)} examples")
    return document
