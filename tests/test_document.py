"""
Test Document Reader - Extract layer parsing of the Markdown reference
"""

import os
import sys
import textwrap

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cheatsheet.coreutils.errors import DocumentFormatError
from cheatsheet.extract.document import parse_document, load_document

VALID_DOCUMENT = textwrap.dedent(
    """\
    # Reference

    Intro text that is not part of any example.

    ```bash
    pip install something
    ```

    ## Basics

    ### 1. Select columns
    <!-- df: employees -->
    Return the name column.

    ```sql
    SELECT name FROM employees;
    ```

    ```python
    df[['name']]
    ```

    ### 2. Delete rows
    <!-- df: logs -->
    <!-- state: logs -->
    <!-- ordered: false -->
    Remove DEBUG entries.

    ```sql
    DELETE FROM logs WHERE level = 'DEBUG';
    ```

    ```py
    df = df[df['level'] != 'DEBUG']
    ```

    ## 3. Export
    <!-- sql: parse -->
    <!-- compare: off -->
    Write CSV text.

    ```sql
    COPY employees TO 'out.csv';
    ```

    ```python
    # headings inside code are not sections
    ### 9. not a section
    df.to_csv(index=False)
    ```
    """
)


def test_parse_valid_document():
    """Numbered sections become examples with directives applied"""
    print("🧪 Testing parse_document() on a valid document...")

    document = parse_document(VALID_DOCUMENT, "inline.md")

    assert len(document) == 3
    assert [e.number for e in document] == [1, 2, 3]

    first = document.get(1)
    assert first.title == "Select columns"
    assert first.description == "Return the name column."
    assert first.sql == "SELECT name FROM employees;"
    assert first.python == "df[['name']]"
    assert first.directives.df_table == "employees"
    assert first.directives.compare is True
    assert first.directives.sql_mode == "run"
    assert first.directives.ordered is None

    second = document.get(2)
    assert second.directives.df_table == "logs"
    assert second.directives.state_table == "logs"
    assert second.directives.ordered is False
    assert second.python == "df = df[df['level'] != 'DEBUG']"

    third = document.get(3)
    assert third.directives.sql_mode == "parse"
    assert third.directives.compare is False
    # default df table when no directive is given
    assert third.directives.df_table == "employees"
    assert "### 9. not a section" in third.python

    print("✅ Parsed 3 examples with directives")


def test_get_unknown_example_raises():
    document = parse_document(VALID_DOCUMENT)
    with pytest.raises(KeyError):
        document.get(42)


def test_select_returns_examples_in_order():
    document = parse_document(VALID_DOCUMENT)
    assert [e.number for e in document.select([3, 1, 3])] == [1, 3]
    assert len(document.select()) == 3


def test_missing_block_is_reported():
    text = textwrap.dedent(
        """\
        ### 1. Only SQL
        Nothing else.

        ```sql
        SELECT 1;
        ```
        """
    )
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)

    assert any("missing ```python block" in p for p in excinfo.value.problems)


def test_multiple_problems_are_collected():
    """All structural problems are reported together"""
    text = textwrap.dedent(
        """\
        ### 1. First
        <!-- colour: blue -->
        <!-- compare: maybe -->
        Something.

        ```sql
        SELECT 1;
        ```

        ```python
        1
        ```

        ### 3. Third
        Skips a number.

        ```sql
        SELECT 3;
        ```

        ```python
        3
        ```
        """
    )
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)

    problems = excinfo.value.problems
    assert any("unknown directive 'colour'" in p for p in problems)
    assert any("compare directive must be on/off" in p for p in problems)
    assert any("example numbered 3, expected 2" in p for p in problems)


def test_malformed_section_does_not_shift_numbering():
    text = textwrap.dedent(
        """
        ### 1. Only SQL
        Nothing else.

        ```sql
        SELECT 1;
        ```

        ### 2. Complete
        Both blocks.

        ```sql
        SELECT 2;
        ```

        ```python
        2
        ```
        """
    )
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)

    problems = excinfo.value.problems
    assert any("missing ```python block" in p for p in problems)
    assert not any("numbered" in p for p in problems)


def test_duplicate_blocks_are_reported():
    text = textwrap.dedent(
        """\
        ### 1. Twice
        One.

        ```sql
        SELECT 1;
        ```

        ```sql
        SELECT 2;
        ```

        ```python
        1
        ```
        """
    )
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)

    assert any("2 ```sql blocks" in p for p in excinfo.value.problems)


def test_duplicate_titles_are_reported():
    text = textwrap.dedent(
        """\
        ### 1. Same
        One.

        ```sql
        SELECT 1;
        ```

        ```python
        1
        ```

        ### 2. same
        Two.

        ```sql
        SELECT 2;
        ```

        ```python
        2
        ```
        """
    )
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)

    assert any("title 'same' already used by #1" in p for p in excinfo.value.problems)


def test_unclosed_fence_is_reported():
    text = "### 1. Broken\nText.\n\n```sql\nSELECT 1;\n"
    with pytest.raises(DocumentFormatError) as excinfo:
        parse_document(text)
    assert any("never closed" in p for p in excinfo.value.problems)


def test_multi_line_description_is_kept_for_linting():
    text = textwrap.dedent(
        """\
        ### 1. Wrapped
        First line
        second line.

        ```sql
        SELECT 1;
        ```

        ```python
        1
        ```
        """
    )
    example = parse_document(text).get(1)
    assert example.description == "First line\nsecond line."


def test_load_document_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_document(tmp_path / "nope.md")


def test_load_document_from_disk(tmp_path):
    path = tmp_path / "ref.md"
    path.write_text(VALID_DOCUMENT, encoding="utf-8")

    document = load_document(path)
    assert document.path == str(path)
    assert len(document) == 3
