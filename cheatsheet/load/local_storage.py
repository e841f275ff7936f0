"""
Local Storage - Load Layer

Functions for writing and reading JSON artifacts.
"""

import json
import os
from datetime import date
from typing import Any, Dict, Optional
import logging

from cheatsheet.extract.schemas import ExampleDocument

logger = logging.getLogger(__name__)


def save_json(data: Any, filepath: str) -> str:
    """
    Save data to a JSON file

    Args:
        data: JSON-serializable data
        filepath: Path to save file

    Returns:
        str: Path to saved file
    """
    logger.info(f"Saving JSON: {filepath}")

    # Ensure directory exists
    directory = os.path.dirname(filepath)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2, default=str)

    return filepath


def load_json(filepath: str) -> Any:
    """
    Load data from a JSON file

    Args:
        filepath: Path to JSON file

    Returns:
        Parsed JSON data
    """
    if not os.path.exists(filepath):
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        return json.load(f)


def default_path(output_dir: str, prefix: str, date_str: Optional[str] = None) -> str:
    """Dated output path, e.g. output/lint_report_2024-01-31.json"""
    if date_str is None:
        date_str = date.today().strftime("%Y-%m-%d")
    return os.path.join(output_dir, f"{prefix}_{date_str}.json")


def save_report(report_dict: Dict[str, Any], filepath: str) -> str:
    """Save a lint report"""
    path = save_json(report_dict, filepath)
    logger.info(
        f"Saved lint report with {report_dict['summary']['errors']} errors "
        f"and {report_dict['summary']['warnings']} warnings to {path}"
    )
    return path


def save_catalog(document: ExampleDocument, filepath: str) -> str:
    """Save the parsed examples as a JSON catalog"""
    catalog = {
        "document": document.path,
        "count": len(document),
        "examples": [example.to_dict() for example in document],
    }
    path = save_json(catalog, filepath)
    logger.info(f"Saved catalog of {len(document)} examples to {path}")
    return path
