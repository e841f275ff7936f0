"""
Environment access for the cheatsheet tooling

Variables from a local `.env` file are loaded once, on first import.
"""

import os

from dotenv import load_dotenv

load_dotenv()


def env_get(key: str, default: str | None = None) -> str | None:
    """Read a CHEATSHEET_* (or any) variable, falling back to `default`"""
    return os.getenv(key, default)
