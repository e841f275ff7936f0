"""
Test Settings - Environment-driven configuration
"""

import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cheatsheet.coreutils.config import Settings
from cheatsheet.coreutils.env import env_get

ENV_KEYS = [
    "CHEATSHEET_DOC_PATH",
    "CHEATSHEET_OUTPUT_DIR",
    "CHEATSHEET_LOG_DIR",
    "CHEATSHEET_LOG_LEVEL",
    "CHEATSHEET_RTOL",
    "CHEATSHEET_ATOL",
    "CHEATSHEET_MAX_DESCRIPTION_LENGTH",
]


@pytest.fixture
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.doc_path == "README.md"
    assert settings.output_dir == "output"
    assert settings.log_level == "INFO"
    assert settings.rtol == 1e-6
    assert settings.max_description_length == 120


def test_overrides(clean_env):
    clean_env.setenv("CHEATSHEET_DOC_PATH", "docs/other.md")
    clean_env.setenv("CHEATSHEET_LOG_LEVEL", "debug")
    clean_env.setenv("CHEATSHEET_RTOL", "0.01")
    clean_env.setenv("CHEATSHEET_MAX_DESCRIPTION_LENGTH", "80")

    settings = Settings.from_env()
    assert settings.doc_path == "docs/other.md"
    assert settings.log_level == "DEBUG"
    assert settings.rtol == 0.01
    assert settings.max_description_length == 80


def test_invalid_numbers_name_the_variable(clean_env):
    clean_env.setenv("CHEATSHEET_ATOL", "tiny")
    with pytest.raises(ValueError, match="CHEATSHEET_ATOL"):
        Settings.from_env()


def test_description_length_must_be_positive(clean_env):
    clean_env.setenv("CHEATSHEET_MAX_DESCRIPTION_LENGTH", "0")
    with pytest.raises(ValueError, match="positive"):
        Settings.from_env()


def test_env_get_falls_back_to_default(clean_env):
    assert env_get("CHEATSHEET_DOC_PATH") is None
    assert env_get("CHEATSHEET_DOC_PATH", "README.md") == "README.md"

    clean_env.setenv("CHEATSHEET_DOC_PATH", "docs/ref.md")
    assert env_get("CHEATSHEET_DOC_PATH", "README.md") == "docs/ref.md"
