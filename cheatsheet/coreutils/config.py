"""
Runtime settings read from the environment (and .env via python-dotenv).
"""

from dataclasses import dataclass

from cheatsheet.coreutils.env import env_get


def _float_setting(key: str, default: float) -> float:
    raw = env_get(key)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None


def _int_setting(key: str, default: int) -> int:
    raw = env_get(key)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{key} must be positive, got {value}")
    return value


@dataclass
class Settings:
    doc_path: str = "README.md"
    output_dir: str = "output"
    log_dir: str = "logs"
    log_level: str = "INFO"
    rtol: float = 1e-6
    atol: float = 1e-9
    max_description_length: int = 120
    compare_results: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from CHEATSHEET_* environment variables"""
        return cls(
            doc_path=env_get("CHEATSHEET_DOC_PATH", "README.md"),
            output_dir=env_get("CHEATSHEET_OUTPUT_DIR", "output"),
            log_dir=env_get("CHEATSHEET_LOG_DIR", "logs"),
            log_level=env_get("CHEATSHEET_LOG_LEVEL", "INFO").upper(),
            rtol=_float_setting("CHEATSHEET_RTOL", 1e-6),
            atol=_float_setting("CHEATSHEET_ATOL", 1e-9),
            max_description_length=_int_setting(
                "CHEATSHEET_MAX_DESCRIPTION_LENGTH", 120
            ),
        )
