# cricket_api/config.py
from __future__ import annotations

import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv()


def _get_env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip()


def _get_env_int(name: str, default: int) -> int:
    raw = _get_env(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


# -------------------------
# Match format defaults
# -------------------------
# Name of a preset in rules.MATCH_FORMATS (T20, ODI, T10, SUPER_OVER)
DEFAULT_MATCH_FORMAT: str = _get_env("DEFAULT_MATCH_FORMAT", "T20").upper()

BALLS_PER_OVER: int = _get_env_int("BALLS_PER_OVER", 6)

# Eleven-a-side: ten wickets end the innings
MAX_WICKETS: int = _get_env_int("MAX_WICKETS", 10)


# -------------------------
# Interaction state (dialog-open flags)
# -------------------------
DIALOG_FLAG_TTL_SECONDS: int = _get_env_int("DIALOG_FLAG_TTL_SECONDS", 300)


# -------------------------
# Logging
# -------------------------
LOG_LEVEL: str = _get_env("LOG_LEVEL", "INFO").upper()


def validate_config() -> None:
    # Imported here to keep config importable from rules.py
    from cricket_api.rules import MATCH_FORMATS

    if DEFAULT_MATCH_FORMAT not in MATCH_FORMATS:
        raise RuntimeError(
            f"DEFAULT_MATCH_FORMAT={DEFAULT_MATCH_FORMAT} is not one of {sorted(MATCH_FORMATS)}"
        )

    if BALLS_PER_OVER <= 0:
        raise RuntimeError("BALLS_PER_OVER must be positive")

    if MAX_WICKETS <= 0:
        raise RuntimeError("MAX_WICKETS must be positive")

    # TTL validation
    if DIALOG_FLAG_TTL_SECONDS <= 0:
        raise RuntimeError("DIALOG_FLAG_TTL_SECONDS must be positive")
