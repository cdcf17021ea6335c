"""Environment-driven configuration for the patient portal.

Values come from the process environment, optionally seeded from a local
``.env`` file, and end up in ``app.config``.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

DEFAULT_GATEWAY_PATH = "http://localhost:8080"
DEFAULT_REDIS_URL = "redis://localhost:6379/0"
DEFAULT_REDIS_KEY_PREFIX = "patient-portal"


def _env_str(name: str, default: str | None = None) -> str | None:
    value = os.getenv(name, default)
    if isinstance(value, str):
        return value.strip()
    return default


def _env_float(name: str, default: float) -> float:
    value = _env_str(name)
    if value is None:
        return default
    try:
        parsed = float(value)
        if not (parsed == parsed):  # NaN
            return default
        return parsed
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    value = _env_str(name)
    if value is None:
        return default
    try:
        return int(float(value))
    except ValueError:
        return default


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "y", "on"}


def load_config(env_file: Path | None = None) -> dict:
    """Read settings from the environment (and ``.env``) into a config mapping."""
    load_dotenv(env_file or BASE_DIR / ".env")

    return {
        "GATEWAY_PATH": (_env_str("GATEWAY_PATH", DEFAULT_GATEWAY_PATH) or DEFAULT_GATEWAY_PATH).rstrip("/"),
        "REDIS_URL": _env_str("REDIS_URL", DEFAULT_REDIS_URL) or DEFAULT_REDIS_URL,
        "REDIS_KEY_PREFIX": _env_str("REDIS_KEY_PREFIX", DEFAULT_REDIS_KEY_PREFIX) or DEFAULT_REDIS_KEY_PREFIX,
        "UPSTREAM_TIMEOUT_S": max(1.0, min(_env_float("UPSTREAM_TIMEOUT_S", 30.0), 120.0)),
        "CHECK_UPSTREAM_STATUS": _env_bool("CHECK_UPSTREAM_STATUS", False),
        "LOG_LEVEL": (_env_str("LOG_LEVEL", "INFO") or "INFO").upper(),
        "PORT": _env_int("PORT", 10000),
    }
