"""
accident_analyzer/config.py

Application-level configuration helpers.

Only the service surface is configurable; validation rule tables are fixed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def load_env_files() -> None:
    """
    Load simple KEY=VALUE pairs from `.env` and `.env.local` (if present).
    Existing process environment variables are not overwritten.
    """

    project_root = Path(__file__).resolve().parents[1]
    for filename in (".env", ".env.local"):
        env_path = project_root / filename
        if not env_path.exists():
            continue

        for raw_line in env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue

            key, value = line.split("=", 1)
            key = key.strip()
            value = value.strip().strip('"').strip("'")
            if key and key not in os.environ:
                os.environ[key] = value


@lru_cache(maxsize=1)
def _load_env_once() -> None:
    """
    Ensure project `.env` files are loaded once before reading settings.
    """

    load_env_files()


def _get_bool_env(name: str, default: bool) -> bool:
    """
    Read a boolean from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    return raw_value.strip().lower() in {"1", "true", "yes", "on"}


def _get_int_env(name: str, default: int) -> int:
    """
    Read an integer from environment variables with safe fallback.
    """

    _load_env_once()
    raw_value = os.getenv(name)
    if raw_value is None:
        return default
    try:
        return int(raw_value)
    except ValueError:
        return default


def _get_str_env(name: str, default: str) -> str:
    """
    Read a string from environment variables with fallback.
    """

    _load_env_once()
    value = os.getenv(name)
    if value is None:
        return default
    stripped = value.strip()
    return stripped if stripped else default


def get_log_level() -> str:
    return _get_str_env("LOG_LEVEL", "INFO").upper()


@dataclass(frozen=True)
class AnalysisSettings:
    """
    Runtime settings for accident analysis requests.
    """

    log_validation_errors: bool = True
    max_logged_errors: int = 200
    report_filename: str = "reporte-accidentes.json"
    csv_encoding: str = "utf-8-sig"


@lru_cache(maxsize=1)
def get_analysis_settings() -> AnalysisSettings:
    """
    Return cached analysis settings from environment variables.
    """

    return AnalysisSettings(
        log_validation_errors=_get_bool_env("ACCIDENT_LOG_VALIDATION_ERRORS", True),
        max_logged_errors=max(0, _get_int_env("ACCIDENT_MAX_LOGGED_ERRORS", 200)),
        report_filename=_get_str_env("ACCIDENT_REPORT_FILENAME", "reporte-accidentes.json"),
        csv_encoding=_get_str_env("ACCIDENT_CSV_ENCODING", "utf-8-sig"),
    )
