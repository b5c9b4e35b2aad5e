# src/odoo_timer/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets at all: the API token is always typed in at runtime and only
  lives in memory.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "ODOO_TIMER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- HTTP ----
    connect_timeout_seconds: float
    read_timeout_seconds: float

    # ---- Login form defaults (never the token) ----
    default_url: str
    default_db: str
    default_username: str

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "Odoo Timer").strip() or "Odoo Timer"
        log_level = _env(_k("LOG_LEVEL"), "WARNING")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/odoo_timer"))

        connect_timeout = max(0.1, _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0))
        read_timeout = max(0.1, _env_float(_k("READ_TIMEOUT_SECONDS"), 30.0))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            connect_timeout_seconds=connect_timeout,
            read_timeout_seconds=read_timeout,
            default_url=_env(_k("DEFAULT_URL")).strip(),
            default_db=_env(_k("DEFAULT_DB")).strip(),
            default_username=_env(_k("DEFAULT_USERNAME")).strip(),
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
