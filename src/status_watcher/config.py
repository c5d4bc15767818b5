# src/status_watcher/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time; require_remote() checks them at startup.
- The plain variable names used by older deployments (NOTION_KEY,
  NOTION_DATABASE_ID, NOTION_PAGE_ID) are accepted as fallbacks.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigurationError

ENV_PREFIX = "WATCHER"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


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

    # ---- Notion ----
    notion_api_key: str | None
    notion_database_id: str | None
    notion_page_id: str | None
    notion_timeout_seconds: float

    # ---- Watched properties ----
    status_property: str
    title_property: str

    # ---- Poller ----
    poll_interval_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "status-watcher")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/status-watcher"))

        notion_api_key = _first_env(_k("NOTION_API_KEY"), "NOTION_KEY", default=None)
        notion_database_id = _first_env(_k("NOTION_DATABASE_ID"), "NOTION_DATABASE_ID", default=None)
        notion_page_id = _first_env(_k("NOTION_PAGE_ID"), "NOTION_PAGE_ID", default=None)
        notion_timeout_seconds = _env_float(_k("NOTION_TIMEOUT_SECONDS"), 60.0)

        # "Date" is a select property in the reference workspace, used as the status column.
        status_property = _env(_k("STATUS_PROPERTY"), "Date").strip() or "Date"
        title_property = _env(_k("TITLE_PROPERTY"), "Name").strip() or "Name"

        poll_interval_seconds = _env_float(_k("POLL_INTERVAL_SECONDS"), 10.0)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            notion_api_key=(notion_api_key or "").strip() or None,
            notion_database_id=(notion_database_id or "").strip() or None,
            notion_page_id=(notion_page_id or "").strip() or None,
            notion_timeout_seconds=notion_timeout_seconds,
            status_property=status_property,
            title_property=title_property,
            poll_interval_seconds=poll_interval_seconds,
        )

    def require_remote(self, *, database: bool = True) -> None:
        """Raise ConfigurationError if the Notion credentials (or database id) are missing."""
        missing: list[str] = []
        if not self.notion_api_key:
            missing.append(f"{_k('NOTION_API_KEY')} (or NOTION_KEY)")
        if database and not self.notion_database_id:
            missing.append(f"{_k('NOTION_DATABASE_ID')} (or NOTION_DATABASE_ID)")
        if missing:
            raise ConfigurationError("Missing configuration: " + ", ".join(missing))
        if self.poll_interval_seconds <= 0:
            raise ConfigurationError(f"{_k('POLL_INTERVAL_SECONDS')} must be positive")


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
