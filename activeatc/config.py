"""Configuration settings for the Active ATC service."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger("activeatc.config")

_DEFAULT_COUNTRIES_PATH = Path(__file__).resolve().parent / "data" / "countries.json"


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


def sqlite_readonly_url(path: str | Path) -> str:
    """SQLAlchemy URL that opens an SQLite file read-only and never creates it."""

    return f"sqlite:///file:{path}?mode=ro&uri=true"


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    activeatc_env: str = os.getenv("ACTIVEATC_ENV", "local")
    log_level: str = os.getenv("ACTIVEATC_LOG_LEVEL", "INFO")

    # Upstream tracker endpoints
    whazzup_url: str = os.getenv(
        "WHAZZUP_URL", "https://api.ivao.aero/v2/tracker/whazzup"
    )
    summary_url: str = os.getenv(
        "SUMMARY_URL", "https://api.ivao.aero/v2/tracker/now/atc/summary"
    )
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "10.0"))

    # Refresh scheduling
    refresh_interval_seconds: float = float(os.getenv("REFRESH_INTERVAL_SECONDS", "15"))
    enable_refresh_loop: bool = _get_bool("ENABLE_REFRESH_LOOP", default=True)

    # Local reference data
    countries_path: str = os.getenv("COUNTRIES_PATH", str(_DEFAULT_COUNTRIES_PATH))
    airports_db_url: str = os.getenv(
        "AIRPORTS_DB_URL", sqlite_readonly_url("airport.db3")
    )


settings = Settings()

if settings.refresh_interval_seconds <= 0:
    logger.warning(
        "Invalid REFRESH_INTERVAL_SECONDS=%s; falling back to 15 seconds",
        settings.refresh_interval_seconds,
    )
    settings.refresh_interval_seconds = 15.0

__all__ = ["settings", "Settings", "sqlite_readonly_url"]
