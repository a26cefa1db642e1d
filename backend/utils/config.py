"""Environment-driven application settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


_TRUTHY = {"1", "true", "yes", "on"}


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _env_list(name: str, default: str) -> tuple[str, ...]:
    raw = os.getenv(name, default)
    return tuple(item.strip() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    data_file_path: Path
    host: str
    port: int
    log_level: str
    cors_allow_origins: tuple[str, ...]
    default_guest_name: str
    seed_demo_rooms: bool


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Read settings once per process; call ``cache_clear`` to reload."""
    return Settings(
        app_name=os.getenv("HOSTEL_APP_NAME", "Hostel Booking API"),
        app_version=os.getenv("HOSTEL_APP_VERSION", "1.0.0"),
        data_file_path=Path(os.getenv("HOSTEL_DATA_FILE", "data/data.json")),
        host=os.getenv("HOSTEL_HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "5000")),
        log_level=os.getenv("HOSTEL_LOG_LEVEL", "INFO"),
        cors_allow_origins=_env_list("HOSTEL_CORS_ORIGINS", "*"),
        default_guest_name=os.getenv("HOSTEL_DEFAULT_GUEST_NAME", "Guest"),
        seed_demo_rooms=_env_flag("HOSTEL_SEED_DEMO_ROOMS"),
    )
