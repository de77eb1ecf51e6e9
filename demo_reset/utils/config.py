"""Environment-driven runtime settings."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional


PACKAGE_ROOT = Path(__file__).resolve().parents[1]
DEFAULT_SEED_DIRECTORY = PACKAGE_ROOT / "seed"


@dataclass(frozen=True)
class Settings:
    app_name: str
    app_version: str
    database_path: Path
    log_level: str
    admin_token: Optional[str]
    session_ttl_minutes: int
    breakfast_price: float
    seed_directory: Path


def _read_int(name: str, default: int) -> int:
    raw_value = os.environ.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return int(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw_value!r}") from exc


def _read_float(name: str, default: float) -> float:
    raw_value = os.environ.get(name)
    if raw_value is None or not raw_value.strip():
        return default
    try:
        return float(raw_value)
    except ValueError as exc:
        raise ValueError(f"{name} must be numeric, got {raw_value!r}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Build settings once per process; call ``cache_clear`` to reload."""
    breakfast_price = _read_float("BREAKFAST_PRICE", 15.0)
    if breakfast_price < 0:
        raise ValueError("BREAKFAST_PRICE must be >= 0")
    session_ttl_minutes = _read_int("SESSION_TTL_MINUTES", 60)
    if session_ttl_minutes <= 0:
        raise ValueError("SESSION_TTL_MINUTES must be > 0")

    return Settings(
        app_name=os.environ.get("APP_NAME", "Demo Reset"),
        app_version=os.environ.get("APP_VERSION", "1.0.0"),
        database_path=Path(os.environ.get("DATABASE_PATH", "data/demo.db")),
        log_level=os.environ.get("LOG_LEVEL", "INFO"),
        admin_token=os.environ.get("ADMIN_TOKEN") or None,
        session_ttl_minutes=session_ttl_minutes,
        breakfast_price=breakfast_price,
        seed_directory=Path(
            os.environ.get("SEED_DIRECTORY", str(DEFAULT_SEED_DIRECTORY))
        ),
    )
