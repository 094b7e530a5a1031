from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from backend.schemas.savings import MAX_HORIZON_YEARS

DEFAULT_CORS_ORIGINS = (
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)


@dataclass(frozen=True)
class Settings:
    app_name: str
    env: str
    log_level: str
    cors_origins: Tuple[str, ...]
    fallback_years: float


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    # An empty variable counts as unset, otherwise FALLBACK_YEARS="" would break parsing.
    value = os.getenv(key)
    if value is None or not value.strip():
        return default
    return value.strip()


def load_settings() -> Settings:
    """
    Loads settings from the environment, after merging a local .env file if present.
    """
    load_dotenv()

    origins = _env("CORS_ORIGINS")
    cors_origins = (
        tuple(origin.strip() for origin in origins.split(",") if origin.strip())
        if origins
        else DEFAULT_CORS_ORIGINS
    )

    fallback_years = float(_env("FALLBACK_YEARS", "10"))
    if not 0 < fallback_years <= MAX_HORIZON_YEARS:
        raise ValueError(f"FALLBACK_YEARS must be greater than 0 and at most {MAX_HORIZON_YEARS}")

    return Settings(
        app_name=_env("APP_NAME", "savings-calculator"),
        env=_env("APP_ENV", "dev"),
        log_level=_env("LOG_LEVEL", "INFO").upper(),
        cors_origins=cors_origins,
        fallback_years=fallback_years,
    )
