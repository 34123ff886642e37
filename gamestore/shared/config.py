from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


load_dotenv()


def _env(name: str, default: str | None = None) -> str | None:
    return os.getenv(name, default)


def _bool(name: str, default: str) -> bool:
    return (_env(name, default) or "").strip().lower() in {"1", "true", "yes", "on"}


def _csv(name: str, default: str) -> tuple[str, ...]:
    value = _env(name, default) or ""
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    database_dsn: str
    jwt_secret: str
    jwt_access_ttl_minutes: int
    cors_allow_origins: tuple[str, ...]
    log_level: str
    schema_on_startup: bool


def get_settings() -> Settings:
    return Settings(
        database_dsn=_env("DATABASE_DSN", "sqlite:///games.db"),
        jwt_secret=_env("JWT_SECRET", ""),
        jwt_access_ttl_minutes=int(_env("JWT_ACCESS_TTL_MINUTES", "10080")),
        cors_allow_origins=_csv("CORS_ALLOW_ORIGINS", "*"),
        log_level=(_env("LOG_LEVEL", "INFO") or "INFO").upper(),
        schema_on_startup=_bool("SCHEMA_ON_STARTUP", "true"),
    )
