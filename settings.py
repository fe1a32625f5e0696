from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


_STORE_BACKEND_ENV = "GNSS_STORE_BACKEND"
_DB_HOST_ENV = "GNSS_DB_HOST"
_DB_PORT_ENV = "GNSS_DB_PORT"
_DB_NAME_ENV = "GNSS_DB_NAME"
_DB_USER_ENV = "GNSS_DB_USER"
_DB_PASSWORD_ENV = "GNSS_DB_PASSWORD"
_TABLE_NAME_ENV = "GNSS_TABLE_NAME"
_POOL_MIN_ENV = "GNSS_POOL_MIN_SIZE"
_POOL_MAX_ENV = "GNSS_POOL_MAX_SIZE"
_MEMORY_STORE_PATH_ENV = "GNSS_MEMORY_STORE_PATH"
_CORS_ORIGINS_ENV = "CORS_ALLOW_ORIGINS"
_LOG_LEVEL_ENV = "LOG_LEVEL"

_STORE_BACKENDS = ("postgres", "memory")


@dataclass(frozen=True)
class Settings:
    store_backend: str
    db_host: str
    db_port: int
    db_name: str
    db_user: str
    db_password: str
    table_name: str
    pool_min_size: int
    pool_max_size: int
    memory_store_path: Optional[str]
    cors_allow_origins: Tuple[str, ...]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_optional_env(name: str, default: Optional[str]) -> Optional[str]:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or None


def _read_positive_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_store_backend(default: str) -> str:
    candidate = _read_str_env(_STORE_BACKEND_ENV, default).lower()
    return candidate if candidate in _STORE_BACKENDS else default


def _read_origins(default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(_CORS_ORIGINS_ENV)
    if value is None:
        return default
    origins = tuple(part.strip() for part in value.split(",") if part.strip())
    return origins or default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    pool_min_size = _read_positive_int(_POOL_MIN_ENV, 1)
    pool_max_size = max(_read_positive_int(_POOL_MAX_ENV, 10), pool_min_size)
    return Settings(
        store_backend=_read_store_backend("postgres"),
        db_host=_read_str_env(_DB_HOST_ENV, "localhost"),
        db_port=_read_positive_int(_DB_PORT_ENV, 5432),
        db_name=_read_str_env(_DB_NAME_ENV, "postgres"),
        db_user=_read_str_env(_DB_USER_ENV, "postgres"),
        db_password=os.getenv(_DB_PASSWORD_ENV, ""),
        table_name=_read_str_env(_TABLE_NAME_ENV, "gnss"),
        pool_min_size=pool_min_size,
        pool_max_size=pool_max_size,
        memory_store_path=_read_optional_env(_MEMORY_STORE_PATH_ENV, None),
        cors_allow_origins=_read_origins(("*",)),
        log_level=_read_log_level("INFO"),
    )
