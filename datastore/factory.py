from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from datastore.base import ReadingStore
from datastore.memory import InMemoryReadingStore
from datastore.postgres import PostgresReadingStore, build_pool_factory
from settings import Settings, get_settings

logger = logging.getLogger(__name__)


def build_default_store(settings: Optional[Settings] = None) -> ReadingStore:
    """Construct the store selected by ``GNSS_STORE_BACKEND``."""
    settings = settings or get_settings()

    if settings.store_backend == "memory":
        path = Path(settings.memory_store_path) if settings.memory_store_path else None
        logger.info("Using in-memory reading store", extra={"backend": "memory"})
        return InMemoryReadingStore(persistence_path=path)

    logger.info(
        "Using PostgreSQL reading store",
        extra={"backend": "postgres", "table": settings.table_name},
    )
    pool_factory = build_pool_factory(
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
        user=settings.db_user,
        password=settings.db_password,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
    )
    return PostgresReadingStore(
        pool_factory=pool_factory,
        table_name=settings.table_name,
        max_connections=settings.pool_max_size,
    )
