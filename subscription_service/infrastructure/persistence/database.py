"""Connection pool, schema and startup connectivity for the relational store."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from sqlalchemy import (
    CheckConstraint,
    Column,
    Date,
    Engine,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Uuid,
    create_engine,
    text,
)
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.pool import StaticPool

from ...core.config import Settings

logger = logging.getLogger(__name__)

metadata = MetaData()

subscriptions = Table(
    "subscriptions",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, nullable=False),
    Column("service_name", String(100), nullable=False),
    Column("price", Integer, nullable=False),
    Column("start_date", Date, nullable=False),
    Column("end_date", Date, nullable=True),
    CheckConstraint("price > 0", name="ck_subscriptions_price_positive"),
)

Index("idx_subscriptions_user_id", subscriptions.c.user_id)


class DatabaseUnavailableError(RuntimeError):
    """The store could not be reached within the startup retry budget."""


class Database:
    """Owns the pooled SQLAlchemy engine shared by every repository."""

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = make_url(settings.database_url)
        options: Dict[str, Any] = {"pool_pre_ping": True}
        if url.get_backend_name() == "sqlite":
            options["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                options["poolclass"] = StaticPool
        else:
            options["pool_size"] = settings.db_pool_size
            options["max_overflow"] = settings.db_max_overflow
            if url.get_backend_name() == "postgresql" and settings.db_statement_timeout_ms > 0:
                options["connect_args"] = {
                    "options": f"-c statement_timeout={settings.db_statement_timeout_ms}"
                }
        return cls(create_engine(url, **options))

    def ping(self) -> None:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))

    def create_schema(self) -> None:
        metadata.create_all(self.engine)

    def close(self) -> None:
        self.engine.dispose()


def connect_with_retry(
    settings: Settings,
    *,
    sleep: Callable[[float], None] = time.sleep,
) -> Database:
    """Open the pool and ping the store, retrying a fixed number of times.

    Raises ``DatabaseUnavailableError`` after the last failed attempt.
    """
    attempts = max(1, settings.db_connect_attempts)
    delay = settings.db_connect_retry_delay
    last_error: Optional[Exception] = None

    for attempt in range(1, attempts + 1):
        logger.info("Connecting to database attempt=%s", attempt)
        database = Database.from_settings(settings)
        try:
            database.ping()
        except SQLAlchemyError as exc:
            database.close()
            last_error = exc
            if attempt < attempts:
                logger.warning(
                    "Database connection failed, retrying error=%s next_attempt_in=%.1fs",
                    exc,
                    delay,
                )
                sleep(delay)
            continue
        logger.info("Connected to database")
        return database

    logger.error("Unable to connect to database after %s attempts error=%s", attempts, last_error)
    raise DatabaseUnavailableError(
        f"Database unreachable after {attempts} attempts"
    ) from last_error
