import os
from typing import List, Optional, Union

from dotenv import load_dotenv
from sqlalchemy.engine import URL


class Settings:
    """Centralised application configuration sourced from environment variables."""

    def __init__(self) -> None:
        load_dotenv()
        self.http_port = self._get_int("HTTP_PORT", default=8080)
        self.postgres_host = os.getenv("POSTGRES_HOST", "localhost")
        self.postgres_port = self._get_int("POSTGRES_PORT", default=5432)
        self.postgres_user = os.getenv("POSTGRES_USER", "postgres")
        self.postgres_password = os.getenv("POSTGRES_PASSWORD", "")
        self.postgres_db = os.getenv("POSTGRES_DB", "subscriptions")
        self.postgres_sslmode = os.getenv("POSTGRES_SSLMODE", "disable")
        self.database_url_override = os.getenv("DATABASE_URL")
        self.db_pool_size = self._get_int("DB_POOL_SIZE", default=5)
        self.db_max_overflow = self._get_int("DB_MAX_OVERFLOW", default=10)
        self.db_statement_timeout_ms = self._get_int("DB_STATEMENT_TIMEOUT_MS", default=5000)
        self.db_connect_attempts = self._get_int("DB_CONNECT_ATTEMPTS", default=5)
        self.db_connect_retry_delay = self._get_float("DB_CONNECT_RETRY_DELAY", default=3.0)
        self.log_level = os.getenv("LOG_LEVEL", "INFO").upper()
        self.cors_allow_origins = self._get_list("CORS_ALLOW_ORIGINS", default=["*"])

    @property
    def database_url(self) -> Union[URL, str]:
        """Connection URL for the relational store.

        ``DATABASE_URL`` wins when set; otherwise the PostgreSQL URL is
        assembled from the ``POSTGRES_*`` variables.
        """
        if self.database_url_override:
            return self.database_url_override
        return URL.create(
            "postgresql+psycopg",
            username=self.postgres_user,
            password=self.postgres_password or None,
            host=self.postgres_host,
            port=self.postgres_port,
            database=self.postgres_db,
            query={"sslmode": self.postgres_sslmode},
        )

    @staticmethod
    def _get_int(key: str, default: Optional[int] = None) -> int:
        value = os.getenv(key)
        if value is None or value == "":
            if default is None:
                raise RuntimeError(f"Missing required environment variable: {key}")
            return default
        try:
            return int(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be an integer") from exc

    @staticmethod
    def _get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        if value is None or value == "":
            return default
        try:
            return float(value)
        except ValueError as exc:
            raise RuntimeError(f"Environment variable {key} must be a number") from exc

    @staticmethod
    def _get_list(key: str, default: List[str]) -> List[str]:
        value = os.getenv(key)
        if not value:
            return list(default)
        return [item.strip() for item in value.split(",") if item.strip()]
