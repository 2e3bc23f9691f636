"""Database settings from the environment and the connection set-up."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import URL, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from aiiobackend.domain import Base

logger = logging.getLogger(__name__)

PASSWORD = "password"

_CREDENTIAL_VARIABLE = "DB_PASSWORD"


@dataclass
class DatabaseConfig:
    """Connection settings for the PostgreSQL server."""

    host: str
    port: str
    user: str
    password: str
    db_name: str
    ssl_mode: str

    def build_dsn(self) -> str:
        """Return the settings as a libpq keyword/value string."""
        return (
            f"host={self.host} port={self.port} user={self.user} "
            f"password={self.password} dbname={self.db_name} sslmode={self.ssl_mode}"
        )

    def url(self) -> str:
        """Return the settings as an SQLAlchemy database URL."""
        return URL.create(
            "postgresql",
            username=self.user,
            password=self.password,
            host=self.host,
            port=int(self.port),
            database=self.db_name,
            query={"sslmode": self.ssl_mode},
        ).render_as_string(hide_password=False)


def _env(key: str, default: str) -> str:
    return os.environ.get(key) or default


def get_database_config() -> DatabaseConfig:
    """Read the settings from DB_* variables, falling back to defaults."""
    password = _env(_CREDENTIAL_VARIABLE, PASSWORD)
    return DatabaseConfig(
        host=_env("DB_HOST", "localhost"),
        port=_env("DB_PORT", "5432"),
        user=_env("DB_USER", "postgres"),
        password=password,
        db_name=_env("DB_NAME", "aiio_backend"),
        ssl_mode=_env("DB_SSLMODE", "disable"),
    )


def connect_database(url: Optional[str] = None) -> Engine:
    """Connect to the database, create the schema and return the engine.

    Without a URL the settings come from the environment.
    """
    if url is None:
        url = get_database_config().url()

    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    try:
        engine = create_engine(url)
        with engine.connect():
            pass
    except (SQLAlchemyError, ImportError) as exc:
        raise RuntimeError(f"failed to connect to database: {exc}") from exc

    try:
        Base.metadata.create_all(engine)
    except SQLAlchemyError as exc:
        engine.dispose()
        raise RuntimeError(f"failed to migrate database: {exc}") from exc

    logger.info("Database connected and migrated successfully")
    return engine