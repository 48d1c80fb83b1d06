"""
Database engine (connection pool) construction and schema bootstrap.

The engine is created once per process and passed to the stores that need it;
nothing here keeps a module-level pool.
"""

import logging
from datetime import datetime

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from ..config import ServerConfig
from ..errors import ConfigError
from .sql_models import Base

logger = logging.getLogger(__name__)


def create_db_engine(config: ServerConfig) -> Engine:
    """Create the SQLAlchemy engine (pooled) for config.database_url."""
    if not config.database_url:
        raise ConfigError("DATABASE_URL is not set")
    connect_args = {}
    if config.database_ssl and config.database_url.startswith("postgresql"):
        # TLS without certificate verification, as managed Postgres hosts expect.
        connect_args["sslmode"] = "require"
    return create_engine(
        config.database_url,
        echo=False,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_session_factory(bind) -> sessionmaker:
    """Session factory bound to an engine, or to one Connection for batch runs."""
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


def check_connection(engine: Engine) -> datetime:
    """Round-trip to the database; returns the server's current time."""
    with engine.connect() as conn:
        return conn.execute(text("SELECT now()")).scalar_one()


def create_schema(engine: Engine) -> None:
    """Create the pgvector extension and all tables if they don't exist."""
    with engine.begin() as conn:
        conn.execute(text("CREATE EXTENSION IF NOT EXISTS vector"))
        Base.metadata.create_all(conn)
    logger.info("Schema ready: %s", ", ".join(sorted(Base.metadata.tables)))
