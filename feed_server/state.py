"""
Application state: configuration, the database engine (connection pool),
and the stores built on it.

One AppState is built per process at startup and attached to the FastAPI app;
routes receive it through the get_state dependency instead of a module-level
global.
"""

import logging
import random
from datetime import datetime
from typing import Optional

from fastapi import Request
from sqlalchemy.engine import Engine

from feed_ranking.models import FeedConfig
from feed_ranking.stages import HybridFeedAssembler, TasteProfileBuilder

from .config import ServerConfig
from .services import (
    FeedStore,
    InMemoryFeedStore,
    InMemoryUserStore,
    SqlFeedStore,
    SqlUserStore,
    UserStore,
    check_connection,
    create_db_engine,
    create_session_factory,
)

logger = logging.getLogger(__name__)


class AppState:
    """Per-process application state."""

    def __init__(
        self,
        config: ServerConfig,
        feed_store: FeedStore,
        user_store: UserStore,
        engine: Optional[Engine] = None,
        feed_config: Optional[FeedConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.feed_store = feed_store
        self.user_store = user_store
        self.engine = engine
        self.feed_config = feed_config or FeedConfig()
        self._rng = rng

    @classmethod
    def from_config(cls, config: ServerConfig) -> "AppState":
        """SQL stores when DATABASE_URL is set, else in-memory stores."""
        if config.database_url:
            engine = create_db_engine(config)
            sessions = create_session_factory(engine)
            logger.info("[startup] Feed store: SqlFeedStore (pool_size=%d)", config.db_pool_size)
            return cls(config, SqlFeedStore(sessions), SqlUserStore(sessions), engine=engine)
        logger.warning("[startup] DATABASE_URL not set; using in-memory stores (data is not persisted)")
        return cls(config, InMemoryFeedStore(), InMemoryUserStore())

    def feed_assembler(self) -> HybridFeedAssembler:
        """A feed assembler for one request (taste is recomputed every time)."""
        taste = TasteProfileBuilder(self.feed_store, self.feed_config)
        return HybridFeedAssembler(self.feed_store, taste, self.feed_config, rng=self._rng)

    def check_database(self) -> Optional[datetime]:
        """Database time when a database is configured, else None."""
        if self.engine is None:
            return None
        return check_connection(self.engine)

    def close(self) -> None:
        if self.engine is not None:
            self.engine.dispose()
            logger.info("[shutdown] Database pool disposed")


def get_state(request: Request) -> AppState:
    """FastAPI dependency: the AppState attached to the running app."""
    return request.app.state.feed
