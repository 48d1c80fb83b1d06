"""Backing logic: stores, external service clients, ingestion."""

from .database import check_connection, create_db_engine, create_schema, create_session_factory
from .embedding_provider import (
    DirectEmbeddingProvider,
    EmbeddingProvider,
    GradioEmbeddingProvider,
    HttpEmbeddingProvider,
    create_embedding_provider,
)
from .feed_store import FeedStore, InMemoryFeedStore
from .headline_client import GNewsClient
from .ingestion import IngestionPipeline, IngestionReport
from .sql_feed_store import SqlFeedStore
from .user_store import InMemoryUserStore, SqlUserStore, UserStore

__all__ = [
    "check_connection",
    "create_db_engine",
    "create_schema",
    "create_session_factory",
    "DirectEmbeddingProvider",
    "EmbeddingProvider",
    "GradioEmbeddingProvider",
    "HttpEmbeddingProvider",
    "create_embedding_provider",
    "FeedStore",
    "InMemoryFeedStore",
    "GNewsClient",
    "IngestionPipeline",
    "IngestionReport",
    "SqlFeedStore",
    "InMemoryUserStore",
    "SqlUserStore",
    "UserStore",
]
