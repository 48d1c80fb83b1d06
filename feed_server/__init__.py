"""
Swipe News server: HTTP API, configuration, stores and the ingestion batch.

Usage: uvicorn feed_server.app:app --port 4000
"""

from .config import ServerConfig, get_config, reload_config
from .errors import (
    ArticleNotFoundError,
    AuthError,
    ConfigError,
    EmailTakenError,
    FeedServerError,
    HeadlineSourceError,
    RateLimitedError,
)

__all__ = [
    "ServerConfig",
    "get_config",
    "reload_config",
    "ArticleNotFoundError",
    "AuthError",
    "ConfigError",
    "EmailTakenError",
    "FeedServerError",
    "HeadlineSourceError",
    "RateLimitedError",
]
