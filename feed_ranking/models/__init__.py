"""Data models for the feed engine."""

from .article import Article, NewArticle
from .config import DEFAULT_CONFIG, FeedConfig, resolve_config
from .swipe import Swipe

__all__ = [
    "Article",
    "DEFAULT_CONFIG",
    "FeedConfig",
    "NewArticle",
    "Swipe",
    "resolve_config",
]
