"""
Swipe News feed ranking: hybrid smart/dumb blend

Single entry point for the ranking package:
- models/: FeedConfig, Article, NewArticle, Swipe
- stages/: taste_profile (mean of recent likes), hybrid_feed (7 + 3 blend)
- utils/: cosine similarity and embedding vector helpers
"""

from .models import Article, DEFAULT_CONFIG, FeedConfig, NewArticle, Swipe, resolve_config
from .stages import (
    FeedResult,
    HybridFeedAssembler,
    TasteProfileBuilder,
    blend_feed,
    get_taste_vector_mean,
)
from .utils import cosine_similarity, format_embedding, mean_vector, parse_embedding

__all__ = [
    "Article",
    "DEFAULT_CONFIG",
    "FeedConfig",
    "NewArticle",
    "Swipe",
    "resolve_config",
    "FeedResult",
    "HybridFeedAssembler",
    "TasteProfileBuilder",
    "blend_feed",
    "get_taste_vector_mean",
    "cosine_similarity",
    "format_embedding",
    "mean_vector",
    "parse_embedding",
]
