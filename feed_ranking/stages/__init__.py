"""Feed stages: taste profile (mean of recent likes) and hybrid smart/dumb assembly."""

from .hybrid_feed import (
    MODE_COLD_START,
    MODE_WARM,
    FeedCandidateSource,
    FeedResult,
    HybridFeedAssembler,
    blend_feed,
    dedupe_articles,
)
from .taste_profile import LikedEmbeddingSource, TasteProfileBuilder, get_taste_vector_mean

__all__ = [
    "MODE_COLD_START",
    "MODE_WARM",
    "FeedCandidateSource",
    "FeedResult",
    "HybridFeedAssembler",
    "LikedEmbeddingSource",
    "TasteProfileBuilder",
    "blend_feed",
    "dedupe_articles",
    "get_taste_vector_mean",
]
