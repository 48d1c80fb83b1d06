"""
Taste vector computation (mean-pool of recently liked article embeddings).

Builds a single vector representing the user from their N most recent likes.
Recomputed on every feed request; nothing is cached between requests.
"""

import logging
from typing import List, Optional, Protocol

from ..models.config import FeedConfig, resolve_config
from ..utils.vectors import mean_vector, parse_embedding

logger = logging.getLogger(__name__)


class LikedEmbeddingSource(Protocol):
    """Read access to a user's liked-article embeddings."""

    def recent_liked_embeddings(self, user_id: int, limit: int) -> List[List[float]]:
        """Embeddings of the user's `limit` most recently liked articles, newest first."""
        ...


def get_taste_vector_mean(embeddings: List[List[float]]) -> Optional[List[float]]:
    """
    Compute the taste vector from liked embeddings.

    - No embeddings: return None (cold start).
    - Otherwise: element-wise arithmetic mean, not normalized. Downstream
      ranking uses cosine similarity, so scale does not matter.
    """
    if not embeddings:
        return None
    vectors = [parse_embedding(e) for e in embeddings]
    return mean_vector(vectors)


class TasteProfileBuilder:
    """Derives a user's taste vector from their most recent likes."""

    def __init__(self, source: LikedEmbeddingSource, config: Optional[FeedConfig] = None):
        self._source = source
        self.config = resolve_config(config)

    def build_taste(self, user_id: int) -> Optional[List[float]]:
        liked = self._source.recent_liked_embeddings(user_id, self.config.taste_profile_size)
        taste = get_taste_vector_mean(liked)
        if taste is None:
            logger.info("[taste] user=%s has no likes, taste vector absent", user_id)
        else:
            logger.debug(
                "[taste] user=%s taste from %d likes (dim=%d)", user_id, len(liked), len(taste)
            )
        return taste
