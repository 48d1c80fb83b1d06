"""Pure helpers: logging setup and response shaping."""

import logging
from typing import Dict, List

from feed_ranking.models import Article

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO) -> None:
    """Configure standard logging format for the server and batch scripts."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


def to_feed_payload(articles: List[Article]) -> List[Dict]:
    """Articles as JSON dicts for GET /api/feed (no embeddings)."""
    return [a.to_public_dict() for a in articles]
