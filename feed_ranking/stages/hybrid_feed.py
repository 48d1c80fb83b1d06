"""
Hybrid feed assembly: similarity-ranked "smart" articles blended with random
"dumb" articles for exploration.

Warm users (taste vector present):
    smart = top smart_feed_size unswiped articles by 1 - cosine_distance(taste)
    dumb  = dumb_feed_size random unswiped articles not already in smart
    feed  = shuffle(smart + dumb)
Cold start (no likes): feed_size random unswiped articles, no similarity
ranking at all.

The feed is never padded: when the unswiped corpus is small, the caller gets
exactly what remains.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import List, Optional, Protocol, Sequence

from ..models.article import Article
from ..models.config import FeedConfig, resolve_config
from .taste_profile import TasteProfileBuilder

logger = logging.getLogger(__name__)

MODE_COLD_START = "cold_start"
MODE_WARM = "warm"


class FeedCandidateSource(Protocol):
    """Corpus queries used to assemble a feed. All exclude articles the user has swiped."""

    def similar_unswiped(self, user_id: int, taste: List[float], limit: int) -> List[Article]:
        """Unswiped articles ordered by descending similarity to taste, with similarity set."""
        ...

    def random_unswiped(
        self,
        user_id: int,
        exclude_ids: Sequence[int],
        limit: int,
    ) -> List[Article]:
        """Unswiped articles not in exclude_ids, in random order. Empty exclude_ids filters nothing."""
        ...


@dataclass
class FeedResult:
    """One assembled feed plus how it was composed."""

    mode: str
    articles: List[Article] = field(default_factory=list)
    smart_count: int = 0
    dumb_count: int = 0


def dedupe_articles(articles: List[Article]) -> List[Article]:
    """Drop repeated article ids, keeping the first occurrence."""
    seen = set()
    out = []
    for a in articles:
        if a.id in seen:
            continue
        seen.add(a.id)
        out.append(a)
    return out


def blend_feed(
    smart: List[Article],
    dumb: List[Article],
    rng: Optional[random.Random] = None,
) -> List[Article]:
    """Concatenate smart + dumb and shuffle uniformly (Fisher–Yates)."""
    rng = rng or random.Random()
    feed = dedupe_articles(list(smart) + list(dumb))
    rng.shuffle(feed)
    return feed


class HybridFeedAssembler:
    """Builds a per-request feed from a taste profile and the article corpus."""

    def __init__(
        self,
        source: FeedCandidateSource,
        taste_builder: TasteProfileBuilder,
        config: Optional[FeedConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        self._source = source
        self._taste_builder = taste_builder
        self.config = resolve_config(config)
        self._rng = rng or random.Random()

    def assemble(self, user_id: int) -> FeedResult:
        taste = self._taste_builder.build_taste(user_id)
        if taste is None:
            return self._cold_start(user_id)
        return self._warm(user_id, taste)

    def build_feed(self, user_id: int) -> List[Article]:
        return self.assemble(user_id).articles

    def _cold_start(self, user_id: int) -> FeedResult:
        logger.info("[feed] user=%s has no likes, using random cold-start feed", user_id)
        articles = self._source.random_unswiped(user_id, [], self.config.feed_size)
        articles = dedupe_articles(articles)[: self.config.feed_size]
        return FeedResult(mode=MODE_COLD_START, articles=articles, dumb_count=len(articles))

    def _warm(self, user_id: int, taste: List[float]) -> FeedResult:
        cfg = self.config
        smart = self._source.similar_unswiped(user_id, taste, cfg.smart_feed_size)
        smart = dedupe_articles(smart)[: cfg.smart_feed_size]
        smart_ids = [a.id for a in smart]
        smart_set = set(smart_ids)

        # Exhausted neighbourhood: let exploration fill the whole feed.
        dumb_limit = cfg.dumb_feed_size if smart else cfg.feed_size
        dumb = self._source.random_unswiped(user_id, smart_ids, dumb_limit)
        dumb = [a for a in dedupe_articles(dumb) if a.id not in smart_set][:dumb_limit]

        feed = blend_feed(smart, dumb, self._rng)
        logger.info(
            "[feed] user=%s smart feed: %d similar + %d exploration", user_id, len(smart), len(dumb)
        )
        return FeedResult(
            mode=MODE_WARM,
            articles=feed,
            smart_count=len(smart),
            dumb_count=len(dumb),
        )
