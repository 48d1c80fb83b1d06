"""
Feed Store abstraction.

Backs the article corpus and the swipe history: feed candidate queries,
taste-profile reads, idempotent article writes, swipe recording and stats.
Implementations: in-memory (local runs, tests), SQL (Postgres + pgvector).
Swap via config (DATABASE_URL) for local vs production.
"""

import random
import threading
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol, Sequence

from feed_ranking.models import Article, NewArticle, Swipe
from feed_ranking.utils import rank_by_similarity

from ..errors import ArticleNotFoundError

# Top liked sources reported by stats
TOP_TOPICS_LIMIT = 3


class FeedStore(Protocol):
    """Protocol for corpus + swipe persistence. Implement for in-memory or SQL."""

    # --- Corpus -------------------------------------------------------------

    def insert_article(self, article: NewArticle) -> bool:
        """Insert unless article_url exists. Return True only for a new row."""
        ...

    def count_articles(self) -> int:
        ...

    def similar_unswiped(self, user_id: int, taste: List[float], limit: int) -> List[Article]:
        """Articles the user never swiped, by descending 1 - cosine_distance to taste."""
        ...

    def random_unswiped(
        self,
        user_id: int,
        exclude_ids: Sequence[int],
        limit: int,
    ) -> List[Article]:
        """Articles the user never swiped and not in exclude_ids, in random order."""
        ...

    # --- Swipes -------------------------------------------------------------

    def recent_liked_embeddings(self, user_id: int, limit: int) -> List[List[float]]:
        """Embeddings of the most recently liked articles, newest first."""
        ...

    def record_swipe(self, user_id: int, article_id: int, liked: bool) -> Swipe:
        """Append one swipe. Repeated swipes on an article are kept, not merged."""
        ...

    def reset_swipes(self, user_id: int) -> int:
        """Delete all swipes for the user. Returns rows deleted."""
        ...

    def count_swipes(self, user_id: int) -> int:
        ...

    def top_liked_sources(self, user_id: int, limit: int = TOP_TOPICS_LIMIT) -> List[str]:
        """Source names by count of liked swipes, descending."""
        ...

    def liked_articles(self, user_id: int) -> List[Dict]:
        """[{id, title, article_url, source_name}] most recently liked first."""
        ...


class InMemoryFeedStore:
    """
    Feed store kept in process memory (no persistence).
    Used for local runs without DATABASE_URL, and the test suite.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self._lock = threading.Lock()
        self._rng = rng or random.Random()
        self._articles: Dict[int, Dict] = {}
        self._ids_by_url: Dict[str, int] = {}
        self._swipes: List[Dict] = []
        self._next_article_id = 1
        self._next_swipe_id = 1

    # --- Corpus -------------------------------------------------------------

    def insert_article(self, article: NewArticle) -> bool:
        with self._lock:
            if article.article_url in self._ids_by_url:
                return False
            article_id = self._next_article_id
            self._next_article_id += 1
            row = article.model_dump()
            row["id"] = article_id
            self._articles[article_id] = row
            self._ids_by_url[article.article_url] = article_id
            return True

    def count_articles(self) -> int:
        with self._lock:
            return len(self._articles)

    def _swiped_ids(self, user_id: int) -> set:
        return {s["article_id"] for s in self._swipes if s["user_id"] == user_id}

    def similar_unswiped(self, user_id: int, taste: List[float], limit: int) -> List[Article]:
        with self._lock:
            swiped = self._swiped_ids(user_id)
            candidates = [
                (row, row["embedding"])
                for row in self._articles.values()
                if row["id"] not in swiped
            ]
            ranked = rank_by_similarity(taste, candidates, limit)
            return [Article.model_validate({**row, "similarity": sim}) for row, sim in ranked]

    def random_unswiped(
        self,
        user_id: int,
        exclude_ids: Sequence[int],
        limit: int,
    ) -> List[Article]:
        if limit <= 0:
            return []
        with self._lock:
            skip = self._swiped_ids(user_id) | set(exclude_ids)
            pool = [row for row in self._articles.values() if row["id"] not in skip]
            picked = self._rng.sample(pool, min(limit, len(pool)))
            return [Article.model_validate(row) for row in picked]

    # --- Swipes -------------------------------------------------------------

    def _newest_first(self, swipes: List[Dict]) -> List[Dict]:
        return sorted(swipes, key=lambda s: (s["swipe_time"], s["id"]), reverse=True)

    def recent_liked_embeddings(self, user_id: int, limit: int) -> List[List[float]]:
        with self._lock:
            liked = [s for s in self._swipes if s["user_id"] == user_id and s["liked"]]
            return [
                list(self._articles[s["article_id"]]["embedding"])
                for s in self._newest_first(liked)[:limit]
                if s["article_id"] in self._articles
            ]

    def record_swipe(self, user_id: int, article_id: int, liked: bool) -> Swipe:
        with self._lock:
            if article_id not in self._articles:
                raise ArticleNotFoundError(article_id)
            row = {
                "id": self._next_swipe_id,
                "user_id": user_id,
                "article_id": article_id,
                "liked": bool(liked),
                "swipe_time": datetime.now(timezone.utc),
            }
            self._next_swipe_id += 1
            self._swipes.append(row)
            return Swipe.model_validate(row)

    def reset_swipes(self, user_id: int) -> int:
        with self._lock:
            before = len(self._swipes)
            self._swipes = [s for s in self._swipes if s["user_id"] != user_id]
            return before - len(self._swipes)

    def count_swipes(self, user_id: int) -> int:
        with self._lock:
            return sum(1 for s in self._swipes if s["user_id"] == user_id)

    def top_liked_sources(self, user_id: int, limit: int = TOP_TOPICS_LIMIT) -> List[str]:
        with self._lock:
            counts: Dict[str, int] = {}
            for s in self._swipes:
                if s["user_id"] != user_id or not s["liked"]:
                    continue
                article = self._articles.get(s["article_id"])
                if article is None:
                    continue
                source = article.get("source_name")
                counts[source] = counts.get(source, 0) + 1
            ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)
            return [source for source, _ in ranked[:limit]]

    def liked_articles(self, user_id: int) -> List[Dict]:
        with self._lock:
            liked = [s for s in self._swipes if s["user_id"] == user_id and s["liked"]]
            out = []
            for s in self._newest_first(liked):
                article = self._articles.get(s["article_id"])
                if article is None:
                    continue
                out.append({
                    "id": article["id"],
                    "title": article["title"],
                    "article_url": article["article_url"],
                    "source_name": article.get("source_name"),
                })
            return out
