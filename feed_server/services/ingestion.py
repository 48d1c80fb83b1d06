"""
Corpus ingestion: pull headlines per category, embed them, and write them to
the article corpus.

Runs category by category with a fixed pause in between to stay under the
headline source's rate limit. A 429 for any category stops the whole run; a
failed embedding only skips that article. Re-running is safe because writes
are idempotent on article_url.
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Callable, Dict, List, Optional, Protocol

from feed_ranking.models import NewArticle

from ..errors import RateLimitedError
from .embedding_provider import EmbeddingProvider

logger = logging.getLogger(__name__)

# Fields a headline must carry to be embedded and shown
REQUIRED_FIELDS = ("title", "image", "description")


class HeadlineSource(Protocol):
    def fetch_top_headlines(self, category: str, max_results: int) -> List[Dict]:
        ...


class ArticleSink(Protocol):
    def insert_article(self, article: NewArticle) -> bool:
        """Insert unless the URL exists. True only for a new row."""
        ...


@dataclass
class IngestionReport:
    """What one ingestion run did, filled in as it goes."""

    total_inserted: int = 0
    per_category: Dict[str, int] = field(default_factory=dict)
    categories_processed: List[str] = field(default_factory=list)
    skipped_incomplete: int = 0
    skipped_embedding: int = 0
    duplicates: int = 0
    aborted: bool = False
    abort_reason: Optional[str] = None
    rate_limited_category: Optional[str] = None

    def summary(self) -> str:
        status = f"ABORTED ({self.abort_reason})" if self.aborted else "complete"
        processed = ", ".join(self.categories_processed) or "none"
        return (
            f"Ingestion {status}: saved {self.total_inserted} new articles "
            f"from categories [{processed}] "
            f"(duplicates={self.duplicates}, incomplete={self.skipped_incomplete}, "
            f"no_embedding={self.skipped_embedding})"
        )


def embed_text_for(raw: Dict) -> str:
    """Text sent to the embedding service for a headline."""
    return f"{raw['title']}. {raw['description']}"


def _parse_published_at(value) -> Optional[datetime]:
    if not value or not isinstance(value, str):
        return None
    try:
        dt = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def to_new_article(raw: Dict, embedding: List[float]) -> NewArticle:
    """Map a GNews article dict plus its embedding to a corpus row."""
    source = raw.get("source") or {}
    return NewArticle(
        title=raw["title"],
        description=raw["description"],
        article_url=raw["url"],
        image_url=raw["image"],
        source_name=source.get("name") if isinstance(source, dict) else None,
        published_at=_parse_published_at(raw.get("publishedAt")),
        embedding=embedding,
    )


class IngestionPipeline:
    """Sequential, category-by-category corpus ingestion."""

    def __init__(
        self,
        headlines: HeadlineSource,
        embedder: EmbeddingProvider,
        corpus: ArticleSink,
        categories: List[str],
        per_category: int = 50,
        category_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._headlines = headlines
        self._embedder = embedder
        self._corpus = corpus
        self.categories = list(categories)
        self.per_category = per_category
        self.category_delay = category_delay
        self._sleep = sleep
        # Kept on the instance so a caller can still report partial work when
        # run() raises.
        self.report = IngestionReport()

    def run(self) -> IngestionReport:
        """
        Ingest every configured category.

        Returns the report. Stops early (report.aborted) on a rate limit;
        any other headline or datastore error propagates with self.report
        holding the work done before it.
        """
        self.report = IngestionReport()
        logger.info("--- Starting data ingestion (%d categories) ---", len(self.categories))

        for index, category in enumerate(self.categories):
            logger.info("[ingest] Fetching category: %s...", category)
            try:
                raw_articles = self._headlines.fetch_top_headlines(category, self.per_category)
            except RateLimitedError:
                logger.error(
                    "[ingest] Rate limit hit for category: %s. Stopping ingestion. Try again later.",
                    category,
                )
                self.report.aborted = True
                self.report.rate_limited_category = category
                self.report.abort_reason = f"rate limited on {category}"
                break

            saved = self._ingest_category(category, raw_articles)
            self.report.per_category[category] = saved
            self.report.categories_processed.append(category)
            self.report.total_inserted += saved

            if index < len(self.categories) - 1 and self.category_delay > 0:
                logger.info(
                    "[ingest] Waiting %.1f seconds to respect the headline rate limit...",
                    self.category_delay,
                )
                self._sleep(self.category_delay)

        return self.report

    def _ingest_category(self, category: str, raw_articles: List[Dict]) -> int:
        if not raw_articles:
            logger.info("[ingest] No articles found for category: %s.", category)
            return 0

        logger.info("[ingest] Found %d articles for %s.", len(raw_articles), category)
        saved = 0
        for raw in raw_articles:
            if not all(raw.get(f) for f in REQUIRED_FIELDS) or not raw.get("url"):
                logger.warning("Skipping article with missing data: %s", raw.get("url"))
                self.report.skipped_incomplete += 1
                continue

            embedding = self._embedder.embed(embed_text_for(raw))
            if embedding is None:
                logger.warning("Could not get embedding for: %s. Skipping.", raw["title"])
                self.report.skipped_embedding += 1
                continue

            if self._corpus.insert_article(to_new_article(raw, embedding)):
                saved += 1
            else:
                self.report.duplicates += 1

        logger.info("[ingest] Saved %d new articles for %s.", saved, category)
        return saved
