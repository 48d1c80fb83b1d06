#!/usr/bin/env python3
"""
Populate the article corpus from GNews top headlines.

For each category: fetch up to N headlines, embed "title. description" via
the embedding service, and insert into Postgres (idempotent on article_url).
Waits between categories and stops the whole run on a 429.

Requires:
  - GNEWS_API_KEY
  - EMBEDDING_SERVICE_URL (or ML_SERVICE_URL), not a localhost URL
  - DATABASE_URL

Usage:
  From repo root:
    python -m feed_server.scripts.ingest
    swipe-news-ingest --categories technology,science --per-category 20

  Optional:
    --delay 2.0
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from feed_server.config import ServerConfig, get_config
from feed_server.services import (
    GNewsClient,
    IngestionPipeline,
    SqlFeedStore,
    create_db_engine,
    create_embedding_provider,
    create_session_factory,
)
from feed_server.utils import setup_logging

logger = logging.getLogger("feed_server.scripts.ingest")


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Ingest GNews headlines into the article corpus")
    parser.add_argument(
        "--categories",
        default=None,
        help="Comma-separated GNews topics (default: INGEST_CATEGORIES env)",
    )
    parser.add_argument(
        "--per-category",
        type=int,
        default=None,
        help="Max headlines per category (default: INGEST_ARTICLES_PER_CATEGORY env, 50)",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=None,
        help="Seconds to wait between categories (default: INGEST_CATEGORY_DELAY env, 2.0)",
    )
    return parser.parse_args(argv)


def _apply_overrides(config: ServerConfig, args: argparse.Namespace) -> ServerConfig:
    overrides = {}
    if args.categories:
        overrides["ingest_categories"] = [c.strip() for c in args.categories.split(",") if c.strip()]
    if args.per_category is not None:
        overrides["ingest_articles_per_category"] = args.per_category
    if args.delay is not None:
        overrides["ingest_category_delay"] = max(0.0, args.delay)
    return replace(config, **overrides) if overrides else config


def main(argv: Optional[List[str]] = None, config: Optional[ServerConfig] = None) -> int:
    setup_logging()
    args = _parse_args(argv)
    config = _apply_overrides(config or get_config(), args)

    valid, errors = config.validate_ingestion()
    if not valid:
        for e in errors:
            logger.error("Config error: %s", e)
        return 1

    engine = None
    pipeline = None
    try:
        headlines = GNewsClient(
            config.gnews_api_key,
            base_url=config.gnews_base_url,
            language=config.ingest_language,
            timeout=config.headline_timeout,
        )
        embedder = create_embedding_provider(config)
        engine = create_db_engine(config)
        # One dedicated connection for the whole run
        with engine.connect() as conn:
            corpus = SqlFeedStore(create_session_factory(conn))
            pipeline = IngestionPipeline(
                headlines,
                embedder,
                corpus,
                config.ingest_categories,
                per_category=config.ingest_articles_per_category,
                category_delay=config.ingest_category_delay,
            )
            report = pipeline.run()
    except Exception:
        logger.exception("Error during ingestion")
        if pipeline is not None:
            logger.info(pipeline.report.summary())
        return 1
    finally:
        if engine is not None:
            engine.dispose()
        logger.info("--- Data ingestion finished ---")

    logger.info(report.summary())
    return 1 if report.aborted else 0


if __name__ == "__main__":
    sys.exit(main())
