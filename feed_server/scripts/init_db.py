#!/usr/bin/env python3
"""
Create the pgvector extension and the users / articles / user_swipes tables.

Usage (from repo root, DATABASE_URL set):
    python -m feed_server.scripts.init_db
"""

import logging
import sys

from feed_server.config import get_config
from feed_server.services import create_db_engine, create_schema
from feed_server.utils import setup_logging

logger = logging.getLogger("feed_server.scripts.init_db")


def main() -> int:
    setup_logging()
    config = get_config()
    if not config.database_url:
        logger.error("Config error: DATABASE_URL is not set")
        return 1
    engine = create_db_engine(config)
    try:
        create_schema(engine)
    except Exception:
        logger.exception("Schema creation failed")
        return 1
    finally:
        engine.dispose()
    return 0


if __name__ == "__main__":
    sys.exit(main())
