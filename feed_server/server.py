#!/usr/bin/env python3
"""
Swipe News API server: entrypoint for `swipe-news-server`.

Equivalent to: uvicorn feed_server.app:app --host $HOST --port $PORT
"""

import uvicorn

from .config import get_config


def main() -> None:
    config = get_config()
    uvicorn.run("feed_server.app:app", host=config.host, port=config.port)


if __name__ == "__main__":
    main()
