"""
Headline client for the GNews top-headlines API.

One call per category. HTTP 429 raises RateLimitedError so the ingestion run
can stop; every other failure raises HeadlineSourceError. The API token is
sent as a query parameter and never logged.
"""

import logging
from typing import Dict, List

import requests

from ..errors import ConfigError, HeadlineSourceError, RateLimitedError

logger = logging.getLogger(__name__)


class GNewsClient:
    """Fetches top headlines per topic from GNews (https://gnews.io)."""

    DEFAULT_BASE_URL = "https://gnews.io/api/v4"

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        language: str = "en",
        timeout: float = 30.0,
    ):
        if not api_key:
            raise ConfigError("GNEWS_API_KEY is not set")
        self._api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.language = language
        self.timeout = timeout

    def fetch_top_headlines(self, category: str, max_results: int) -> List[Dict]:
        """
        Return raw GNews article dicts for a topic.

        Each dict has title, description, url, image, publishedAt and
        source {name, url}; any of them may be missing.
        """
        params = {
            "lang": self.language,
            "max": max_results,
            "topic": category,
            "token": self._api_key,
        }
        try:
            response = requests.get(
                f"{self.base_url}/top-headlines", params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise HeadlineSourceError(
                f"Headline request failed for category {category}: {type(e).__name__}", category
            ) from e

        if response.status_code == 429:
            raise RateLimitedError(category)
        if not response.ok:
            raise HeadlineSourceError(
                f"Headline source returned HTTP {response.status_code} for category {category}",
                category,
                response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise HeadlineSourceError(
                f"Headline source returned invalid JSON for category {category}", category
            ) from e

        articles = body.get("articles") if isinstance(body, dict) else None
        if not articles:
            return []
        return [a for a in articles if isinstance(a, dict)]
