"""Exceptions raised by feed server components and mapped to HTTP status by the routes."""

from typing import Optional


class FeedServerError(Exception):
    """Base class for feed server errors."""


class ConfigError(FeedServerError):
    """Required configuration is missing or invalid."""


class AuthError(FeedServerError):
    """Credential or token could not be verified."""


class EmailTakenError(FeedServerError):
    """Registration attempted with an email that already has an account."""


class ArticleNotFoundError(FeedServerError):
    """A swipe referenced an article id that is not in the corpus."""

    def __init__(self, article_id: int):
        super().__init__(f"Article {article_id} not found")
        self.article_id = article_id


class HeadlineSourceError(FeedServerError):
    """The external headline source failed for a category."""

    def __init__(self, message: str, category: str = "", status_code: Optional[int] = None):
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class RateLimitedError(HeadlineSourceError):
    """The headline source answered HTTP 429 for a category."""

    def __init__(self, category: str):
        super().__init__(f"Rate limit hit for category: {category}", category, 429)
