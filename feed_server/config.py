"""
Server Configuration

Loads configuration from environment variables and provides defaults.
Supports loading from .env file using python-dotenv. Shared by the serving
process and the batch ingestion script.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional
from urllib.parse import urlparse

from dotenv import load_dotenv

# Single .env at the project root for server and ingestion
root_env = Path(__file__).resolve().parent.parent / ".env"
if root_env.exists():
    load_dotenv(root_env)

DEFAULT_CATEGORIES = ["general", "technology", "science", "sports", "entertainment"]

EMBEDDING_PROVIDERS = ("gradio", "direct")


def _bool_env(key: str, default: bool) -> bool:
    v = os.getenv(key)
    if v is None or not v.strip():
        return default
    return v.strip().lower() in ("1", "true", "yes", "on")


def _list_env(key: str, default: List[str]) -> List[str]:
    v = os.getenv(key)
    if not v:
        return list(default)
    items = [part.strip() for part in v.split(",") if part.strip()]
    return items or list(default)


@dataclass
class ServerConfig:
    """Server and ingestion configuration."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 4000

    # Database (SQLAlchemy URL). None = in-memory stores (local runs, tests).
    database_url: Optional[str] = None
    database_ssl: bool = True
    db_pool_size: int = 5
    db_max_overflow: int = 10

    # Auth
    jwt_secret: Optional[str] = None
    jwt_expires_days: int = 7

    # Embedding service
    embedding_service_url: Optional[str] = None
    embedding_provider: str = "gradio"
    embedding_timeout: float = 30.0
    embedding_dimensions: int = 384

    # Headline source (GNews)
    gnews_api_key: Optional[str] = None
    gnews_base_url: str = "https://gnews.io/api/v4"
    headline_timeout: float = 30.0

    # Ingestion batch
    ingest_categories: List[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    ingest_articles_per_category: int = 50
    ingest_category_delay: float = 2.0
    ingest_language: str = "en"

    @classmethod
    def from_env(cls) -> "ServerConfig":
        """Load configuration from environment variables."""
        provider = os.getenv("EMBEDDING_PROVIDER", "gradio").strip().lower() or "gradio"
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "4000")),
            database_url=os.getenv("DATABASE_URL") or None,
            database_ssl=_bool_env("DATABASE_SSL", True),
            db_pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            db_max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            jwt_secret=os.getenv("JWT_SECRET") or None,
            jwt_expires_days=int(os.getenv("JWT_EXPIRES_DAYS", "7")),
            embedding_service_url=(
                os.getenv("EMBEDDING_SERVICE_URL") or os.getenv("ML_SERVICE_URL") or None
            ),
            embedding_provider=provider,
            embedding_timeout=float(os.getenv("EMBEDDING_TIMEOUT", "30")),
            embedding_dimensions=int(os.getenv("EMBEDDING_DIMENSIONS", "384")),
            gnews_api_key=os.getenv("GNEWS_API_KEY") or None,
            gnews_base_url=os.getenv("GNEWS_BASE_URL", "https://gnews.io/api/v4").rstrip("/"),
            headline_timeout=float(os.getenv("HEADLINE_TIMEOUT", "30")),
            ingest_categories=_list_env("INGEST_CATEGORIES", DEFAULT_CATEGORIES),
            ingest_articles_per_category=int(os.getenv("INGEST_ARTICLES_PER_CATEGORY", "50")),
            ingest_category_delay=float(os.getenv("INGEST_CATEGORY_DELAY", "2.0")),
            ingest_language=os.getenv("INGEST_LANGUAGE", "en"),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration for the serving process.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.jwt_secret:
            errors.append("JWT_SECRET is not set")

        if self.jwt_expires_days < 1:
            errors.append(f"JWT_EXPIRES_DAYS must be positive, got {self.jwt_expires_days}")

        return len(errors) == 0, errors

    def validate_ingestion(self) -> tuple[bool, list[str]]:
        """
        Validate the configuration for a batch ingestion run.

        The embedding service must be reachable from the batch host, so a
        localhost URL is rejected.

        Returns:
            (is_valid, list_of_errors)
        """
        errors = []

        if not self.gnews_api_key:
            errors.append("GNEWS_API_KEY is not set")

        if not self.embedding_service_url:
            errors.append("EMBEDDING_SERVICE_URL (or ML_SERVICE_URL) is not set")
        else:
            host = urlparse(self.embedding_service_url).hostname or ""
            if host in ("localhost", "127.0.0.1", "::1"):
                errors.append(
                    f"EMBEDDING_SERVICE_URL points at {host}; ingestion requires a public URL"
                )

        if self.embedding_provider not in EMBEDDING_PROVIDERS:
            errors.append(
                f"EMBEDDING_PROVIDER must be one of {', '.join(EMBEDDING_PROVIDERS)}, "
                f"got {self.embedding_provider!r}"
            )

        if not self.database_url:
            errors.append("DATABASE_URL is not set")

        if not self.ingest_categories:
            errors.append("INGEST_CATEGORIES is empty")

        if self.ingest_articles_per_category < 1:
            errors.append("INGEST_ARTICLES_PER_CATEGORY must be at least 1")

        return len(errors) == 0, errors


# Global config instance
_config: Optional[ServerConfig] = None


def get_config() -> ServerConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = ServerConfig.from_env()
    return _config


def reload_config() -> ServerConfig:
    """Reload configuration from environment."""
    global _config
    _config = None
    return get_config()
