"""
Embedding Provider

Wraps calls to the external text-embedding service. Two wire shapes are
supported behind one interface and chosen by configuration:

    gradio:  POST {base}/run/predict  {"data": [text]}  -> {"data": [{"embedding": [...]}]}
    direct:  POST {base}/embed        {"text": text}    -> {"embedding": [...]}

embed() never raises for provider problems. Empty input, transport errors,
timeouts, non-2xx responses and malformed bodies all come back as None, which
callers treat as "skip this item". There is no retry here.

Usage:
    provider = create_embedding_provider(config)
    vector = provider.embed("Title. Description")
    if vector is None:
        ...  # skip
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

import requests

from feed_ranking.utils import coerce_embedding

from ..config import EMBEDDING_PROVIDERS, ServerConfig
from ..errors import ConfigError

logger = logging.getLogger(__name__)


class EmbeddingProvider(Protocol):
    def embed(self, text: str) -> Optional[List[float]]:
        """Return the embedding for text, or None if it could not be produced."""
        ...


class HttpEmbeddingProvider:
    """
    Base for HTTP embedding services.

    Subclasses define the endpoint path, request payload and how the vector is
    pulled out of the response body.
    """

    DEFAULT_TIMEOUT = 30.0
    path = ""

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT,
        expected_dimensions: Optional[int] = None,
    ):
        """
        Args:
            base_url: Service root, e.g. https://my-space.hf.space
            timeout: Seconds before the call is abandoned (reported as None)
            expected_dimensions: When set, vectors of any other length are rejected
        """
        if not base_url:
            raise ConfigError("Embedding service URL is not set")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.expected_dimensions = expected_dimensions

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.path}"

    def build_payload(self, text: str) -> Dict[str, Any]:
        raise NotImplementedError

    def extract_vector(self, body: Any) -> Any:
        raise NotImplementedError

    def embed(self, text: str) -> Optional[List[float]]:
        if not text or not text.strip():
            return None
        text = text.strip()
        preview = text[:20]

        try:
            response = requests.post(url=self.url, json=self.build_payload(text), timeout=self.timeout)
            response.raise_for_status()
            body = response.json()
        except requests.Timeout:
            logger.warning("Embedding request timed out after %ss for: %s...", self.timeout, preview)
            return None
        except requests.HTTPError as e:
            status = e.response.status_code if e.response is not None else "?"
            logger.warning("Embedding service returned HTTP %s for: %s...", status, preview)
            return None
        except (requests.RequestException, ValueError) as e:
            logger.warning("Error getting embedding for: %s... (%s)", preview, type(e).__name__)
            return None

        if isinstance(body, dict) and body.get("error"):
            logger.warning("Embedding service reported an error for: %s...: %s", preview, body["error"])
            return None

        try:
            raw = self.extract_vector(body)
        except (KeyError, IndexError, TypeError, AttributeError):
            logger.warning("Malformed embedding response for: %s...", preview)
            return None

        vector = coerce_embedding(raw)
        if vector is None:
            logger.warning("Embedding response did not contain a vector of floats for: %s...", preview)
            return None
        if self.expected_dimensions and len(vector) != self.expected_dimensions:
            logger.warning(
                "Embedding has %d dimensions, expected %d, for: %s...",
                len(vector), self.expected_dimensions, preview,
            )
            return None
        return vector


class GradioEmbeddingProvider(HttpEmbeddingProvider):
    """Gradio predict API (e.g. a Hugging Face Space)."""

    path = "/run/predict"

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {"data": [text]}

    def extract_vector(self, body: Any) -> Any:
        first = body["data"][0]
        if isinstance(first, dict):
            if first.get("error"):
                raise TypeError(first["error"])
            return first["embedding"]
        return first


class DirectEmbeddingProvider(HttpEmbeddingProvider):
    """Plain JSON embedding endpoint."""

    path = "/embed"

    def build_payload(self, text: str) -> Dict[str, Any]:
        return {"text": text}

    def extract_vector(self, body: Any) -> Any:
        return body["embedding"]


_PROVIDERS = {
    "gradio": GradioEmbeddingProvider,
    "direct": DirectEmbeddingProvider,
}


def create_embedding_provider(config: ServerConfig) -> HttpEmbeddingProvider:
    """Build the provider named by config.embedding_provider."""
    name = (config.embedding_provider or "").lower()
    if name not in _PROVIDERS:
        raise ConfigError(
            f"Unknown embedding provider {config.embedding_provider!r} "
            f"(expected one of {', '.join(EMBEDDING_PROVIDERS)})"
        )
    return _PROVIDERS[name](
        config.embedding_service_url,
        timeout=config.embedding_timeout,
        expected_dimensions=config.embedding_dimensions,
    )
