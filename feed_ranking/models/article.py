"""
Article model: one news article in the embedding corpus.

Built from store rows via Article.model_validate(d).
The embedding is carried for ranking but never serialized to API clients
(see to_public_dict).
"""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict


class NewArticle(BaseModel):
    """An accepted headline ready to be written to the corpus (no id yet)."""

    title: str
    description: str
    article_url: str
    image_url: str
    source_name: Optional[str] = None
    published_at: Optional[datetime] = None
    embedding: List[float]


class Article(BaseModel):
    """
    A stored article.

    article_url: canonical URL, unique across the corpus.
    similarity: 1 - cosine distance to the taste vector; only set on
    articles selected by similarity ranking.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    title: str = ""
    description: Optional[str] = None
    article_url: str = ""
    image_url: Optional[str] = None
    source_name: Optional[str] = None
    published_at: Optional[datetime] = None
    embedding: Optional[List[float]] = None
    similarity: Optional[float] = None

    def to_public_dict(self) -> Dict:
        """JSON-ready dict for feed responses (drops the embedding)."""
        data = self.model_dump(mode="json", exclude={"embedding"})
        if data.get("similarity") is None:
            data.pop("similarity", None)
        return data

