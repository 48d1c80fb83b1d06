"""Response models for usage stats and the liked-articles list."""

from typing import List, Optional

from pydantic import BaseModel


class StatsResponse(BaseModel):
    totalSwipes: int
    topTopics: List[Optional[str]] = []


class LikedArticle(BaseModel):
    id: int
    title: str
    article_url: str
    source_name: Optional[str] = None
