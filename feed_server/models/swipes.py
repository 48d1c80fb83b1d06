"""Request/response models for swipes and reset."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SwipeRequest(BaseModel):
    """Body for POST /api/swipe: {"articleId": 12, "liked": true}."""

    model_config = ConfigDict(populate_by_name=True)

    article_id: Optional[int] = Field(default=None, alias="articleId")
    liked: Optional[bool] = None


class SwipeResponse(BaseModel):
    """Stored swipe row."""

    id: int
    user_id: int
    article_id: int
    liked: bool
    swipe_time: datetime


class MessageResponse(BaseModel):
    message: str
