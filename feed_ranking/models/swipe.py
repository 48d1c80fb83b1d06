"""Swipe model: a recorded like/dislike by a user on an article."""

from datetime import datetime

from pydantic import BaseModel


class Swipe(BaseModel):
    id: int
    user_id: int
    article_id: int
    liked: bool
    swipe_time: datetime
