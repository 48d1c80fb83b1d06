"""Usage stats and liked articles."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from ..auth import AuthenticatedUser, get_current_user
from ..models import LikedArticle, StatsResponse
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=StatsResponse)
def get_stats(
    user: AuthenticatedUser = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """Total swipes and the top 3 most-liked source names."""
    try:
        total = state.feed_store.count_swipes(user.id)
        top = state.feed_store.top_liked_sources(user.id)
    except Exception:
        logger.exception("[stats] Error fetching stats for user=%s", user.id)
        raise HTTPException(status_code=500, detail="Internal server error")
    return StatsResponse(totalSwipes=total, topTopics=top)


@router.get("/liked-articles", response_model=List[LikedArticle])
def get_liked_articles(
    user: AuthenticatedUser = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    try:
        rows = state.feed_store.liked_articles(user.id)
    except Exception:
        logger.exception("[stats] Error fetching liked articles for user=%s", user.id)
        raise HTTPException(status_code=500, detail="Internal server error")
    return [LikedArticle(**r) for r in rows]
