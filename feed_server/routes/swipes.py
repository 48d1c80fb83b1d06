"""Swipe recording and reset."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..auth import AuthenticatedUser, get_current_user
from ..errors import ArticleNotFoundError
from ..models import MessageResponse, SwipeRequest, SwipeResponse
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/swipe", status_code=201, response_model=SwipeResponse)
def record_swipe(
    request: SwipeRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """Append one like/dislike. Repeat swipes on the same article are kept."""
    if not request.article_id or request.liked is None:
        raise HTTPException(status_code=400, detail="Missing articleId or liked status")
    try:
        swipe = state.feed_store.record_swipe(user.id, request.article_id, request.liked)
    except ArticleNotFoundError:
        raise HTTPException(status_code=404, detail="Article not found")
    except Exception:
        logger.exception("[swipe] Error saving swipe for user=%s", user.id)
        raise HTTPException(status_code=500, detail="Internal server error")
    logger.info(
        "[swipe] User %s %s article %s",
        user.id, "liked" if swipe.liked else "disliked", swipe.article_id,
    )
    return SwipeResponse(**swipe.model_dump())


@router.post("/reset", response_model=MessageResponse)
def reset_swipes(
    user: AuthenticatedUser = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """Delete the user's whole swipe history (back to cold start)."""
    try:
        deleted = state.feed_store.reset_swipes(user.id)
    except Exception:
        logger.exception("[swipe] Error resetting swipes for user=%s", user.id)
        raise HTTPException(status_code=500, detail="Internal server error")
    logger.info("[swipe] Swipes reset for user %s (%d removed)", user.id, deleted)
    return MessageResponse(message="Swipes reset successfully")
