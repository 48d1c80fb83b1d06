"""GET /api/feed: the hybrid smart + dumb feed."""

import logging

from fastapi import APIRouter, Depends, HTTPException

from ..auth import AuthenticatedUser, get_current_user
from ..state import AppState, get_state
from ..utils import to_feed_payload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/feed")
def get_feed(
    user: AuthenticatedUser = Depends(get_current_user),
    state: AppState = Depends(get_state),
):
    """
    Up to feed_size articles the user has never swiped.

    Users with likes get 7 taste-ranked + 3 random articles, shuffled
    together; users without likes get random articles only. Each call
    recomputes the taste vector and reshuffles.
    """
    try:
        result = state.feed_assembler().assemble(user.id)
    except Exception:
        logger.exception("[feed] Error fetching feed for user=%s", user.id)
        raise HTTPException(status_code=500, detail="Internal server error")
    return to_feed_payload(result.articles)
