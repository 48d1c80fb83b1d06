"""Root and health endpoints."""

import logging

from fastapi import APIRouter, Depends

from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/")
def root(state: AppState = Depends(get_state)):
    return {
        "name": "Swipe News API",
        "version": "1.0.0",
        "store": type(state.feed_store).__name__,
        "endpoints": {
            "auth": ["/auth/register", "/auth/login"],
            "feed": ["/api/feed", "/api/swipe", "/api/reset"],
            "stats": ["/api/stats", "/api/liked-articles"],
        },
    }


@router.get("/api/health")
def health(state: AppState = Depends(get_state)):
    if state.engine is None:
        return {"status": "healthy", "database": {"available": False, "message": "in-memory store"}}
    try:
        now = state.check_database()
        return {"status": "healthy", "database": {"available": True, "message": f"connected at {now}"}}
    except Exception:
        logger.exception("[health] Database check failed")
        return {"status": "degraded", "database": {"available": False, "message": "not reachable"}}
