"""Register all route modules on the FastAPI app."""

from fastapi import FastAPI

from .auth import router as auth_router
from .feed import router as feed_router
from .root import router as root_router
from .stats import router as stats_router
from .swipes import router as swipes_router


def register_routes(app: FastAPI) -> None:
    """Attach all API routers to the app."""
    app.include_router(root_router)
    app.include_router(auth_router, prefix="/auth", tags=["auth"])
    app.include_router(feed_router, prefix="/api", tags=["feed"])
    app.include_router(swipes_router, prefix="/api", tags=["swipes"])
    app.include_router(stats_router, prefix="/api", tags=["stats"])
