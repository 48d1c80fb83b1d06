"""
Swipe News API: FastAPI app factory.

Use: uvicorn feed_server.app:app
Or:  swipe-news-server
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import ServerConfig, get_config
from .errors import ConfigError
from .routes import register_routes
from .state import AppState
from .utils import setup_logging

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def register_exception_handlers(app: FastAPI) -> None:
    """Every error leaves the API as {"error": message}."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        return _error(exc.status_code, str(exc.detail), getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        logger.info("Rejected request to %s: %s", request.url.path, exc.errors())
        if request.url.path.startswith("/auth/"):
            return _error(400, "Email and password are required.")
        if request.url.path == "/api/swipe":
            return _error(400, "Missing articleId or liked status")
        return _error(400, "Invalid request body")

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error(500, "Internal server error")


def create_app(config: Optional[ServerConfig] = None, state: Optional[AppState] = None) -> FastAPI:
    """
    Build FastAPI app with CORS, error handlers, routes, and startup.

    Pass a prebuilt AppState (tests) to skip config validation and the
    database check; otherwise state is built from config at startup.
    """
    setup_logging()
    app = FastAPI(
        title="Swipe News API",
        description="Swipe-driven news feed with a hybrid similarity + random blend",
        version="1.0.0",
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)
    register_routes(app)
    if state is not None:
        app.state.feed = state

    @app.on_event("startup")
    def build_state():
        if getattr(app.state, "feed", None) is not None:
            return
        cfg = config or get_config()
        valid, errors = cfg.validate()
        if not valid:
            for e in errors:
                logger.error("[startup] %s", e)
            raise ConfigError("; ".join(errors))
        feed_state = AppState.from_config(cfg)
        if feed_state.engine is not None:
            try:
                now = feed_state.check_database()
            except Exception:
                logger.exception("[startup] Database connection failed")
                feed_state.close()
                raise
            logger.info("[startup] Database connected at %s", now)
        app.state.feed = feed_state
        logger.info("[startup] Swipe News API ready on %s:%d", cfg.host, cfg.port)

    @app.on_event("shutdown")
    def close_state():
        feed_state = getattr(app.state, "feed", None)
        if feed_state is not None:
            feed_state.close()

    return app


app = create_app()
