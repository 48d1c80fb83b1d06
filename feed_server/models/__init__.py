"""Pydantic request/response models for the API."""

from .auth import CredentialsRequest, TokenResponse, UserResponse
from .stats import LikedArticle, StatsResponse
from .swipes import MessageResponse, SwipeRequest, SwipeResponse

__all__ = [
    "CredentialsRequest",
    "TokenResponse",
    "UserResponse",
    "LikedArticle",
    "StatsResponse",
    "MessageResponse",
    "SwipeRequest",
    "SwipeResponse",
]
