"""Request/response models for register and login."""

from typing import Optional

from pydantic import BaseModel


class CredentialsRequest(BaseModel):
    """Body for POST /auth/register and POST /auth/login. Presence is checked by the route."""

    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    id: int
    email: str


class TokenResponse(BaseModel):
    token: str
