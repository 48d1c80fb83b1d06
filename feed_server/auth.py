"""
Auth collaborator: password hashing, bearer tokens, and the request
dependency that protects /api routes.

Tokens are HS256 JWTs signed with JWT_SECRET carrying {"user": {id, email}}
and a fixed expiry. Any missing, malformed or expired token is a 401; the
response never says which part was wrong.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
import jwt
from fastapi import Depends, HTTPException, Request

from .errors import AuthError
from .state import AppState, get_state

JWT_ALGORITHM = "HS256"
BCRYPT_ROUNDS = 10
# bcrypt only reads the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class AuthenticatedUser:
    id: int
    email: str


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def create_access_token(
    user_id: int,
    email: str,
    secret: str,
    expires_days: int = 7,
    now: Optional[datetime] = None,
) -> str:
    """Sign a bearer token for the user."""
    if not secret:
        raise AuthError("JWT secret is not configured")
    issued = now or datetime.now(timezone.utc)
    payload = {
        "user": {"id": user_id, "email": email},
        "iat": issued,
        "exp": issued + timedelta(days=expires_days),
    }
    return jwt.encode(payload, secret, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str, secret: str) -> AuthenticatedUser:
    """Verify signature and expiry; raise AuthError for anything invalid."""
    if not secret:
        raise AuthError("JWT secret is not configured")
    try:
        payload = jwt.decode(
            token, secret, algorithms=[JWT_ALGORITHM], options={"require": ["exp"]}
        )
    except jwt.PyJWTError as e:
        raise AuthError("Invalid token") from e
    user = payload.get("user")
    if not isinstance(user, dict):
        raise AuthError("Invalid token")
    user_id = user.get("id")
    if isinstance(user_id, bool) or not isinstance(user_id, int):
        raise AuthError("Invalid token")
    return AuthenticatedUser(id=user_id, email=str(user.get("email") or ""))


def get_current_user(request: Request, state: AppState = Depends(get_state)) -> AuthenticatedUser:
    """FastAPI dependency: the authenticated user for a bearer-protected route."""
    header = request.headers.get("authorization")
    if not header or not header.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Unauthorized: No token provided")
    token = header[len("Bearer "):].strip()
    try:
        return decode_access_token(token, state.config.jwt_secret)
    except AuthError:
        raise HTTPException(status_code=401, detail="Unauthorized: Invalid token")
