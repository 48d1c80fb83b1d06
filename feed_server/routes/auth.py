"""Register and login (public)."""

import logging
from typing import Tuple

from fastapi import APIRouter, Depends, HTTPException

from ..auth import MAX_PASSWORD_BYTES, create_access_token, hash_password, verify_password
from ..errors import EmailTakenError
from ..models import CredentialsRequest, TokenResponse, UserResponse
from ..state import AppState, get_state

logger = logging.getLogger(__name__)

router = APIRouter()


def _require_credentials(request: CredentialsRequest) -> Tuple[str, str]:
    email = (request.email or "").strip()
    password = request.password or ""
    if not email or not password:
        raise HTTPException(status_code=400, detail="Email and password are required.")
    return email, password


@router.post("/register", status_code=201, response_model=UserResponse)
def register(request: CredentialsRequest, state: AppState = Depends(get_state)):
    email, password = _require_credentials(request)
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise HTTPException(
            status_code=400, detail=f"Password must be at most {MAX_PASSWORD_BYTES} bytes."
        )
    try:
        user = state.user_store.create_user(email, hash_password(password))
    except EmailTakenError:
        raise HTTPException(status_code=400, detail="Email already in use.")
    except Exception:
        logger.exception("[auth] Error during registration")
        raise HTTPException(status_code=500, detail="Internal server error")
    logger.info("[auth] New user registered: id=%s", user["id"])
    return UserResponse(id=user["id"], email=user["email"])


@router.post("/login", response_model=TokenResponse)
def login(request: CredentialsRequest, state: AppState = Depends(get_state)):
    email, password = _require_credentials(request)
    try:
        user = state.user_store.get_user_by_email(email)
        if not user or not verify_password(password, user["password_hash"]):
            raise HTTPException(status_code=401, detail="Invalid credentials.")
        token = create_access_token(
            user["id"],
            user["email"],
            state.config.jwt_secret,
            expires_days=state.config.jwt_expires_days,
        )
    except HTTPException:
        raise
    except Exception:
        logger.exception("[auth] Error during login")
        raise HTTPException(status_code=500, detail="Internal server error")
    return TokenResponse(token=token)
