"""Auth dependencies for FastAPI route injection."""

from dataclasses import dataclass

import jwt
from fastapi import HTTPException, Request

from src.auth.jwt import verify_token


@dataclass
class CurrentUser:
    id: str
    email: str


def extract_bearer_token(request: Request) -> str | None:
    auth = request.headers.get("Authorization")
    if auth and auth.startswith("Bearer "):
        return auth[7:]
    return None


def access_token_subject(token: str) -> str | None:
    """Return the user id of a valid access token, or None."""
    try:
        payload = verify_token(token)
    except jwt.InvalidTokenError:
        return None
    if payload.get("type") != "access":
        return None
    return payload.get("sub")


async def get_current_user(request: Request) -> CurrentUser:
    """FastAPI dependency: authenticate via Bearer JWT."""
    token = extract_bearer_token(request)
    if not token:
        raise HTTPException(status_code=401, detail="Missing authentication credentials")

    try:
        payload = verify_token(token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired token")
    if payload.get("type") != "access":
        raise HTTPException(status_code=401, detail="Invalid token type")

    request.state.user_id = payload["sub"]
    return CurrentUser(id=payload["sub"], email=payload.get("email", ""))


def require_self(user: CurrentUser, user_id: str) -> None:
    if user.id != user_id:
        raise HTTPException(status_code=403, detail="You can only modify your own account")
