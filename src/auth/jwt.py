"""JWT token creation and verification."""

import uuid
from datetime import datetime, timedelta, timezone

import jwt

from src.config.settings import get_settings

ALGORITHM = "HS256"


def _encode(claims: dict, lifetime: timedelta) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {**claims, "iat": now, "exp": now + lifetime}
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=ALGORITHM)


def create_access_token(user_id: str, email: str, user_name: str = "") -> str:
    settings = get_settings()
    claims = {"sub": user_id, "email": email, "user_name": user_name, "type": "access"}
    return _encode(claims, timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES))


def create_refresh_token(user_id: str) -> str:
    settings = get_settings()
    # jti keeps refresh tokens for the same user distinct
    claims = {"sub": user_id, "type": "refresh", "jti": uuid.uuid4().hex}
    return _encode(claims, timedelta(days=settings.JWT_REFRESH_TOKEN_EXPIRE_DAYS))


def verify_token(token: str) -> dict:
    """Decode and validate a JWT. Raises jwt.ExpiredSignatureError or jwt.InvalidTokenError."""
    settings = get_settings()
    return jwt.decode(token, settings.JWT_SECRET, algorithms=[ALGORITHM])
