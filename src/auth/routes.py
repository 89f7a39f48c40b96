"""Auth endpoints: register, login, refresh, logout."""

import hashlib
import logging
from datetime import datetime, timezone

import bcrypt as _bcrypt
import jwt
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, EmailStr, Field

from src.auth.dependencies import CurrentUser, get_current_user
from src.auth.jwt import create_access_token, create_refresh_token, verify_token
from src.db.client import get_supabase
from src.db.models import REFRESH_TOKENS
from src.users import repository as users
from src.users.schemas import Profile

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/auth", tags=["Auth"])


# --- Request / Response schemas ---

class RegisterRequest(BaseModel):
    user_name: str = Field(min_length=3, max_length=50)
    email: EmailStr
    password: str = Field(min_length=8)

class LoginRequest(BaseModel):
    email: EmailStr
    password: str

class RefreshRequest(BaseModel):
    refresh_token: str

class AuthData(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    user: Profile | None = None

class TokenResponse(BaseModel):
    status: str = "success"
    data: AuthData


# --- Helpers ---

def _hash_refresh_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


def _issue_tokens(user: dict) -> AuthData:
    """Mint an access/refresh pair and persist the refresh token hash."""
    access = create_access_token(user["id"], user["email"], user.get("user_name", ""))
    refresh = create_refresh_token(user["id"])
    expires = datetime.fromtimestamp(verify_token(refresh)["exp"], tz=timezone.utc)

    get_supabase().table(REFRESH_TOKENS).insert({
        "user_id": user["id"],
        "token_hash": _hash_refresh_token(refresh),
        "expires_at": expires.isoformat(),
        "is_revoked": False,
    }).execute()

    return AuthData(access_token=access, refresh_token=refresh)


# --- Endpoints ---

@router.post("/register", status_code=201, response_model=TokenResponse, summary="Register a new user", description="Create a new account and return the user with JWT tokens.")
async def register(body: RegisterRequest):
    if users.get_by_email(body.email):
        raise HTTPException(status_code=400, detail="User already exists, please sign in")

    password_hash = _bcrypt.hashpw(body.password.encode(), _bcrypt.gensalt()).decode()
    user = users.create(body.user_name, body.email, password_hash)
    logger.info("Registered user %s", user["id"])

    data = _issue_tokens(user)
    data.user = Profile.model_validate(user)
    return TokenResponse(data=data)


@router.post("/login", response_model=TokenResponse, summary="Login", description="Authenticate with email and password, returns the user with access and refresh tokens.")
async def login(body: LoginRequest):
    user = users.get_by_email(body.email)
    if not user or not _bcrypt.checkpw(body.password.encode(), user["password_hash"].encode()):
        raise HTTPException(status_code=400, detail="Invalid email or password")

    data = _issue_tokens(user)
    data.user = Profile.model_validate(user)
    return TokenResponse(data=data)


@router.post("/refresh", response_model=TokenResponse, summary="Refresh access token", description="Exchange a valid refresh token for a new token pair. Old refresh token is revoked.")
async def refresh(body: RefreshRequest):
    try:
        payload = verify_token(body.refresh_token)
    except jwt.InvalidTokenError:
        raise HTTPException(status_code=401, detail="Invalid or expired refresh token")

    if payload.get("type") != "refresh":
        raise HTTPException(status_code=401, detail="Invalid token type")

    db = get_supabase()
    stored = (
        db.table(REFRESH_TOKENS)
        .select("id, is_revoked")
        .eq("token_hash", _hash_refresh_token(body.refresh_token))
        .execute()
    )
    if not stored.data or stored.data[0]["is_revoked"]:
        raise HTTPException(status_code=401, detail="Refresh token revoked or not found")

    db.table(REFRESH_TOKENS).update({"is_revoked": True}).eq("id", stored.data[0]["id"]).execute()

    user = users.get_by_id(payload["sub"])
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")

    return TokenResponse(data=_issue_tokens(user))


@router.post("/logout", summary="Logout", description="Revoke the refresh token. Requires a valid access token.")
async def logout(body: RefreshRequest, user: CurrentUser = Depends(get_current_user)):
    (
        get_supabase().table(REFRESH_TOKENS)
        .update({"is_revoked": True})
        .eq("token_hash", _hash_refresh_token(body.refresh_token))
        .eq("user_id", user.id)
        .execute()
    )
    return {"status": "success", "data": {"message": "Logged out successfully"}}
