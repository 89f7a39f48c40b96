"""Chat Relay API — FastAPI application entry point."""

import logging

from fastapi import FastAPI

from src.auth.routes import router as auth_router
from src.config.cors import SecurityHeadersMiddleware, configure_cors
from src.config.settings import get_settings
from src.messages.routes import router as messages_router
from src.middleware.error_handler import register_error_handlers
from src.middleware.rate_limiter import RateLimiterMiddleware
from src.middleware.request_id import RequestIDMiddleware
from src.relay.routes import router as relay_router
from src.users.routes import router as users_router

logging.basicConfig(
    level=get_settings().LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Chat Relay API",
    description=(
        "Backend for a one-to-one real-time chat.\n\n"
        "## Features\n"
        "- Registration, login and JWT refresh\n"
        "- Avatar selection, user search and contact lists\n"
        "- Persisted direct message history\n"
        "- WebSocket presence and best-effort message relay at `/ws/relay`\n\n"
        "## Relay events\n"
        "Frames are `{\"event\": name, \"data\": value}`. Clients send `add-user` and `msg-send`; "
        "the server sends `online-users`, `msg-receive` and `error`. Relayed messages are not stored: "
        "persist them through `POST /api/v1/messages`.\n\n"
        "## Authentication\n"
        "All HTTP endpoints except `/health`, `/docs` and `/api/v1/auth/*` require "
        "`Authorization: Bearer <jwt>`."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "Health", "description": "Health check endpoints"},
        {"name": "Auth", "description": "Authentication: register, login, token refresh, logout"},
        {"name": "Users", "description": "Avatar, search and contacts"},
        {"name": "Messages", "description": "Persisted message history"},
        {"name": "Relay", "description": "Presence and real-time relay"},
    ],
)

# --- Middleware (last added is outermost) ---
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)
configure_cors(app)
app.add_middleware(RateLimiterMiddleware)

# --- Error handlers ---
register_error_handlers(app)

# --- Routes ---
app.include_router(auth_router)
app.include_router(users_router)
app.include_router(messages_router)
app.include_router(relay_router)


@app.get("/health", tags=["Health"], summary="Health check", description="Returns OK if the service is running.")
async def health_check():
    return {"status": "ok"}
