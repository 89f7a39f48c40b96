"""In-memory sliding window rate limiter keyed by the caller's user id."""

import time
from collections import defaultdict, deque

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.auth.dependencies import access_token_subject, extract_bearer_token
from src.config.settings import get_settings
from src.middleware.error_handler import error_body

WINDOW_SECONDS = 60.0
EXEMPT_PATHS = {"/health", "/docs", "/redoc", "/openapi.json"}
MESSAGE_PATH = "/api/v1/messages"


class RateLimiterMiddleware(BaseHTTPMiddleware):
    def __init__(self, app):
        super().__init__(app)
        # user_id -> request timestamps inside the current window
        self._standard_windows: dict[str, deque[float]] = defaultdict(deque)
        self._message_windows: dict[str, deque[float]] = defaultdict(deque)

    @staticmethod
    def _check_limit(window: deque[float], limit: int, now: float) -> tuple[bool, int]:
        """Remove expired entries, check if under limit. Returns (allowed, retry_after_seconds)."""
        cutoff = now - WINDOW_SECONDS
        while window and window[0] < cutoff:
            window.popleft()

        if len(window) >= limit:
            return False, int(window[0] - cutoff) + 1

        window.append(now)
        return True, 0

    @staticmethod
    def _reject(message: str, retry_after: int) -> Response:
        return JSONResponse(
            status_code=429,
            content=error_body("rate_limit", message),
            headers={"Retry-After": str(retry_after)},
        )

    async def dispatch(self, request: Request, call_next) -> Response:
        if request.url.path in EXEMPT_PATHS:
            return await call_next(request)

        token = extract_bearer_token(request)
        user_id = access_token_subject(token) if token else None
        if not user_id:
            # Anonymous requests pass through; auth rejects them where required
            return await call_next(request)

        settings = get_settings()
        now = time.time()

        if request.method == "POST" and request.url.path.rstrip("/") == MESSAGE_PATH:
            allowed, retry_after = self._check_limit(self._message_windows[user_id], settings.RATE_LIMIT_MESSAGES, now)
            if not allowed:
                return self._reject("Message rate limit exceeded", retry_after)

        allowed, retry_after = self._check_limit(self._standard_windows[user_id], settings.RATE_LIMIT_STANDARD, now)
        if not allowed:
            return self._reject("Rate limit exceeded", retry_after)

        return await call_next(request)
