"""Global exception handler — maps exceptions to structured JSON responses."""

import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

logger = logging.getLogger(__name__)

ERROR_TYPES = {
    400: "bad_request",
    401: "authentication_error",
    403: "forbidden",
    404: "not_found",
    409: "conflict",
    429: "rate_limit",
}


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", "unknown")


def error_body(error_type: str, message: str, request_id: str | None = None) -> dict:
    error = {"type": error_type, "message": message}
    if request_id is not None:
        error["request_id"] = request_id
    return {"status": "error", "error": error}


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in e['loc'])}: {e['msg']}" for e in exc.errors()
        )
        return JSONResponse(status_code=422, content=error_body("validation_error", message, _request_id(request)))

    @app.exception_handler(HTTPException)
    async def http_error(request: Request, exc: HTTPException):
        error_type = ERROR_TYPES.get(exc.status_code, "http_error")
        if exc.status_code >= 500:
            logger.error("HTTP %d on %s %s: %s", exc.status_code, request.method, request.url.path, exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(error_type, str(exc.detail), _request_id(request)),
            headers=exc.headers,
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content=error_body("internal_error", "An unexpected error occurred", _request_id(request)),
        )
