"""
vetcare_auth.api.errors

JSON error envelope for authentication/authorization rejections.

Responsibilities:
- Render every `AuthError` as `{"success": false, "message": ..., "error": ...}`.
- Log 4xx rejections at warning level and 5xx at error level.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.status import HTTP_401_UNAUTHORIZED

from vetcare_auth.auth.errors import AuthError
from vetcare_auth.observability.logging import get_logger

log = get_logger(__name__)


def error_response(exc: AuthError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "message": exc.message, "error": exc.error},
        headers=headers,
    )


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AuthError)
    async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
        log_fn = log.error if exc.status_code >= 500 else log.warning
        log_fn(
            "auth_error",
            status_code=exc.status_code,
            error_type=type(exc).__name__,
        )
        return error_response(exc)
