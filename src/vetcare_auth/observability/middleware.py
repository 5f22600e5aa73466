"""
vetcare_auth.observability.middleware

Request-scoped logging context for the auth layer.

Responsibilities:
- Propagate `x-request-id` (generate one when the caller sends none).
- Bind request metadata, and later the resolved principal, into structlog contextvars.
- Emit one `request_completed` event carrying status, duration and principal id.
"""

from __future__ import annotations

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from vetcare_auth.auth.models import Principal
from vetcare_auth.observability.logging import get_logger

log = get_logger(__name__)

REQUEST_ID_HEADER = "x-request-id"


def bind_principal(principal: Principal) -> None:
    """
    Attach the authenticated caller to every later log line of this request.
    Only identifiers are bound; never the token or its claims.
    """
    structlog.contextvars.bind_contextvars(
        principal_id=principal.id,
        principal_role=principal.role,
        principal_source=principal.source,
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=request.url.path,
            method=request.method,
        )
        started = time.perf_counter()
        try:
            response: Response = await call_next(request)
            principal = getattr(request.state, "principal", None)
            log.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
                principal_id=principal.id if principal is not None else None,
            )
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


# --- Module Notes -----------------------------------------------------------
# Dependencies run in a task spawned by `call_next`, so principal fields they bind
# are visible to handler logs but not back here; `request_completed` reads
# `request.state.principal` instead.
