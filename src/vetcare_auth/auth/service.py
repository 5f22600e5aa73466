"""
vetcare_auth.auth.service

Per-request authentication flow shared by the mandatory and optional variants.

Responsibilities:
- Mandatory: token -> claims -> principal, or a typed `AuthError`.
- Optional: same happy path, but every failure yields "no principal" after
  being logged and reported to an observability hook.

Mandatory flow:
    no token            -> TokenMissing
    verify fails        -> TokenMalformed | TokenInvalidSignature | TokenExpired
    resolve misses      -> PrincipalNotFound
    store/internal fault -> InternalFault
    otherwise           -> Principal
"""

from __future__ import annotations

from collections.abc import Callable

from vetcare_auth.auth.errors import AuthError, InternalFault, StoreLookupFault, TokenMissing
from vetcare_auth.auth.jwt import TokenVerifier
from vetcare_auth.auth.models import Principal
from vetcare_auth.auth.resolver import IdentityResolver
from vetcare_auth.observability.logging import get_logger

log = get_logger(__name__)

FailOpenHook = Callable[[Exception], None]


class Authenticator:
    def __init__(
        self,
        *,
        verifier: TokenVerifier,
        resolver: IdentityResolver,
        on_fail_open: FailOpenHook | None = None,
    ) -> None:
        self._verifier = verifier
        self._resolver = resolver
        self._on_fail_open = on_fail_open

    async def authenticate(self, token: str | None) -> Principal:
        if not token:
            raise TokenMissing()

        claims = self._verifier.verify(token)
        try:
            return await self._resolver.resolve(claims)
        except AuthError as e:
            if isinstance(e, StoreLookupFault):
                log.error(
                    "auth_internal_fault",
                    source=e.source,
                    subject_id=claims.subject_id,
                    detail=e.detail,
                )
                raise InternalFault() from e
            raise
        except Exception as e:
            log.exception("auth_internal_fault", subject_id=claims.subject_id)
            raise InternalFault() from e

    async def authenticate_optional(self, token: str | None) -> Principal | None:
        if not token:
            return None
        try:
            return await self.authenticate(token)
        except Exception as e:
            self._record_fail_open(e)
            return None

    def _record_fail_open(self, error: Exception) -> None:
        cause = error.__cause__ if isinstance(error, InternalFault) else None
        log.warning(
            "auth_fail_open",
            error_type=type(error).__name__,
            cause_type=type(cause).__name__ if cause is not None else None,
        )
        if self._on_fail_open is None:
            return
        try:
            self._on_fail_open(error)
        except Exception:
            # A broken hook must not turn fail-open into fail-closed.
            log.exception("auth_fail_open_hook_error")
