"""
vetcare_auth.auth.jwt

Bearer token verification.

Responsibilities:
- Verify signature (PyJWT) and the time claims `exp`/`nbf` (against an injectable clock).
- Decode the payload into `TokenClaims` or raise a typed token error.

Note:
- Tokens are issued by the login flow elsewhere; this module never signs anything.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt import InvalidSignatureError, InvalidTokenError

from vetcare_auth.auth.errors import TokenExpired, TokenInvalidSignature, TokenMalformed
from vetcare_auth.auth.models import TokenClaims

# The login flow writes the subject under `userId`; standard `sub` is accepted too.
_SUBJECT_CLAIMS = ("userId", "sub")


@dataclass(frozen=True, slots=True)
class JwtConfig:
    secret: str
    alg: str = "HS256"
    leeway: timedelta = timedelta(0)
    require_exp: bool = False

    def __post_init__(self) -> None:
        if not self.secret:
            raise ValueError("JwtConfig.secret must not be empty")


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class TokenVerifier:
    def __init__(self, cfg: JwtConfig, *, clock: Callable[[], datetime] = _utcnow) -> None:
        self._cfg = cfg
        self._clock = clock

    def verify(self, raw_token: str) -> TokenClaims:
        payload = self._decode(raw_token)

        now = self._clock()
        leeway = self._cfg.leeway

        expires_at = _timestamp_claim(payload, "exp")
        if expires_at is not None and now >= expires_at + leeway:
            raise TokenExpired()

        not_before = _timestamp_claim(payload, "nbf")
        if not_before is not None and now + leeway < not_before:
            raise TokenMalformed("The token is not yet valid")

        return TokenClaims(
            subject_id=_subject(payload),
            email=_optional_str(payload.get("email")),
            role=_optional_str(payload.get("role")),
            expires_at=expires_at,
            issued_at=_timestamp_claim(payload, "iat"),
        )

    def _decode(self, raw_token: str) -> dict[str, Any]:
        options: dict[str, Any] = {
            # Time claims are checked against our own clock in `verify`; `iat` is informational.
            "verify_exp": False,
            "verify_nbf": False,
            "verify_iat": False,
            # No issuer/audience is configured, so those claims are not enforced.
            "verify_aud": False,
            "verify_iss": False,
            "verify_jti": False,
            # Subjects are integer ids; PyJWT would otherwise insist on strings.
            "verify_sub": False,
            "require": ["exp"] if self._cfg.require_exp else [],
        }
        try:
            payload = jwt.decode(
                raw_token,
                self._cfg.secret,
                algorithms=[self._cfg.alg],
                options=options,
            )
        except InvalidSignatureError as e:
            raise TokenInvalidSignature() from e
        except InvalidTokenError as e:
            # DecodeError, InvalidAlgorithmError, MissingRequiredClaimError, ...
            raise TokenMalformed() from e
        if not isinstance(payload, dict):
            raise TokenMalformed()
        return payload


def _subject(payload: dict[str, Any]) -> int:
    for claim in _SUBJECT_CLAIMS:
        value = payload.get(claim)
        if value is None:
            continue
        if isinstance(value, bool):
            break
        if isinstance(value, int):
            return value
        if isinstance(value, str) and value.isdigit():
            return int(value)
        break
    raise TokenMalformed("The token does not identify a subject")


def _timestamp_claim(payload: dict[str, Any], claim: str) -> datetime | None:
    value = payload.get(claim)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int | float):
        raise TokenMalformed()
    try:
        return datetime.fromtimestamp(value, tz=UTC)
    except (OverflowError, OSError, ValueError) as e:
        raise TokenMalformed() from e


def _optional_str(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


# --- Module Notes -----------------------------------------------------------
# `verify` is a pure function of (token, secret, clock()): the same token checked
# at the same instant always yields equal claims.
