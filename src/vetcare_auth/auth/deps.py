"""
vetcare_auth.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Compose verifier + resolver + authenticator for the current request.
- Attach the resolved `Principal` to `request.state.principal`.
- Enforce RBAC and resource ownership via reusable dependency factories.

Usage:
    @router.get(
        "/v1/users/{user_id}/identity",
        dependencies=[Depends(get_principal), Depends(require_ownership("user_id"))],
    )

Guards read the principal attached by `get_principal`/`get_optional_principal`,
so the authentication dependency must be listed before them.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import timedelta

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from vetcare_auth.api.deps import db_session, settings_dep
from vetcare_auth.auth.errors import AuthenticationRequired, OwnershipMismatch, RoleNotAllowed
from vetcare_auth.auth.jwt import JwtConfig, TokenVerifier
from vetcare_auth.auth.models import Principal
from vetcare_auth.auth.providers import IdentitySource, default_sources
from vetcare_auth.auth.resolver import IdentityResolver
from vetcare_auth.auth.roles import ROLE_ADMIN
from vetcare_auth.auth.service import Authenticator
from vetcare_auth.db.repositories.identities import OwnerIdentityRepo, UserIdentityRepo
from vetcare_auth.observability.middleware import bind_principal
from vetcare_auth.settings import Settings

PRINCIPAL_STATE_KEY = "principal"

# auto_error=False: a missing or non-Bearer header arrives as None ("no token").
_bearer = HTTPBearer(auto_error=False)


def _bearer_token(creds: HTTPAuthorizationCredentials | None) -> str | None:
    if creds is None:
        return None
    return creds.credentials.strip() or None


def _jwt_cfg(settings: Settings) -> JwtConfig:
    return JwtConfig(
        secret=settings.jwt_secret,
        alg=settings.jwt_alg,
        leeway=timedelta(seconds=settings.jwt_leeway_seconds),
        require_exp=settings.jwt_require_exp,
    )


def get_identity_sources(
    session: AsyncSession = Depends(db_session),
) -> Sequence[IdentitySource]:
    # Both repos share the request-scoped session; lookups run one after the other.
    return default_sources(UserIdentityRepo(session), OwnerIdentityRepo(session))


def get_authenticator(
    request: Request,
    sources: Sequence[IdentitySource] = Depends(get_identity_sources),
    settings: Settings = Depends(settings_dep),
) -> Authenticator:
    return Authenticator(
        verifier=TokenVerifier(_jwt_cfg(settings)),
        resolver=IdentityResolver(sources),
        on_fail_open=getattr(request.app.state, "auth_fail_open_hook", None),
    )


async def get_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Principal:
    principal = await authenticator.authenticate(_bearer_token(creds))
    setattr(request.state, PRINCIPAL_STATE_KEY, principal)
    bind_principal(principal)
    return principal


async def get_optional_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    authenticator: Authenticator = Depends(get_authenticator),
) -> Principal | None:
    principal = await authenticator.authenticate_optional(_bearer_token(creds))
    setattr(request.state, PRINCIPAL_STATE_KEY, principal)
    if principal is not None:
        bind_principal(principal)
    return principal


def attached_principal(request: Request) -> Principal | None:
    return getattr(request.state, PRINCIPAL_STATE_KEY, None)


def _require_attached(request: Request) -> Principal:
    principal = attached_principal(request)
    if principal is None:
        raise AuthenticationRequired()
    return principal


def authorize_roles(allowed: Iterable[str] | str = ()):
    """
    Admit the attached principal if its role is in `allowed`.
    An empty `allowed` admits any authenticated principal.
    """

    allowed_set = frozenset((allowed,) if isinstance(allowed, str) else allowed)

    def _dep(request: Request) -> Principal:
        principal = _require_attached(request)
        if allowed_set and principal.role not in allowed_set:
            raise RoleNotAllowed()
        return principal

    return _dep


require_admin = authorize_roles({ROLE_ADMIN})


def require_ownership(param: str = "id"):
    """
    Admit the attached principal only when the path parameter `param` equals
    its id. This guard does not authenticate.
    """

    def _dep(request: Request) -> Principal:
        principal = _require_attached(request)
        try:
            resource_id = int(request.path_params[param])
        except (KeyError, TypeError, ValueError) as e:
            raise OwnershipMismatch() from e
        if resource_id != principal.id:
            raise OwnershipMismatch()
        return principal

    return _dep


# --- Module Notes -----------------------------------------------------------
# Tests swap the identity stores with `app.dependency_overrides[get_identity_sources]`.
