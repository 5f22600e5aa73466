"""
vetcare_auth.api.routers.identity

Identity endpoints showing how resource routers compose the auth dependencies.

Responsibilities:
- `/v1/auth/me`: mandatory authentication.
- `/v1/auth/session`: optional authentication (anonymous callers allowed).
- `/v1/users/{user_id}/identity`: authentication + ownership guard.
- `/v1/admin/identity`: authentication + admin role guard.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from vetcare_auth.auth.deps import (
    get_optional_principal,
    get_principal,
    require_admin,
    require_ownership,
)
from vetcare_auth.auth.models import Principal

router = APIRouter(prefix="/v1", tags=["identity"])


@router.get("/auth/me")
async def me(principal: Principal = Depends(get_principal)) -> dict[str, Any]:
    return {"success": True, "data": principal.public_dict()}


@router.get("/auth/session")
async def session(principal: Principal | None = Depends(get_optional_principal)) -> dict[str, Any]:
    return {
        "success": True,
        "authenticated": principal is not None,
        "data": principal.public_dict() if principal is not None else None,
    }


@router.get(
    "/users/{user_id}/identity",
    dependencies=[Depends(get_principal), Depends(require_ownership("user_id"))],
)
async def own_identity(
    user_id: int, principal: Principal = Depends(get_principal)
) -> dict[str, Any]:
    return {"success": True, "data": principal.public_dict()}


@router.get(
    "/admin/identity",
    dependencies=[Depends(get_principal), Depends(require_admin)],
)
async def admin_identity(principal: Principal = Depends(get_principal)) -> dict[str, Any]:
    return {"success": True, "data": principal.public_dict()}
