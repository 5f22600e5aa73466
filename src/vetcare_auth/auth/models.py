"""
vetcare_auth.auth.models

Auth domain models.

Responsibilities:
- `TokenClaims`: the decoded bearer-token payload, before identity resolution.
- `IdentityRecord`: the read-only row shape identity stores hand back.
- `Principal`: the resolved caller identity attached to a request.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class TokenClaims:
    subject_id: int
    email: str | None = None
    role: str | None = None
    expires_at: datetime | None = None
    issued_at: datetime | None = None


@dataclass(frozen=True, slots=True)
class IdentityRecord:
    id: int
    name: str | None = None
    email: str | None = None
    # Only primary-store (users) records carry a role.
    role: str | None = None


@dataclass(frozen=True, slots=True)
class Principal:
    """
    Authenticated caller identity. Never partially populated: `id` and a
    non-empty `role` are enforced at construction.
    """

    id: int
    role: str
    email: str | None = None
    display_name: str | None = None
    source: str = ""

    def __post_init__(self) -> None:
        if isinstance(self.id, bool) or not isinstance(self.id, int):
            raise ValueError("Principal.id must be an integer")
        if not isinstance(self.role, str) or not self.role:
            raise ValueError("Principal.role must be a non-empty string")

    def public_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "role": self.role,
            "email": self.email,
            "display_name": self.display_name,
        }


# --- Module Notes -----------------------------------------------------------
# Downstream handlers read `id`, `role` and `email`; `source` is for logs only.
