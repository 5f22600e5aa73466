"""
vetcare_auth.auth.providers

Identity provider contract and the tier policy attached to each provider.

Responsibilities:
- Define the single read operation the resolver needs from an identity store.
- Describe how a record found in a given tier becomes a `Principal`
  (default role, whether token claims take precedence over the record).
- Build the standard users-then-owners source list.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from vetcare_auth.auth.models import IdentityRecord, Principal, TokenClaims
from vetcare_auth.auth.roles import PRIMARY_DEFAULT_ROLE, SECONDARY_DEFAULT_ROLE


class IdentityProvider(Protocol):
    async def find_by_id(self, identity_id: int) -> IdentityRecord | None:
        """
        Single-key exact-match read. Returns None on a miss and raises
        `StoreLookupFault` when the store cannot answer.
        """
        ...


@dataclass(frozen=True, slots=True)
class IdentitySource:
    name: str
    provider: IdentityProvider
    default_role: str
    # False: the stored record wins over token claims (users).
    # True: token claims win over the record (owners, which store no role).
    claims_first: bool = False

    def to_principal(self, record: IdentityRecord, claims: TokenClaims) -> Principal:
        if self.claims_first:
            role = claims.role or record.role or self.default_role
            email = claims.email or record.email
        else:
            role = record.role or claims.role or self.default_role
            email = record.email or claims.email
        return Principal(
            id=claims.subject_id,
            role=role,
            email=email,
            display_name=record.name,
            source=self.name,
        )


def default_sources(
    users: IdentityProvider, owners: IdentityProvider
) -> Sequence[IdentitySource]:
    return (
        IdentitySource(name="users", provider=users, default_role=PRIMARY_DEFAULT_ROLE),
        IdentitySource(
            name="owners",
            provider=owners,
            default_role=SECONDARY_DEFAULT_ROLE,
            claims_first=True,
        ),
    )


# --- Module Notes -----------------------------------------------------------
# A third identity population is supported by appending another IdentitySource
# to the list; the resolver itself has no per-tier branches.
