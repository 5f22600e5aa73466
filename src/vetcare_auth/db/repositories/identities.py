"""
vetcare_auth.db.repositories.identities

Identity providers backed by the `users` and `owners` tables.

Responsibilities:
- Single-key reads returning `IdentityRecord` (or None on a miss).
- Translate driver/ORM failures into `StoreLookupFault` so the resolver can
  decide whether to fall through.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import Row, Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from vetcare_auth.auth.errors import StoreLookupFault
from vetcare_auth.auth.models import IdentityRecord
from vetcare_auth.db.models import OwnerAccount, UserAccount


class _IdentityRepo:
    source = ""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch_one(self, stmt: Select[Any]) -> Row[Any] | None:
        try:
            return (await self._session.execute(stmt)).one_or_none()
        except SQLAlchemyError as e:
            # The next source shares this session; leave it usable.
            await self._session.rollback()
            raise StoreLookupFault(self.source, type(e).__name__) from e


class UserIdentityRepo(_IdentityRepo):
    source = "users"

    async def find_by_id(self, identity_id: int) -> IdentityRecord | None:
        row = await self._fetch_one(
            select(UserAccount.id, UserAccount.name, UserAccount.email, UserAccount.role).where(
                UserAccount.id == identity_id
            )
        )
        if row is None:
            return None
        return IdentityRecord(id=row.id, name=row.name, email=row.email, role=row.role)


class OwnerIdentityRepo(_IdentityRepo):
    source = "owners"

    async def find_by_id(self, identity_id: int) -> IdentityRecord | None:
        row = await self._fetch_one(
            select(OwnerAccount.id, OwnerAccount.name, OwnerAccount.email).where(
                OwnerAccount.id == identity_id
            )
        )
        if row is None:
            return None
        # Owners carry no role; the tier policy supplies one.
        return IdentityRecord(id=row.id, name=row.name, email=row.email)
