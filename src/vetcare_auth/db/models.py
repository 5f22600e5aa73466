"""
vetcare_auth.db.models

ORM mapping of the identity tables consulted during authentication.

Responsibilities:
- `UserAccount`: registered platform users (primary store, has a role column).
- `OwnerAccount`: pet-owner accounts (secondary store, no role column).

Only the columns the resolver reads are mapped; both tables are owned and
written by other services.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vetcare_auth.db.base import Base


class UserAccount(Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
    role: Mapped[str | None] = mapped_column(String(32), nullable=True)


class OwnerAccount(Base):
    __tablename__ = "owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True, index=True)
