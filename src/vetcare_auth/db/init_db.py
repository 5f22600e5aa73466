"""
vetcare_auth.db.init_db

DB initialization helpers (dev/test convenience).

Responsibilities:
- Create the identity tables for local development and tests.
"""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from vetcare_auth.db.base import Base


async def init_db(engine: AsyncEngine) -> None:
    """
    Dev/test bootstrap: create tables if they don't exist.
    In production the tables belong to the account services and already exist.
    """

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
