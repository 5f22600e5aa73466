"""
tests.test_repositories

SQLAlchemy identity stores against a throwaway SQLite database.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from pathlib import Path

import pytest
import pytest_asyncio
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from vetcare_auth.auth.errors import StoreLookupFault
from vetcare_auth.auth.models import IdentityRecord, TokenClaims
from vetcare_auth.auth.providers import default_sources
from vetcare_auth.auth.resolver import IdentityResolver
from vetcare_auth.db.init_db import init_db
from vetcare_auth.db.models import OwnerAccount, UserAccount
from vetcare_auth.db.repositories.identities import OwnerIdentityRepo, UserIdentityRepo
from vetcare_auth.db.session import create_engine, create_sessionmaker
from vetcare_auth.settings import Settings


@pytest_asyncio.fixture
async def session(tmp_path: Path) -> AsyncIterator[AsyncSession]:
    settings = Settings(env="test", database_url=f"sqlite+aiosqlite:///{tmp_path / 'ids.db'}")
    engine = create_engine(settings)
    await init_db(engine)
    factory = create_sessionmaker(engine)
    async with factory() as s:
        s.add_all(
            [
                UserAccount(id=1, name="Admin", email="admin@vetcare.test", role="admin"),
                UserAccount(id=2, name="Lucia", email="lucia@vetcare.test", role=None),
                OwnerAccount(id=5, name="Ana", email="a@x.com"),
            ]
        )
        await s.commit()
    try:
        async with factory() as s:
            yield s
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_user_repo_reads_role(session: AsyncSession) -> None:
    repo = UserIdentityRepo(session)

    assert await repo.find_by_id(1) == IdentityRecord(
        id=1, name="Admin", email="admin@vetcare.test", role="admin"
    )
    assert (await repo.find_by_id(2)).role is None
    assert await repo.find_by_id(5) is None


@pytest.mark.asyncio
async def test_owner_repo_has_no_role(session: AsyncSession) -> None:
    repo = OwnerIdentityRepo(session)

    assert await repo.find_by_id(5) == IdentityRecord(id=5, name="Ana", email="a@x.com")
    assert await repo.find_by_id(1) is None


@pytest.mark.asyncio
async def test_missing_table_is_store_fault(session: AsyncSession) -> None:
    await session.execute(text("DROP TABLE owners"))
    await session.commit()

    with pytest.raises(StoreLookupFault) as exc_info:
        await OwnerIdentityRepo(session).find_by_id(5)

    assert exc_info.value.source == "owners"


@pytest.mark.asyncio
async def test_resolver_survives_users_table_fault(session: AsyncSession) -> None:
    await session.execute(text("DROP TABLE users"))
    await session.commit()
    resolver = IdentityResolver(
        default_sources(UserIdentityRepo(session), OwnerIdentityRepo(session))
    )

    principal = await resolver.resolve(TokenClaims(subject_id=5))

    assert principal.role == "propietario"
    assert principal.display_name == "Ana"
