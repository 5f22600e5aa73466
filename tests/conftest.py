"""
tests.conftest

Shared fixtures: token minting, in-memory identity providers, and an app wired
to those providers instead of the database.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from datetime import UTC, datetime, timedelta
from typing import Any

import httpx
import jwt
import pytest
import pytest_asyncio
from fastapi import FastAPI

from vetcare_auth.api.app import create_app
from vetcare_auth.auth.deps import get_identity_sources
from vetcare_auth.auth.errors import StoreLookupFault
from vetcare_auth.auth.models import IdentityRecord
from vetcare_auth.auth.providers import default_sources
from vetcare_auth.settings import Settings

SECRET = "test-secret-4f1c2a9e7b3d5c8a0e6f2b1d9c7a5e3f"


def make_token(
    *,
    secret: str = SECRET,
    algorithm: str = "HS256",
    ttl: timedelta | None = timedelta(minutes=30),
    now: datetime | None = None,
    **claims: Any,
) -> str:
    payload: dict[str, Any] = dict(claims)
    if ttl is not None:
        issued = now or datetime.now(tz=UTC)
        payload["exp"] = int((issued + ttl).timestamp())
    return jwt.encode(payload, secret, algorithm=algorithm)


def bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


class InMemoryIdentityProvider:
    def __init__(
        self,
        records: list[IdentityRecord] | None = None,
        *,
        name: str = "memory",
        fault: Exception | None = None,
    ) -> None:
        self.records = {r.id: r for r in records or []}
        self.name = name
        self.fault = fault
        self.calls: list[int] = []

    async def find_by_id(self, identity_id: int) -> IdentityRecord | None:
        self.calls.append(identity_id)
        if self.fault is not None:
            raise self.fault
        return self.records.get(identity_id)

    def fail_with_store_fault(self) -> None:
        self.fault = StoreLookupFault(self.name, "connection refused")


@pytest.fixture
def settings() -> Settings:
    return Settings(env="test", jwt_secret=SECRET, log_level="WARNING")


@pytest.fixture
def users() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider(
        [
            IdentityRecord(id=1, name="Admin", email="admin@vetcare.test", role="admin"),
            IdentityRecord(id=2, name="Lucia", email="lucia@vetcare.test", role=None),
            IdentityRecord(id=7, name="Marco", email="marco@vetcare.test", role="user"),
            IdentityRecord(id=42, name="Sofia", email="sofia@vetcare.test", role="user"),
        ],
        name="users",
    )


@pytest.fixture
def owners() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider(
        [IdentityRecord(id=5, name="Ana", email="a@x.com")],
        name="owners",
    )


@pytest.fixture
def fail_open_events() -> list[Exception]:
    return []


@pytest.fixture
def app(
    settings: Settings,
    users: InMemoryIdentityProvider,
    owners: InMemoryIdentityProvider,
    fail_open_events: list[Exception],
) -> FastAPI:
    app = create_app(settings=settings, fail_open_hook=fail_open_events.append)
    app.dependency_overrides[get_identity_sources] = lambda: default_sources(users, owners)
    return app


@pytest_asyncio.fixture
async def client(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
