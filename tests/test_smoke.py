"""
tests.test_smoke

Minimal smoke tests to validate the service can boot and serve core endpoints.

Responsibilities:
- Ensure the FastAPI app starts and the identity-store readiness check works in test mode.
- Authenticate end to end against the real SQLAlchemy identity stores.
"""

from __future__ import annotations

from pathlib import Path

import httpx
import pytest

from conftest import SECRET, bearer, make_token
from vetcare_auth.api.app import create_app
from vetcare_auth.db.models import OwnerAccount, UserAccount
from vetcare_auth.settings import Settings


@pytest.mark.asyncio
async def test_health_and_auth_endpoints(tmp_path: Path) -> None:
    settings = Settings(
        env="test",
        jwt_secret=SECRET,
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'smoke.db'}",
    )
    app = create_app(settings=settings)

    # httpx ASGITransport does not run lifespan events; enter the app lifespan explicitly.
    async with app.router.lifespan_context(app):
        async with app.state.sessionmaker() as session:
            session.add_all(
                [
                    UserAccount(id=1, name="Admin", email="admin@vetcare.test", role="admin"),
                    OwnerAccount(id=5, name="Ana", email="a@x.com"),
                ]
            )
            await session.commit()

        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            r = await client.get("/healthz")
            assert r.status_code == 200
            assert r.json()["status"] == "ok"

            r = await client.get("/readyz")
            assert r.status_code == 200
            assert r.json()["status"] == "ready"

            r = await client.get("/v1/admin/identity", headers=bearer(make_token(userId=1)))
            assert r.status_code == 200

            r = await client.get("/v1/auth/me", headers=bearer(make_token(userId=5)))
            assert r.status_code == 200
            assert r.json()["data"]["role"] == "propietario"

            r = await client.get("/v1/admin/identity", headers=bearer(make_token(userId=5)))
            assert r.status_code == 403
