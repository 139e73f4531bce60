import os

os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from cafedocs.core.db import get_db, init_db
from cafedocs.domains.identity.services import IdentityService
from cafedocs.main import app as fastapi_app
from tests.helpers import ADMIN_EMAIL, ADMIN_PASSWORD, create_employee


@pytest.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'cafedocs.db'}", poolclass=NullPool)
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def app(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    fastapi_app.dependency_overrides[get_db] = override_get_db

    async with session_factory() as session:
        await IdentityService(session).ensure_admin()

    yield fastapi_app

    fastapi_app.dependency_overrides.clear()


@pytest.fixture
def transport(app):
    return httpx.ASGITransport(app=app)


@pytest.fixture
async def client(transport):
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
async def admin(client):
    response = await client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert response.status_code == 200
    return response.json()["user"]


@pytest.fixture
async def employee(client):
    return await create_employee(client)

