"""Pytest configuration and fixtures."""

import os

import pytest
import pytest_asyncio
from typing import AsyncGenerator, Dict
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.pool import StaticPool

# Set test environment
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"

from app.core.config import Settings
from app.core.security import get_password_hash
from app.crud import user_crud
from app.db.database import Database
from app.main import create_app


TEST_DATABASE_URL = "sqlite+aiosqlite://"


@pytest_asyncio.fixture
async def database() -> AsyncGenerator[Database, None]:
    """Fresh in-memory database per test."""
    db = Database(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database) -> AsyncGenerator[AsyncSession, None]:
    async with database.session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def users(db_session) -> Dict[str, int]:
    """Two users that own nothing yet."""
    alice = await user_crud.create_user(db_session, "alice", "alice@example.com", get_password_hash("secret1"))
    bob = await user_crud.create_user(db_session, "bob", "bob@example.com", get_password_hash("secret2"))
    await db_session.commit()
    return {"alice": alice.id, "bob": bob.id}


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    return Settings(
        APP_ENVIRONMENT="test",
        UPLOAD_DIR=tmp_path / "uploads",
        MAX_UPLOAD_SIZE=1024,
    )


@pytest_asyncio.fixture
async def client(database, test_settings) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client bound to an app that uses the test database."""
    app = create_app(test_settings, database=database)
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


async def register(client: AsyncClient, username: str, password: str = "password123") -> Dict[str, str]:
    """Register a user through the API and return its auth headers."""
    response = await client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": f"{username}@example.com", "password": password},
    )
    assert response.status_code == 201, response.text
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def alice_headers(client) -> Dict[str, str]:
    return await register(client, "alice")


@pytest_asyncio.fixture
async def bob_headers(client) -> Dict[str, str]:
    return await register(client, "bob")


@pytest.fixture
def register_user():
    """The `register` helper, for tests that build their own client."""
    return register
