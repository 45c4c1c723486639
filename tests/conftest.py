# tests/conftest.py

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from task_tracker.core.security import create_access_token
from task_tracker.database import Base, get_db
from task_tracker.main import app
from task_tracker.models.user import Role, User
from task_tracker.repositories.user_repository import UserRepository


@pytest.fixture()
async def engine():
    """
    Fresh in-memory SQLite database per test.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture()
def session_factory(engine) -> async_sessionmaker:
    return async_sessionmaker(bind=engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture()
async def user_ids(session_factory) -> dict[str, int]:
    """
    admin, user1 and user2 committed through a throwaway session.

    Password hashes are placeholders; tests that log in register their own
    accounts through the API.
    """
    async with session_factory() as session:
        users = {
            "admin": User(username="admin", email="admin@example.com", hashed_password="x", role=Role.ADMIN),
            "user1": User(username="user1", email="user@example.com", hashed_password="x", role=Role.USER),
            "user2": User(username="user2", email="user2@example.com", hashed_password="x", role=Role.USER),
        }
        session.add_all(users.values())
        await session.commit()
        return {name: user.id for name, user in users.items()}


@pytest.fixture()
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture()
async def actors(db, user_ids) -> dict[str, User]:
    """The seeded users loaded into the `db` session."""
    repo = UserRepository(db)
    return {name: await repo.get_by_id(user_id) for name, user_id in user_ids.items()}


@pytest.fixture()
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture()
def auth_headers(user_ids):
    """Bearer headers for the seeded users, keyed by username."""
    emails = {
        "admin": "admin@example.com",
        "user1": "user@example.com",
        "user2": "user2@example.com",
    }
    return {
        name: {"Authorization": f"Bearer {create_access_token({'sub': email})}"}
        for name, email in emails.items()
    }
