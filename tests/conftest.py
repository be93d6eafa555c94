"""
Shared pytest fixtures.

Every test gets its own SQLite file, a Database bound to it and, for HTTP
tests, an app instance wired to that Database through ``app.state.db``.
"""
import os

# Override settings before any microblog import reads them
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["JWT_SECRET_KEY"] = "test-secret-not-for-production"
os.environ["CREATE_TABLES_ON_STARTUP"] = "true"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from microblog.db.session import Database
from microblog.main import create_app
from microblog.models.user import User


@pytest_asyncio.fixture
async def database(tmp_path):
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await db.create_all()
    yield db
    await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session_maker() as session:
        yield session


@pytest_asyncio.fixture
async def make_user(db_session):
    """Insert a committed user row directly (no password hashing)."""

    async def _make_user(username: str = "alice", email: str | None = None, bio: str = "") -> User:
        user = User(
            username=username,
            email=email or f"{username}@example.com",
            password_hash="not-a-real-hash",
            bio=bio,
        )
        db_session.add(user)
        await db_session.commit()
        return user

    return _make_user


@pytest_asyncio.fixture
async def client(database):
    app = create_app()
    app.state.db = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
def register(client):
    """Register an account over HTTP; returns the JSON body plus ready-made auth headers."""

    async def _register(username: str = "alice", email: str | None = None, password: str = "pw123456", bio=None):
        body = {"username": username, "email": email or f"{username}@example.com", "password": password}
        if bio is not None:
            body["bio"] = bio
        response = await client.post("/api/auth/register", json=body)
        assert response.status_code == 201, response.text
        data = response.json()
        data["headers"] = {"Authorization": f"Bearer {data['token']}"}
        return data

    return _register
