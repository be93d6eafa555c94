"""Health probes, error envelope and application lifecycle."""
import pytest
from httpx import ASGITransport, AsyncClient

from microblog.core.config import Settings
from microblog.main import create_app


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


@pytest.mark.asyncio
async def test_ready_checks_database(client):
    response = await client.get("/api/ready")
    assert response.status_code == 200
    assert response.json() == {"status": "ok", "database": "connected"}


@pytest.mark.asyncio
async def test_unknown_route_uses_error_envelope(client):
    response = await client.get("/api/nope")
    assert response.status_code == 404
    assert "error" in response.json()


@pytest.mark.asyncio
async def test_lifespan_creates_and_disposes_database(tmp_path):
    app_settings = Settings(DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'life.db'}", LOG_LEVEL="WARNING")
    app = create_app(app_settings)

    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.post(
                "/api/auth/register",
                json={"username": "alice", "email": "alice@example.com", "password": "pw123456"},
            )
            assert response.status_code == 201
    assert (tmp_path / "life.db").exists()


@pytest.mark.asyncio
async def test_storage_failure_is_internal_error(client, monkeypatch):
    from sqlalchemy.exc import OperationalError

    from microblog.services import post_service

    async def broken_feed(db):
        raise OperationalError("SELECT", {}, Exception("disk I/O error"))

    monkeypatch.setattr(post_service, "get_feed", broken_feed)
    response = await client.get("/api/posts/feed")
    assert response.status_code == 500
    assert response.json() == {"error": "Database error"}


def test_internal_error_maps_to_500():
    from microblog.core.exceptions import InternalError

    assert InternalError().status_code == 500
