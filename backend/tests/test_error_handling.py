"""
Portfolio API - Error Handling & Cross-Cutting Tests
=====================================================

What:  Error body format and status mapping, request id propagation, the
       health probe, and startup without a reachable database.
"""

from unittest.mock import AsyncMock, patch

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from conftest import count_rows
from portfolio_api.exceptions import DatabaseError, StorageUnavailableError
from portfolio_api.models.profile import Profile
from portfolio_api.models.project import Project
from portfolio_api.services.collection_service import project_service


def _connection_lost():
    return OperationalError("COMMIT", {}, ConnectionResetError("connection reset"))


class TestErrorResponses:

    @pytest.mark.asyncio
    async def test_storage_unavailable_returns_503(self, client):
        with patch.object(
            project_service, "list_records", AsyncMock(side_effect=StorageUnavailableError())
        ):
            response = await client.get("/projects")

        assert response.status_code == 503
        assert response.headers["Retry-After"] == "30"
        body = response.json()
        assert body["error"] == "storage_unavailable"
        assert body["request_id"]

    @pytest.mark.asyncio
    async def test_database_error_returns_generic_500(self, client):
        failure = DatabaseError(context={"statement": "INSERT INTO projects ..."})
        with patch.object(project_service, "create_record", AsyncMock(side_effect=failure)):
            response = await client.post("/projects", json={"title": "x"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "server_error"
        assert "INSERT" not in response.text

    @pytest.mark.asyncio
    async def test_unexpected_error_returns_500(self, database):
        from portfolio_api.main import app

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        with patch.object(project_service, "list_records", AsyncMock(side_effect=RuntimeError("boom"))):
            async with AsyncClient(transport=transport, base_url="http://test") as c:
                response = await c.get("/projects", headers={"X-Request-ID": "trace-500"})

        assert response.status_code == 500
        body = response.json()
        assert body["error"] == "internal_server_error"
        assert body["request_id"] == "trace-500"
        assert response.headers["X-Request-ID"] == "trace-500"
        assert "boom" not in response.text


class TestFailedCommit:
    """A commit that fails must produce an error response, never a 2xx."""

    @pytest.mark.asyncio
    async def test_create_commit_failure_returns_503(self, client):
        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_connection_lost())):
            response = await client.post("/projects", json={"title": "lost"})

        assert response.status_code == 503
        assert response.json()["error"] == "storage_unavailable"
        assert await count_rows(Project) == 0

    @pytest.mark.asyncio
    async def test_update_commit_failure_keeps_stored_values(self, client):
        created = (await client.post("/projects", json={"title": "kept"})).json()["project"]

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_connection_lost())):
            response = await client.put(f"/projects/{created['id']}", json={"title": "lost"})

        assert response.status_code == 503
        assert (await client.get(f"/projects/{created['id']}")).json()["title"] == "kept"

    @pytest.mark.asyncio
    async def test_delete_commit_failure_keeps_record(self, client):
        created = (await client.post("/projects", json={"title": "kept"})).json()["project"]

        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_connection_lost())):
            response = await client.delete(f"/projects/{created['id']}")

        assert response.status_code == 503
        assert await count_rows(Project) == 1

    @pytest.mark.asyncio
    async def test_profile_commit_failure_returns_503(self, client):
        with patch.object(AsyncSession, "commit", AsyncMock(side_effect=_connection_lost())):
            response = await client.put("/profile", json={"fullName": "Ada"})

        assert response.status_code == 503
        assert await count_rows(Profile) == 0


class TestRequestId:

    @pytest.mark.asyncio
    async def test_request_id_is_generated(self, client):
        response = await client.get("/")
        assert response.headers.get("X-Request-ID")

    @pytest.mark.asyncio
    async def test_request_id_is_echoed(self, client):
        response = await client.get("/projects", headers={"X-Request-ID": "trace-123"})
        assert response.headers["X-Request-ID"] == "trace-123"

    @pytest.mark.asyncio
    async def test_error_body_carries_request_id(self, client):
        response = await client.get(
            "/projects/00000000-0000-0000-0000-000000000000",
            headers={"X-Request-ID": "trace-404"},
        )
        assert response.status_code == 404
        assert response.json()["request_id"] == "trace-404"


class TestHealth:

    @pytest.mark.asyncio
    async def test_root_banner(self, client):
        response = await client.get("/")
        assert response.json() == {"status": "ok", "service": "portfolio-api"}

    @pytest.mark.asyncio
    async def test_health_reports_database(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["database"] == "connected"
        assert body["uptime_seconds"] >= 0

    @pytest.mark.asyncio
    async def test_health_when_database_down(self, client):
        with patch("portfolio_api.routes.health.ping", AsyncMock(return_value=False)):
            response = await client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "unhealthy"


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_survives_unreachable_database(self):
        from portfolio_api.main import app, lifespan

        down = OperationalError("CREATE TABLE", {}, ConnectionRefusedError("refused"))
        with patch("portfolio_api.main.create_tables", AsyncMock(side_effect=down)), \
                patch("portfolio_api.main.dispose_engine", AsyncMock()) as dispose:
            async with lifespan(app):
                pass

        dispose.assert_awaited_once()
