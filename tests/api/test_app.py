"""
API Tests for application wiring: health checks, middleware, error bodies
"""
import pytest
from httpx import AsyncClient, ASGITransport

from app.core.config import Settings
from app.core.security import issue_token_pair
from app.main import create_app, validate_critical_config
from app.models import UserRole


class TestHealth:

    async def test_liveness(self, client: AsyncClient):
        response = await client.get("/api/health/live")

        assert response.status_code == 200
        assert response.json()["status"] == "alive"

    async def test_readiness(self, client: AsyncClient, storage):
        response = await client.get("/api/health/ready")

        assert response.status_code == 200
        assert response.json()["checks"]["storage"]["backend"] == storage.backend_name

    async def test_root(self, client: AsyncClient):
        response = await client.get("/")

        assert response.status_code == 200
        assert response.json()["health"] == "/api/health/live"


class TestMiddleware:

    async def test_request_id_generated(self, client: AsyncClient):
        response = await client.get("/api/health/live")

        assert response.headers["X-Request-ID"]
        assert response.headers["X-Response-Time"].endswith("ms")

    async def test_request_id_echoed(self, client: AsyncClient):
        response = await client.get("/api/health/live", headers={"X-Request-ID": "req-123"})

        assert response.headers["X-Request-ID"] == "req-123"

    async def test_security_headers(self, client: AsyncClient):
        response = await client.get("/api/health/live")

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"

    async def test_oversized_body_rejected(self, client: AsyncClient, admin, auth_headers):
        response = await client.post(
            "/api/clients",
            content=b"{" + b" " * (1024 * 1024 + 1) + b"}",
            headers={**auth_headers(admin), "Content-Type": "application/json"},
        )

        assert response.status_code == 413


class TestErrorBodies:

    async def test_not_found_body(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/clients/404", headers=auth_headers(admin))

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "error": {
                "code": "NOT_FOUND",
                "message": "Client not found",
                "details": {"resource_type": "Client", "resource_id": 404},
            },
        }

    async def test_non_integer_id(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/clients/abc", headers=auth_headers(admin))

        assert response.status_code == 400


class TestStartupChecks:

    def test_default_secret_fails_in_production(self):
        with pytest.raises(RuntimeError):
            validate_critical_config(Settings(ENVIRONMENT="production", JWT_SECRET_KEY="CHANGE_ME"))

    def test_default_secret_tolerated_in_development(self):
        validate_critical_config(Settings(ENVIRONMENT="development", JWT_SECRET_KEY="CHANGE_ME"))

    def test_database_backend_needs_url(self):
        with pytest.raises(RuntimeError):
            validate_critical_config(Settings(STORAGE_BACKEND="database", DATABASE_URL="", JWT_SECRET_KEY="secret"))

    async def test_storage_held_on_app_state(self, storage):
        app = create_app(storage=storage)

        assert app.state.storage is storage

    async def test_unexpected_error_body_is_generic(self, storage):
        app = create_app(config=Settings(DEBUG=True, STORAGE_BACKEND="memory"), storage=storage)

        @app.get("/explode")
        async def explode():
            raise RuntimeError("password=hunter2 at db.internal:5432")

        transport = ASGITransport(app=app, raise_app_exceptions=False)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            response = await ac.get("/explode")

        assert response.status_code == 500
        assert response.json()["error"] == {
            "code": "INTERNAL_ERROR",
            "message": "Internal server error",
            "details": {},
        }
        assert "hunter2" not in response.text

    async def test_tokens_follow_app_config(self, storage, make_user):
        config = Settings(JWT_SECRET_KEY="secret-for-this-app-only", STORAGE_BACKEND="memory")
        app = create_app(config=config, storage=storage)
        user = await make_user(UserRole.ADMIN)

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            foreign = await ac.get(
                "/api/user",
                headers={"Authorization": f"Bearer {issue_token_pair(user)['access_token']}"},
            )
            own = await ac.get(
                "/api/user",
                headers={"Authorization": f"Bearer {issue_token_pair(user, config=config)['access_token']}"},
            )

        assert foreign.status_code == 401
        assert own.status_code == 200
        assert own.json()["id"] == user["id"]
