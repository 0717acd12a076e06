"""
API Tests for registration, login and token handling
"""
import pytest
from httpx import AsyncClient

TEST_PASSWORD = "testpassword123"


@pytest.fixture
def register_data():
    return {
        "username": "rahul.sharma",
        "password": "testpassword123",
        "name": "Rahul Sharma",
        "email": "rahul@campusops.io",
    }


class TestRegister:

    async def test_register_student(self, client: AsyncClient, register_data):
        """Anonymous registration creates a student"""
        response = await client.post("/api/register", json=register_data)

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "rahul.sharma"
        assert data["role"] == "student"
        assert isinstance(data["id"], int)
        assert "password" not in data

    async def test_register_duplicate_username(self, client: AsyncClient, register_data):
        await client.post("/api/register", json=register_data)

        response = await client.post("/api/register", json=register_data)

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "USERNAME_TAKEN"

    async def test_anonymous_cannot_register_staff(self, client: AsyncClient, register_data):
        response = await client.post("/api/register", json={**register_data, "role": "instructor"})

        assert response.status_code == 403

    async def test_admin_registers_any_role(self, client: AsyncClient, register_data, admin, auth_headers):
        response = await client.post(
            "/api/register",
            json={**register_data, "role": "finance"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 201
        assert response.json()["role"] == "finance"

    async def test_invalid_payload(self, client: AsyncClient, register_data):
        response = await client.post(
            "/api/register",
            json={**register_data, "email": "not-an-email", "role": "janitor"},
        )

        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"]["code"] == "VALIDATION_FAILED"
        fields = {error["field"] for error in body["error"]["details"]["errors"]}
        assert fields == {"email", "role"}

    async def test_registered_password_is_hashed(self, client: AsyncClient, register_data, storage):
        await client.post("/api/register", json=register_data)

        stored = await storage.get_user_by_username("rahul.sharma")

        assert stored["password"] != register_data["password"]


class TestLogin:

    async def test_login_success(self, client: AsyncClient, student):
        response = await client.post(
            "/api/login",
            json={"username": student["username"], "password": TEST_PASSWORD},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["accessToken"]
        assert data["refreshToken"]
        assert data["tokenType"] == "bearer"
        assert data["user"]["id"] == student["id"]
        assert "password" not in data["user"]

    async def test_login_wrong_password(self, client: AsyncClient, student):
        response = await client.post(
            "/api/login",
            json={"username": student["username"], "password": "wrongpassword"},
        )

        assert response.status_code == 401
        assert response.json()["error"]["message"] == "Incorrect username or password"

    async def test_login_unknown_user(self, client: AsyncClient):
        response = await client.post("/api/login", json={"username": "ghost", "password": "whatever"})

        assert response.status_code == 401

    async def test_login_token_opens_session(self, client: AsyncClient, student):
        login = await client.post(
            "/api/login",
            json={"username": student["username"], "password": TEST_PASSWORD},
        )
        token = login.json()["accessToken"]

        response = await client.get("/api/user", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
        assert response.json()["username"] == student["username"]


class TestSession:

    async def test_current_user(self, client: AsyncClient, finance, auth_headers):
        response = await client.get("/api/user", headers=auth_headers(finance))

        assert response.status_code == 200
        assert response.json() == {
            "id": finance["id"],
            "username": finance["username"],
            "name": finance["name"],
            "email": finance["email"],
            "role": "finance",
        }

    async def test_missing_token(self, client: AsyncClient):
        response = await client.get("/api/user")

        assert response.status_code == 401
        assert response.json()["error"]["code"] == "UNAUTHORIZED"

    async def test_garbage_token(self, client: AsyncClient):
        response = await client.get("/api/user", headers={"Authorization": "Bearer nonsense"})

        assert response.status_code == 401

    async def test_token_of_deleted_user(self, client: AsyncClient, student, auth_headers, storage):
        headers = auth_headers(student)
        await storage.users.delete(student["id"])

        response = await client.get("/api/user", headers=headers)

        assert response.status_code == 401

    async def test_refresh(self, client: AsyncClient, student):
        login = await client.post(
            "/api/login",
            json={"username": student["username"], "password": TEST_PASSWORD},
        )

        response = await client.post("/api/refresh", json={"refreshToken": login.json()["refreshToken"]})

        assert response.status_code == 200
        assert response.json()["accessToken"]

    async def test_refresh_rejects_access_token(self, client: AsyncClient, student):
        login = await client.post(
            "/api/login",
            json={"username": student["username"], "password": TEST_PASSWORD},
        )

        response = await client.post("/api/refresh", json={"refreshToken": login.json()["accessToken"]})

        assert response.status_code == 401

    async def test_logout(self, client: AsyncClient, student, auth_headers):
        response = await client.post("/api/logout", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json() == {"message": "Logged out"}
