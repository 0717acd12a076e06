"""
API Tests for user administration
"""
from httpx import AsyncClient


class TestListUsers:

    async def test_admin_lists_everyone_but_self(
        self, client: AsyncClient, admin, student, instructor, finance, auth_headers
    ):
        response = await client.get("/api/users", headers=auth_headers(admin))

        assert response.status_code == 200
        users = response.json()
        ids = {user["id"] for user in users}
        assert ids == {student["id"], instructor["id"], finance["id"]}
        assert all("password" not in user for user in users)

    async def test_role_filter(self, client: AsyncClient, admin, student, other_student, instructor, auth_headers):
        response = await client.get("/api/users", params={"role": "student"}, headers=auth_headers(admin))

        assert response.status_code == 200
        assert [user["id"] for user in response.json()] == [student["id"], other_student["id"]]

    async def test_invalid_role_filter(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/users", params={"role": "janitor"}, headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"][0]["field"] == "role"

    async def test_non_admin_forbidden(self, client: AsyncClient, instructor, auth_headers):
        response = await client.get("/api/users", headers=auth_headers(instructor))

        assert response.status_code == 403


class TestGetUser:

    async def test_user_reads_self(self, client: AsyncClient, student, auth_headers):
        response = await client.get(f"/api/users/{student['id']}", headers=auth_headers(student))

        assert response.status_code == 200
        assert response.json()["username"] == student["username"]

    async def test_user_cannot_read_other(self, client: AsyncClient, student, other_student, auth_headers):
        response = await client.get(f"/api/users/{other_student['id']}", headers=auth_headers(student))

        assert response.status_code == 403

    async def test_admin_reads_missing(self, client: AsyncClient, admin, auth_headers):
        response = await client.get("/api/users/999", headers=auth_headers(admin))

        assert response.status_code == 404


class TestUpdateUser:

    async def test_new_password_is_hashed(self, client: AsyncClient, admin, student, auth_headers, storage):
        response = await client.put(
            f"/api/users/{student['id']}",
            json={"password": "brand-new-pass"},
            headers=auth_headers(admin),
        )
        assert response.status_code == 200

        stored = await storage.users.get(student["id"])
        assert stored["password"] != "brand-new-pass"

        login = await client.post(
            "/api/login",
            json={"username": student["username"], "password": "brand-new-pass"},
        )
        assert login.status_code == 200

    async def test_change_role(self, client: AsyncClient, admin, student, auth_headers):
        response = await client.put(
            f"/api/users/{student['id']}",
            json={"role": "instructor"},
            headers=auth_headers(admin),
        )

        assert response.status_code == 200
        assert response.json()["role"] == "instructor"
        assert response.json()["name"] == student["name"]

    async def test_rename_to_taken_username(self, client: AsyncClient, admin, student, other_student, auth_headers):
        response = await client.put(
            f"/api/users/{student['id']}",
            json={"username": other_student["username"]},
            headers=auth_headers(admin),
        )

        assert response.status_code == 409

    async def test_student_cannot_update_self(self, client: AsyncClient, student, auth_headers):
        response = await client.put(
            f"/api/users/{student['id']}",
            json={"role": "admin"},
            headers=auth_headers(student),
        )

        assert response.status_code == 403


class TestDeleteUser:

    async def test_delete_user(self, client: AsyncClient, admin, student, auth_headers):
        response = await client.delete(f"/api/users/{student['id']}", headers=auth_headers(admin))

        assert response.status_code == 204
        assert response.content == b""

        again = await client.delete(f"/api/users/{student['id']}", headers=auth_headers(admin))
        assert again.status_code == 404

    async def test_admin_cannot_delete_self(self, client: AsyncClient, admin, auth_headers):
        response = await client.delete(f"/api/users/{admin['id']}", headers=auth_headers(admin))

        assert response.status_code == 400
        assert response.json()["error"]["details"]["errors"][0]["field"] == "id"

    async def test_referenced_user_kept(self, client: AsyncClient, admin, instructor, course, auth_headers):
        response = await client.delete(f"/api/users/{instructor['id']}", headers=auth_headers(admin))

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "STILL_REFERENCED"
