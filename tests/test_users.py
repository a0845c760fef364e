# ==============================================================================
# USER ENDPOINT TESTS
# ==============================================================================
# Registration and login
# ==============================================================================

import pytest
from httpx import AsyncClient

from app.core.security import decode_token
from app.core.settings import settings


class TestRegister:
    """Tests for /users/register endpoint."""

    @pytest.mark.asyncio
    async def test_register_success(self, client: AsyncClient, sample_user_data: dict):
        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 201
        data = response.json()
        assert set(data) == {"id", "full_name", "email"}
        assert data["email"] == sample_user_data["email"]
        assert data["full_name"] == sample_user_data["full_name"]

    @pytest.mark.asyncio
    async def test_register_gets_customer_role(self, client: AsyncClient, db, sample_user_data: dict):
        response = await client.post("/api/users/register", json=sample_user_data)

        role = await db.execute(
            "SELECT r.name FROM users u JOIN roles r ON u.role_id = r.id WHERE u.id = $1",
            [response.json()["id"]],
        )
        assert role.scalar() == "customer"

    @pytest.mark.asyncio
    async def test_register_duplicate_email(self, client: AsyncClient, sample_user_data: dict):
        await client.post("/api/users/register", json=sample_user_data)
        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 400
        assert response.json()["error"] == "User already exists"

    @pytest.mark.asyncio
    async def test_register_invalid_email(self, client: AsyncClient, sample_user_data: dict):
        sample_user_data["email"] = "not-an-email"
        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient, sample_user_data: dict):
        sample_user_data["password"] = "123"
        response = await client.post("/api/users/register", json=sample_user_data)

        assert response.status_code == 422


class TestLogin:
    """Tests for /users/login endpoint."""

    @pytest.mark.asyncio
    async def test_login_success(self, client: AsyncClient, sample_user_data: dict):
        registered = (await client.post("/api/users/register", json=sample_user_data)).json()

        response = await client.post(
            "/api/users/login",
            json={"email": sample_user_data["email"], "password": sample_user_data["password"]},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"] == {
            "id": registered["id"],
            "full_name": sample_user_data["full_name"],
            "email": sample_user_data["email"],
            "role": "customer",
        }
        claims = decode_token(data["token"])
        assert claims["id"] == registered["id"]
        assert claims["role"] == "customer"

    @pytest.mark.asyncio
    async def test_admin_login(self, client: AsyncClient):
        response = await client.post(
            "/api/users/login",
            json={"email": settings.ADMIN_EMAIL, "password": settings.ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        assert response.json()["user"]["role"] == "admin"

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, customer: dict):
        response = await client.post(
            "/api/users/login",
            json={"email": customer["email"], "password": "WrongPassword!"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post(
            "/api/users/login",
            json={"email": "noone@nowhere.com", "password": "whatever"},
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_disabled_account(self, client: AsyncClient, db, customer: dict):
        await db.execute("UPDATE users SET is_active = $1 WHERE id = $2", [False, customer["id"]])

        response = await client.post(
            "/api/users/login",
            json={"email": customer["email"], "password": customer["password"]},
        )

        assert response.status_code == 401
