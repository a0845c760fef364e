# ==============================================================================
# CONFTEST - Pytest Fixtures and Configuration
# ==============================================================================
# Shared fixtures for all tests
# ==============================================================================

from __future__ import annotations

import os
import tempfile
from typing import AsyncGenerator, Dict
from uuid import uuid4

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# Set test environment before importing app
TEST_DIR = tempfile.mkdtemp(prefix="surgical-hub-tests-")
os.environ.pop("DATABASE_URL", None)
os.environ["ENVIRONMENT"] = "development"
os.environ["DEBUG"] = "false"
os.environ["SQLITE_PATH"] = os.path.join(TEST_DIR, "app.db")
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only-32chars!"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["LOG_LEVEL"] = "WARNING"

from app.core.security import create_access_token  # noqa: E402
from app.core.settings import settings  # noqa: E402
from app.database.adapters.sqlite_adapter import SQLiteAdapter  # noqa: E402
from app.database.setup import setup_database  # noqa: E402


# ==============================================================================
# DATABASE FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def adapter(tmp_path) -> AsyncGenerator[SQLiteAdapter, None]:
    """Connected SQLite adapter on an empty database file."""
    db = SQLiteAdapter(path=str(tmp_path / "engine.db"))
    await db.connect()
    yield db
    await db.disconnect()


@pytest_asyncio.fixture
async def db(adapter: SQLiteAdapter) -> SQLiteAdapter:
    """Adapter with schema created and reference data seeded."""
    assert await setup_database(adapter, settings)
    return adapter


# ==============================================================================
# HTTP CLIENT FIXTURES
# ==============================================================================

@pytest_asyncio.fixture
async def client(db: SQLiteAdapter) -> AsyncGenerator[AsyncClient, None]:
    """Create async HTTP client for API testing."""
    # Import app after environment is set
    from app.main import app

    app.state.db = db
    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        timeout=30.0,
    ) as async_client:
        yield async_client
    app.state.db = None


@pytest_asyncio.fixture
async def admin_headers(db: SQLiteAdapter) -> Dict[str, str]:
    """Bearer header for the seeded administrator."""
    result = await db.execute(
        "SELECT u.id, r.name AS role FROM users u JOIN roles r ON u.role_id = r.id "
        "WHERE u.email = $1",
        [settings.ADMIN_EMAIL],
    )
    admin = result.first()
    token = create_access_token(user_id=admin["id"], role=admin["role"])
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def customer(client: AsyncClient, sample_user_data: dict) -> dict:
    """
    Registered and logged-in customer.

    Returns:
        Dict with ``id``, ``token``, ``headers`` and the registration data
    """
    response = await client.post("/api/users/register", json=sample_user_data)
    assert response.status_code == 201, f"Failed to register: {response.text}"

    response = await client.post(
        "/api/users/login",
        json={"email": sample_user_data["email"], "password": sample_user_data["password"]},
    )
    assert response.status_code == 200, f"Failed to login: {response.text}"
    token = response.json()["token"]

    return {
        "id": response.json()["user"]["id"],
        "token": token,
        "headers": {"Authorization": f"Bearer {token}"},
        **sample_user_data,
    }


# ==============================================================================
# HELPER FIXTURES
# ==============================================================================

@pytest.fixture
def sample_user_data() -> dict:
    """Generate sample user registration data."""
    return {
        "full_name": "Dana Reyes",
        "email": f"buyer_{uuid4().hex[:8]}@hospital.org",
        "password": "SecurePass123!",
        "phone": "+1 555 010 2000",
    }


@pytest.fixture
def sample_product_data() -> dict:
    return {
        "name": "Needle Holder",
        "description": "Mayo-Hegar needle holder, 6 inch.",
        "price": "32.50",
        "stock": 40,
    }
