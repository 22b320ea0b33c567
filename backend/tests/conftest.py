"""
Boutique Backend — Test Configuration (conftest.py)
====================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Each test gets its own SQLite database file (aiosqlite driver) and
       image directory under pytest's tmp_path, and an application built by
       create_app() with matching Settings.

Fixture Hierarchy:
    test_settings ─▶ app ─▶ db_session / test_client
                      └──▶ auth_service / catalog_service (from app.state)
"""

import os
import tempfile

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup
# ══════════════════════════════════════════════════════════════════════════

# Must run before boutique is imported: boutique.main builds a module-level
# app from these values
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///" + os.path.join(
    tempfile.mkdtemp(prefix="boutique_test_"), "default.db"
)
os.environ["JWT_SECRET"] = "test-secret-key-not-for-production"
os.environ["IMAGE_DIR"] = tempfile.mkdtemp(prefix="boutique_images_")
os.environ["LOG_LEVEL"] = "WARNING"

from boutique.config import Settings  # noqa: E402
from boutique.database import Base  # noqa: E402
from boutique.main import create_app  # noqa: E402
from boutique.models.user import Role  # noqa: E402
from boutique.schemas.auth import Identity  # noqa: E402

TEST_SECRET = "test-secret-key-not-for-production"


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures (created fresh for each test)
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a throwaway database and image directory."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        jwt_secret=TEST_SECRET,
        image_dir=str(tmp_path / "images"),
        max_image_size=1024 * 1024,
        log_level="WARNING",
    )


@pytest_asyncio.fixture
async def app(test_settings):
    """
    A fully wired application with the schema created.

    The lifespan is not run by ASGITransport, so tables are created here.
    """
    application = create_app(test_settings)
    async with application.state.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def db_session(app):
    """
    A session on the test database, committed after the test body.

    Usage:
        async def test_register(db_session, auth_service):
            await auth_service.register(db_session, RegisterRequest(...))
    """
    async with app.state.session_factory() as session:
        yield session


@pytest.fixture
def auth_service(app):
    return app.state.auth_service


@pytest.fixture
def catalog_service(app):
    return app.state.catalog_service


@pytest.fixture
def token_issuer(app):
    return app.state.token_issuer


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    Usage:
        async def test_health(test_client):
            response = await test_client.get("/health")
            assert response.status_code == 200
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def admin_headers(token_issuer):
    """Authorization header for an admin that exists only in the token."""
    token = token_issuer.mint(Identity(id=1, email="admin@boutique.test", role=Role.ADMIN))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def client_headers(token_issuer):
    token = token_issuer.mint(Identity(id=2, email="client@boutique.test", role=Role.CLIENT))
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def sample_image_bytes():
    """
    Minimal JPEG bytes: SOI marker + JFIF header + EOI marker.

    Not a real photograph, but enough for an upload.
    """
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def product_payload():
    return {
        "name": "Linen Shirt",
        "description": "Relaxed fit summer shirt",
        "price": 49.9,
        "fabric": "linen",
        "color": "sand",
        "image": "1718031234567.jpg",
    }
