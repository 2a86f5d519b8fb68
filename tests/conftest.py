"""
Inkpost Backend — Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   Points the settings at a throwaway SQLite file and upload directory
       BEFORE any inkpost module is imported, so the module-level engine and
       FileService singleton are built against them.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock AsyncSession for service unit tests
    ├── temp_storage: Temporary directory for file operations
    ├── sample_png_bytes: Tiny PNG payload for upload tests
    ├── db_tables: Creates all tables, drops them afterwards
    ├── test_client: HTTPX AsyncClient wired to the app (needs db_tables)
    └── register_user / login_user / create_post: request helpers
"""

import base64
import os
import tempfile
from unittest.mock import AsyncMock, MagicMock

# ══════════════════════════════════════════════════════════════════════════
# Environment Setup (must run before importing inkpost)
# ══════════════════════════════════════════════════════════════════════════

_TEST_ROOT = tempfile.mkdtemp(prefix="inkpost_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT}/test.db"
os.environ["UPLOAD_DIR"] = os.path.join(_TEST_ROOT, "uploads")
os.environ["JWT_SECRET_KEY"] = "test-secret-not-real"
os.environ["ACCESS_TOKEN_EXPIRE_MINUTES"] = "60"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from inkpost.database import create_tables, drop_tables  # noqa: E402

# 1x1 transparent PNG
PNG_BYTES = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNkYPhfDwAChwGA60e6kgAAAABJRU5ErkJggg=="
)


# ══════════════════════════════════════════════════════════════════════════
# Unit-test Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = post
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.get = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def temp_storage(tmp_path):
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_png_bytes():
    return PNG_BYTES


# ══════════════════════════════════════════════════════════════════════════
# API Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest_asyncio.fixture
async def db_tables():
    await create_tables()
    yield
    await drop_tables()


@pytest_asyncio.fixture
async def test_client(db_tables):
    """
    HTTPX AsyncClient routed straight into the ASGI app.

    The client keeps a cookie jar, so a successful login makes every later
    request from the same client carry the `token` cookie.
    """
    from inkpost.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def register_user(test_client):
    async def _register(username="alice", password="s3cret-pass"):
        return await test_client.post(
            "/register", json={"username": username, "password": password}
        )
    return _register


@pytest.fixture
def login_user(test_client):
    async def _login(username="alice", password="s3cret-pass"):
        return await test_client.post(
            "/login", json={"username": username, "password": password}
        )
    return _login


@pytest.fixture
def create_post(test_client):
    async def _create(
        title="First post",
        summary="A short summary",
        content="<p>Hello</p>",
        filename="cover.png",
        file_bytes=PNG_BYTES,
    ):
        return await test_client.post(
            "/post",
            data={"title": title, "summary": summary, "content": content},
            files={"file": (filename, file_bytes, "image/png")},
        )
    return _create
