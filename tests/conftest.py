"""
Pytest configuration and fixtures for backend testing
"""

import os
import shutil
import tempfile
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import NullPool

# Set test environment before the application reads its settings
_TEST_ROOT = Path(tempfile.mkdtemp(prefix="festival-cms-tests-"))
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "festival-secret"

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TEST_ROOT / 'app.db'}"
os.environ["MEDIA_ROOT"] = str(_TEST_ROOT / "media")
os.environ["AUTO_MIGRATE"] = "false"
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME

from festival_cms.services.auth import AuthService, hash_password  # noqa: E402

ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD)
os.environ["ADMIN_PASSWORD_HASH"] = ADMIN_PASSWORD_HASH

from festival_cms.db.config import build_engine, init_models  # noqa: E402
from festival_cms.main import app  # noqa: E402
from festival_cms.resources import RESOURCES  # noqa: E402
from festival_cms.store.collection_store import CollectionStore  # noqa: E402
from festival_cms.store.storage import ObjectStorage  # noqa: E402
from festival_cms.sync.binding import ResourceBinding  # noqa: E402
from festival_cms.sync.notifications import Notifier  # noqa: E402


@pytest.fixture
async def store(tmp_path):
    """Collection store over a fresh SQLite database."""
    engine, session_factory = build_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'festival.db'}", poolclass=NullPool
    )
    await init_models(engine)
    yield CollectionStore(session_factory)
    await engine.dispose()


@pytest.fixture
def notifier():
    return Notifier()


@pytest.fixture
def make_binding(store, notifier):
    """Factory for bindings sharing the test store."""
    def factory(collection, notifier=notifier, **kwargs):
        return ResourceBinding(store, RESOURCES[collection], notifier, **kwargs)
    return factory


@pytest.fixture
def storage(tmp_path):
    return ObjectStorage(tmp_path / "media", "http://test", max_size=1024 * 1024)


@pytest.fixture
def test_app(store, storage):
    """The application wired to the per-test store, storage and auth."""
    saved = (app.state.store, app.state.storage, app.state.auth)
    app.state.store = store
    app.state.storage = storage
    app.state.auth = AuthService(ADMIN_USERNAME, ADMIN_PASSWORD_HASH, 3600)
    yield app
    app.state.store, app.state.storage, app.state.auth = saved


@pytest.fixture
async def client(test_app):
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


@pytest.fixture
async def admin_headers(client):
    resp = await client.post(
        "/api/v1/auth/login",
        json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD},
    )
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['token']}"}


def pytest_configure(config):
    """Configure pytest with custom markers"""
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(_TEST_ROOT, ignore_errors=True)


# Helper functions for tests
def assert_response_success(response, expected_status=200):
    """Assert that response is successful"""
    assert response.status_code == expected_status, f"Expected {expected_status}, got {response.status_code}: {response.text}"


def assert_response_error(response, expected_status=400):
    """Assert that response is an error"""
    assert response.status_code == expected_status, f"Expected error {expected_status}, got {response.status_code}"
    body = response.json()
    assert body["success"] is False
    assert "error" in body
