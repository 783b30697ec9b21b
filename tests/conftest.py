import pytest
from httpx import AsyncClient, ASGITransport
from mongomock_motor import AsyncMongoMockClient

from videotube_api.main import app
from videotube_api.core.config import settings
from videotube_api.dependencies import get_db


@pytest.fixture(scope="session", autouse=True)
def test_env():
    settings.sentry_dsn = ""  # no Sentry in tests
    settings.jwt_secret = "test-jwt-secret"
    settings.bcrypt_rounds = 4


@pytest.fixture
def db():
    """Fresh in-memory database per test."""
    return AsyncMongoMockClient()["videotube_test"]


@pytest.fixture
async def client(db):
    async def _get_db():
        return db

    app.dependency_overrides[get_db] = _get_db
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport,
                           base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.pop(get_db, None)
