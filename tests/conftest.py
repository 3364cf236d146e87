"""
Shared fixtures for the social dashboard tests.

Services run against a throwaway SQLite file per test; the HTTP tests share
one app instance pointed at a temp database. Redis is replaced by an
in-memory fake, so no server is needed.
"""
import os
import tempfile
import time
import uuid

import pytest

# Module-level config is read at import time: set it before anything imports the app
_TMP_DIR = tempfile.mkdtemp(prefix="social_dashboard_test_")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'api.db')}"
os.environ["SIMULATED_SEND_MIN_DELAY"] = "0"
os.environ["SIMULATED_SEND_MAX_DELAY"] = "0"
os.environ.pop("TELEGRAM_BOT_TOKEN", None)
os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from social_dashboard.infrastructure import redis_cache  # noqa: E402
from social_dashboard.infrastructure.database import init_db, get_session  # noqa: E402
from social_dashboard.UAA.session import UserSession  # noqa: E402


class FakeRedis:
    """The handful of redis commands the auth code uses, kept in a dict."""

    def __init__(self):
        self.store = {}

    async def set(self, key, value, ex=None):
        self.store[key] = str(value)
        return True

    async def get(self, key):
        return self.store.get(key)

    async def exists(self, key):
        return 1 if key in self.store else 0

    async def incr(self, key):
        value = int(self.store.get(key, 0)) + 1
        self.store[key] = str(value)
        return value

    async def expire(self, key, seconds):
        return key in self.store

    async def delete(self, *keys):
        removed = 0
        for key in keys:
            if self.store.pop(key, None) is not None:
                removed += 1
        return removed


_fake_redis = FakeRedis()
redis_cache.redis_client = _fake_redis


@pytest.fixture
def fake_redis():
    _fake_redis.store.clear()
    return _fake_redis


# ── Database ──

@pytest.fixture
async def engine(tmp_path):
    eng = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(eng)
    yield eng
    await eng.dispose()


@pytest.fixture
async def session(engine):
    async with get_session(engine) as s:
        yield s


@pytest.fixture
def user():
    return UserSession(user_id=uuid.uuid4(), token_jti="test-jti", expires_at=int(time.time()) + 3600)


@pytest.fixture
def other_user():
    return UserSession(user_id=uuid.uuid4(), token_jti="other-jti", expires_at=int(time.time()) + 3600)


# ── HTTP ──

@pytest.fixture(scope="session")
def client():
    from fastapi.testclient import TestClient
    from social_dashboard.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def auth_headers(client):
    """Register a fresh account and return the bearer header of a logged-in session."""
    suffix = uuid.uuid4().hex[:10]
    email = f"user_{suffix}@example.com"
    password = "Str0ngPassw0rd"
    resp = client.post("/auth/register", json={"email": email, "username": f"user_{suffix}", "password": password})
    assert resp.status_code == 201, resp.text
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}
