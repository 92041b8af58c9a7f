"""
테스트 공통 설정

bandsite 를 임포트하기 전에 임시 DB/디렉토리와 관리자 자격 증명을 환경변수로 지정한다.
"""

import asyncio
import os
import tempfile

from passlib.context import CryptContext

_TMP_DIR = tempfile.mkdtemp(prefix="bandsite-test-")
ADMIN_USERNAME = "admin"
ADMIN_PASSWORD = "correct horse battery staple"

os.environ["ENVIRONMENT"] = "test"
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{os.path.join(_TMP_DIR, 'test.db')}"
os.environ["CONTENT_BACKEND"] = "sql"
os.environ["CONTENT_DATA_DIR"] = os.path.join(_TMP_DIR, "content")
os.environ["UPLOAD_DIRECTORY"] = os.path.join(_TMP_DIR, "uploads")
os.environ["ADMIN_USERNAME"] = ADMIN_USERNAME
os.environ["ADMIN_PASSWORD_HASH"] = CryptContext(schemes=["bcrypt"], deprecated="auto").hash(ADMIN_PASSWORD)
os.environ["SMTP_HOST"] = ""

import fakeredis  # noqa: E402
import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from bandsite.core.database import Base, engine, get_redis  # noqa: E402
from bandsite.main import app  # noqa: E402


async def _reset_database() -> None:
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


@pytest.fixture
def fake_redis():
    return fakeredis.FakeAsyncRedis(server=fakeredis.FakeServer(), decode_responses=True)


@pytest.fixture
def client(fake_redis):
    asyncio.run(_reset_database())

    async def _get_fake_redis():
        return fake_redis

    app.dependency_overrides[get_redis] = _get_fake_redis
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


def login(client: TestClient) -> None:
    resp = client.post("/api/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text


@pytest.fixture
def admin(client):
    """로그인된 TestClient"""
    login(client)
    return client


@pytest.fixture
def upload_dir():
    return os.environ["UPLOAD_DIRECTORY"]
