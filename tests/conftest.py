import asyncio
import itertools
import os

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from app.config import settings
from app.database import Base, get_db
from app.main import app
from app.services.storage import get_storage
from app.utils.auth import hash_password
from app.utils.rate_limit import limiter

TEST_DB_PATH = "./test_cms.db"
TEST_DB_URL = f"sqlite+aiosqlite:///{TEST_DB_PATH}"

ADMIN_EMAIL = "owner@slowwwy.com"
ADMIN_PASSWORD = "thock-thock-123"

# Each session opens its own connection, so sessions work from any event loop
engine = create_async_engine(TEST_DB_URL, poolclass=NullPool)
TestingSession = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

settings.ADMIN_EMAIL = ADMIN_EMAIL
settings.ADMIN_PASSWORD_HASH = hash_password(ADMIN_PASSWORD, rounds=4)
limiter.enabled = False


class FakeStorage:
    """Records storage calls in `log` and hands out Cloudinary-style URLs."""

    cloud_name = "demo"

    def __init__(self):
        self.log = []
        self.fail_removes = False
        self._ids = itertools.count(1)

    @property
    def uploads(self):
        return [entry for entry in self.log if entry[0] == "upload"]

    @property
    def removes(self):
        return [entry[1] for entry in self.log if entry[0] == "remove"]

    def validate_config(self):
        return True

    async def upload(self, content, folder, filename="upload"):
        url = f"https://res.cloudinary.com/demo/image/upload/v1/slowwwy/{folder}/{next(self._ids)}.webp"
        self.log.append(("upload", url, folder, filename))
        return url

    async def remove(self, url):
        self.log.append(("remove", url))
        if self.fail_removes:
            raise RuntimeError("storage unavailable")
        return True


async def _override_get_db():
    async with TestingSession() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


app.dependency_overrides[get_db] = _override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    asyncio.run(_reset_schema())
    yield
    asyncio.run(engine.dispose())


@pytest.fixture(scope="session", autouse=True)
def cleanup_db_file():
    yield
    if os.path.exists(TEST_DB_PATH):
        os.remove(TEST_DB_PATH)


@pytest.fixture
def storage():
    fake = FakeStorage()
    app.dependency_overrides[get_storage] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_storage, None)


@pytest.fixture
def client(storage):
    return TestClient(app)


@pytest.fixture
def admin_client(client):
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return client


def run(coro):
    """Run an editor coroutine with a fresh session."""
    async def _wrapped():
        async with TestingSession() as session:
            return await coro(session)
    return asyncio.run(_wrapped())


def seed(*rows):
    """Insert model instances directly and return their ids."""
    async def _seed(session):
        session.add_all(rows)
        await session.commit()
        return [row.id for row in rows]
    return run(_seed)


def record_row_deletes(model, log):
    """Append ("delete_row", id) to log whenever a row of model is deleted."""
    def _after_delete(mapper, connection, target):
        log.append(("delete_row", target.id))
    event.listen(model, "after_delete", _after_delete)
    return lambda: event.remove(model, "after_delete", _after_delete)


def image_file(name="build.png"):
    return (name, b"\x89PNG\r\n\x1a\nnot-really-a-png", "image/png")
