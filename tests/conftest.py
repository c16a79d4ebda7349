"""Общие фикстуры: тестовая БД, клиент приложения, дешевые зависимости"""

import os

# До импорта приложения: движок и настройки создаются при импорте
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("AUTH_SECRET", "test-secret")
os.environ.setdefault("HASH_TIME_COST", "1")
os.environ.setdefault("HASH_MEMORY_COST", "1024")
os.environ.setdefault("HASH_PARALLELISM", "1")

import pytest  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import pastebox.db.models  # noqa: E402,F401
from pastebox.core.auth import get_password_hasher, get_session_codec  # noqa: E402
from pastebox.core.db import get_db  # noqa: E402
from pastebox.core.rate_limit import RateLimiter, get_rate_limiter  # noqa: E402
from pastebox.core.security import CredentialHasher, SessionTokenCodec  # noqa: E402
from pastebox.db.base import Base  # noqa: E402
from pastebox.main import app  # noqa: E402

RATE_LIMIT_MAX = 3


@pytest.fixture
def hasher():
    """Дешевый argon2 для тестов"""
    return CredentialHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture
def codec():
    return SessionTokenCodec("test-secret", ttl_seconds=7 * 24 * 60 * 60)


@pytest.fixture
def limiter():
    return RateLimiter(RATE_LIMIT_MAX, 60)


@pytest.fixture
async def test_engine():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def client(test_session_factory, hasher, codec, limiter):
    """Клиент приложения с тестовой БД и подмененными зависимостями"""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_password_hasher] = lambda: hasher
    app.dependency_overrides[get_session_codec] = lambda: codec
    app.dependency_overrides[get_rate_limiter] = lambda: limiter

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
