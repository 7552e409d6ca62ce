import os

# Keep the application's own engine off the filesystem
os.environ.setdefault("DATABASE_URL_ASYNC", "sqlite+aiosqlite://")
os.environ.setdefault("ENVIRONMENT", "development")

import random

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database import get_db
from app.api.routes.dependencies import get_random_source
from app.models.models import Base
from app.services.essay_repository import EssayRepository

TEST_DATABASE_URL = "sqlite+aiosqlite://"


class FixedRandom(random.Random):
    """Random source whose uniform(a, b) is decided by ``pick``"""

    def __init__(self, pick):
        super().__init__()
        self.pick = pick

    def uniform(self, a, b):
        return self.pick(a, b)


@pytest.fixture
def fixed_rng():
    """Factory for random sources with a fixed uniform() result"""
    return FixedRandom


@pytest.fixture
def zero_rng():
    """Random source that never perturbs a score"""
    return FixedRandom(lambda a, b: 0.0)


@pytest.fixture
async def test_engine():
    """Fresh in-memory database per test"""
    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Get database session for tests"""
    async with session_factory() as session:
        yield session


@pytest.fixture
def repository(db_session):
    return EssayRepository(db_session)


@pytest.fixture
async def async_client(session_factory, zero_rng):
    """Async client against the app, wired to the test database"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_random_source] = lambda: zero_rng

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def sample_essay():
    return (
        "Leadership is learned through practice. During two years running a "
        "tutoring program I recruited twelve volunteers and doubled attendance. "
        "Those months taught me that clear goals matter more than titles."
    )
