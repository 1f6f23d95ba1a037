"""Shared fixtures: a throwaway SQLite database per test and an API client."""
import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./court_booking_test.db"
os.environ["SEED_DEFAULTS"] = "false"
os.environ["DEBUG"] = "false"

import httpx
import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.api.deps import get_clock
from app.core.database import get_db, init_db
from app.main import app
from app.services.seed import seed_defaults
from tests.helpers import FROZEN_NOW


@pytest_asyncio.fixture
async def engine(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(session_factory):
    """Default configuration plus Court 1 (indoor) and Court 2 (grass)."""
    async with session_factory() as session:
        await seed_defaults(session)


@pytest_asyncio.fixture
async def client(session_factory, seeded):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FROZEN_NOW)

    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
