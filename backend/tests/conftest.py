"""Shared fixtures: a fresh file-backed SQLite database per test."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel

import clinic_inventory.models  # noqa: F401
from clinic_inventory.db import get_session, get_session_maker
from clinic_inventory.services.ids.allocator import IdAllocator
from clinic_inventory.services.ids.counter_store import CounterStore


@pytest.fixture
async def engine(tmp_path) -> AsyncIterator[AsyncEngine]:
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'clinic.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_maker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncSession]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def counter_store(session_maker: async_sessionmaker[AsyncSession]) -> CounterStore:
    return CounterStore(session_maker)


@pytest.fixture
def allocator(counter_store: CounterStore) -> IdAllocator:
    return IdAllocator(counter_store)


@pytest.fixture
async def unreachable_store(tmp_path) -> AsyncIterator[CounterStore]:
    """CounterStore whose database file lives in a directory that does not exist."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'clinic.db'}")
    yield CounterStore(async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False))
    await engine.dispose()


@pytest.fixture
async def client(session_maker: async_sessionmaker[AsyncSession]) -> AsyncIterator[AsyncClient]:
    from clinic_inventory.main import app

    async def _get_session() -> AsyncIterator[AsyncSession]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = _get_session
    app.dependency_overrides[get_session_maker] = lambda: session_maker
    try:
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
            yield client
    finally:
        app.dependency_overrides.clear()
