"""Test fixtures for the URL shortener application."""

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

from shortener.core.config import EnvironmentType, Settings, StoreBackend
from shortener.db.base import get_engine
from shortener.main import create_app
# Import models to ensure they're registered with SQLModel metadata
from shortener.models.url import UrlMapping  # noqa: F401
from shortener.stores.database import SqlUrlStore
from shortener.stores.memory import InMemoryUrlStore


# Test database URL - using SQLite in-memory
TEST_SQLALCHEMY_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine with in-memory SQLite."""
    engine = create_async_engine(
        TEST_SQLALCHEMY_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
        echo=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_db(test_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async_session = async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session() as session:
        await session.begin()
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an app served from the in-memory store."""
    return Settings(
        ENVIRONMENT=EnvironmentType.TESTING,
        STORE_BACKEND=StoreBackend.MEMORY,
        DATABASE_URL=None,
        BASE_URL=None,
        DEBUG=True,
    )


@pytest.fixture
def database_settings(tmp_path) -> Settings:
    """Settings pointing at a file-backed SQLite database."""
    return Settings(
        ENVIRONMENT=EnvironmentType.TESTING,
        STORE_BACKEND=StoreBackend.DATABASE,
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'urls.db'}",
        BASE_URL=None,
    )


@pytest.fixture
def memory_store() -> InMemoryUrlStore:
    """Return an empty in-memory store."""
    return InMemoryUrlStore()


@pytest_asyncio.fixture
async def sql_store(database_settings) -> AsyncGenerator[SqlUrlStore, None]:
    """Return a relational store on a fresh SQLite file.

    A file database with one connection per session lets concurrent
    inserts actually contend for the primary key.
    """
    store = SqlUrlStore(get_engine(database_settings.DATABASE_URL, database_settings))
    await store.initialize()
    yield store
    await store.close()


@pytest.fixture
def test_app(test_settings, memory_store) -> FastAPI:
    """Create FastAPI test app serving from the in-memory store."""
    return create_app(test_settings, store=memory_store)


@pytest.fixture
def client(test_app) -> Generator[TestClient, None, None]:
    """Return FastAPI TestClient instance."""
    with TestClient(test_app) as test_client:
        yield test_client
