"""Integration test fixtures for database and HTTP client operations.

These fixtures require external resources (PostgreSQL database).
Run with: pytest -m integration
"""

import asyncio
from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import NullPool

from src.studio.core import db
from src.studio.core.config import get_settings
from src.studio.core.db import run_migrations_sync
from src.studio.main import create_app

TABLES = ("projects", "invoice_projects", "exported_invoices", "invoice_counters")


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Create test database engine with migrations applied and empty tables."""
    await db.dispose_engine()

    settings = get_settings()
    test_engine = create_async_engine(settings.database_url, poolclass=NullPool)

    await asyncio.to_thread(run_migrations_sync)
    async with test_engine.begin() as conn:
        await conn.execute(text(f"TRUNCATE {', '.join(TABLES)}"))

    yield test_engine
    await test_engine.dispose()
    await db.dispose_engine()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session does not auto-commit; tests call ``commit`` explicitly.
    """
    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session


@pytest.fixture
async def db_client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    """HTTP client against the real app and database."""
    app = create_app()
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as client:
        yield client
