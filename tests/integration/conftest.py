"""Integration test fixtures.

These fixtures require a PostgreSQL database at DATABASE_URL. Tests are
skipped when it cannot be reached.
"""

import secrets
from collections.abc import AsyncGenerator, Callable

import pytest
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.pool import NullPool

from src.lexdesk.core.config import get_settings
from src.lexdesk.core.db import ConnectionRegistry, TenantQueryRouter
from src.lexdesk.core.db.engine import _get_connect_args


@pytest.fixture(scope="session")
def database_available() -> bool:
    import asyncio

    async def _ping() -> bool:
        settings = get_settings()
        engine = create_async_engine(
            settings.database_url,
            poolclass=NullPool,
            connect_args=_get_connect_args(settings),
        )
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except (OSError, SQLAlchemyError):
            return False
        finally:
            await engine.dispose()

    return asyncio.run(_ping())


@pytest.fixture
async def query_router(database_available: bool) -> AsyncGenerator[TenantQueryRouter]:
    """A real tenant query router; engines are disposed after each test."""
    if not database_available:
        pytest.skip("PostgreSQL is not reachable at DATABASE_URL")

    registry = ConnectionRegistry()
    yield TenantQueryRouter(registry)
    await registry.dispose_all()


@pytest.fixture
async def make_tenant(
    query_router: TenantQueryRouter,
) -> AsyncGenerator[Callable[[], str]]:
    """Create unique tenant ids and drop their schemas after the test."""
    created: list[str] = []

    def _make() -> str:
        tenant_id = f"it-{secrets.token_hex(6)}"
        created.append(tenant_id)
        return tenant_id

    yield _make

    for tenant_id in created:
        await query_router.execute_in_schema(tenant_id, "DROP SCHEMA IF EXISTS ${schema} CASCADE")
