"""Per-tenant engine registry."""

import asyncio
from collections.abc import Callable

from sqlalchemy.ext.asyncio import AsyncEngine

from src.lexdesk.core.db.engine import create_tenant_engine
from src.lexdesk.core.logging import get_logger

logger = get_logger(__name__)

EngineFactory = Callable[[], AsyncEngine]


class ConnectionRegistry:
    """Caches one long-lived engine per tenant for the lifetime of the process.

    Engines are created on first use and only released by ``dispose_all``,
    which the application calls on shutdown. Keys are the tenant IDs as
    received; schema names are always derived separately by the router.
    """

    def __init__(self, engine_factory: EngineFactory | None = None) -> None:
        self._engine_factory: EngineFactory = engine_factory or create_tenant_engine
        self._engines: dict[str, AsyncEngine] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._engines)

    def __contains__(self, tenant_id: object) -> bool:
        return tenant_id in self._engines

    async def get_or_create(self, tenant_id: str) -> AsyncEngine:
        """Return the cached engine for a tenant, creating it on first use."""
        engine = self._engines.get(tenant_id)
        if engine is not None:
            return engine

        async with self._lock:
            # Another request may have created it while we waited
            engine = self._engines.get(tenant_id)
            if engine is None:
                engine = self._engine_factory()
                self._engines[tenant_id] = engine
                logger.info("Created tenant engine", tenant_id=tenant_id)
        return engine

    async def dispose_all(self) -> None:
        """Dispose every cached engine. Best-effort: failures are logged and skipped."""
        async with self._lock:
            engines = list(self._engines.items())
            self._engines.clear()

        for tenant_id, engine in engines:
            try:
                await engine.dispose()
            except Exception as e:
                logger.error("Failed to dispose tenant engine", tenant_id=tenant_id, error=str(e))
        if engines:
            logger.info("Disposed tenant engines", count=len(engines))
