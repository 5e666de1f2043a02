import secrets
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator

from src.lexdesk.api.middlewares import setup_middlewares
from src.lexdesk.api.v1.router import api_router
from src.lexdesk.core.config import get_settings
from src.lexdesk.core.db import ConnectionRegistry, TenantQueryRouter
from src.lexdesk.core.exceptions import setup_exception_handlers
from src.lexdesk.core.logging import get_logger, setup_logging

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(f"Starting {settings.app_name}")

    registry = ConnectionRegistry()
    app.state.connection_registry = registry
    app.state.query_router = TenantQueryRouter(registry)

    yield

    logger.info("Closing tenant connections...")
    await registry.dispose_all()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "clients", "description": "CRM clients"},
    {"name": "projects", "description": "Sales pipeline projects"},
    {"name": "tasks", "description": "Work items"},
    {"name": "transactions", "description": "Cash flow (COMPOSTA and GERENCIAL accounts)"},
    {"name": "invoices", "description": "Receivables (COMPOSTA and GERENCIAL accounts)"},
    {"name": "notifications", "description": "Per-user notification inbox"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Multi-tenant practice management API with schema-per-tenant isolation",
        version="0.1.0",
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    setup_middlewares(app, settings)

    app.include_router(api_router)

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise HTTPException(
                    status_code=status.HTTP_401_UNAUTHORIZED,
                    detail="Invalid or missing metrics API key",
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    @app.get("/health")
    async def health(request: Request) -> dict[str, Any]:
        """Liveness check with the number of cached tenant engines."""
        registry: ConnectionRegistry | None = getattr(
            request.app.state, "connection_registry", None
        )
        return {
            "status": "healthy",
            "app": settings.app_name,
            "tenant_engines": len(registry) if registry is not None else 0,
        }

    return app


app = create_app()
