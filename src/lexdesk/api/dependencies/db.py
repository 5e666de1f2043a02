"""Tenant query router dependencies."""

from typing import Annotated

from fastapi import Depends, Request

from src.lexdesk.core.db import ConnectionRegistry, TenantQueryRouter


def get_connection_registry(request: Request) -> ConnectionRegistry:
    """Get the per-tenant engine registry created at startup."""
    return request.app.state.connection_registry


def get_query_router(request: Request) -> TenantQueryRouter:
    """Get the tenant query router created at startup."""
    return request.app.state.query_router


Registry = Annotated[ConnectionRegistry, Depends(get_connection_registry)]
QueryRouter = Annotated[TenantQueryRouter, Depends(get_query_router)]
