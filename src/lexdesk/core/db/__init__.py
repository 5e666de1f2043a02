"""Database utilities - tenant engines, registry and query routing."""

from src.lexdesk.core.db.engine import create_tenant_engine
from src.lexdesk.core.db.registry import ConnectionRegistry
from src.lexdesk.core.db.router import SCHEMA_PLACEHOLDER, TenantQueryRouter, render_query

__all__ = [
    # Engine
    "create_tenant_engine",
    # Registry
    "ConnectionRegistry",
    # Router
    "SCHEMA_PLACEHOLDER",
    "TenantQueryRouter",
    "render_query",
]
