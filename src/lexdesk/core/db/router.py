"""Tenant-scoped query router.

Query templates reference the tenant schema through the literal
``${schema}`` token, e.g. ``SELECT * FROM ${schema}.clients WHERE id = :id``.
The router validates the tenant, substitutes the quoted schema name and runs
the statement with its values bound as parameters.
"""

from collections.abc import Mapping
from typing import Any, Final

from sqlalchemy import text
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError

from src.lexdesk.core.db.registry import ConnectionRegistry
from src.lexdesk.core.exceptions import QueryExecutionError, UnresolvedPlaceholder
from src.lexdesk.core.logging import get_logger
from src.lexdesk.core.security.validators import tenant_schema_name

logger = get_logger(__name__)

SCHEMA_PLACEHOLDER: Final[str] = "${schema}"

_preparer = postgresql.dialect().identifier_preparer


def render_query(tenant_id: str, template: str) -> str:
    """Substitute the tenant's schema into every placeholder in ``template``.

    Raises:
        InvalidTenantId: If the tenant ID fails validation.
        UnresolvedPlaceholder: If a ``${...}`` token survives substitution.
    """
    schema = _preparer.quote_schema(tenant_schema_name(tenant_id))
    rendered = template.replace(SCHEMA_PLACEHOLDER, schema)
    if "${" in rendered:
        raise UnresolvedPlaceholder(
            f"Query template has an unknown placeholder; only {SCHEMA_PLACEHOLDER} is supported"
        )
    return rendered


class TenantQueryRouter:
    """Runs raw SQL templates inside a tenant's schema."""

    def __init__(self, registry: ConnectionRegistry):
        self.registry = registry

    async def execute_in_schema(
        self,
        tenant_id: str,
        query_template: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        """Execute a template in the tenant schema and return rows as dicts.

        Each call is its own transaction. Statements without a result set
        return an empty list. Failures are logged and re-raised as
        ``QueryExecutionError``; nothing is retried.
        """
        query = render_query(tenant_id, query_template)
        engine = await self.registry.get_or_create(tenant_id)

        try:
            async with engine.begin() as conn:
                result = await conn.execute(text(query), dict(params or {}))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            logger.error(
                "Error executing tenant query",
                tenant_id=tenant_id,
                query=query,
                error=str(e),
            )
            sqlstate = getattr(getattr(e, "orig", None), "sqlstate", None)
            raise QueryExecutionError(tenant_id, str(e), sqlstate=sqlstate) from e
