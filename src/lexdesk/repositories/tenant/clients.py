"""Repository for clients (tenant-scoped)."""

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    TenantTableRepository,
    count_value,
)
from src.lexdesk.schemas.client import ClientStats

CLIENTS = EntityDescriptor(
    kind="client",
    table="clients",
    columns=(
        Column("name", "VARCHAR NOT NULL"),
        Column("email", "VARCHAR NOT NULL"),
        Column("phone", "VARCHAR"),
        Column("organization", "VARCHAR"),
        Column("address", "JSONB DEFAULT '{}'", json=True),
        Column("budget", "DECIMAL(15,2)"),
        Column("currency", "VARCHAR(3) DEFAULT 'BRL'"),
        Column("status", "VARCHAR DEFAULT 'active'"),
        Column("tags", "JSONB DEFAULT '[]'", json=True),
        Column("notes", "TEXT"),
        Column("cpf", "VARCHAR"),
        Column("rg", "VARCHAR"),
        Column("professional_title", "VARCHAR"),
        Column("marital_status", "VARCHAR"),
        Column("birth_date", "DATE"),
    ),
    indexes=("email", "status", "name"),
    search_columns=("name", "email"),
    equality_filters={"status": "status"},
    overlap_filters={"tags": "tags"},
)


class ClientRepository(TenantTableRepository):
    """Repository for clients in a tenant schema."""

    descriptor = CLIENTS

    async def stats(self, tenant_id: str) -> ClientStats:
        row = await self._aggregate(
            tenant_id,
            """
            COUNT(*) AS total,
            COUNT(*) FILTER (WHERE status = 'active') AS active,
            COUNT(*) FILTER (WHERE status = 'inactive') AS inactive,
            COUNT(*) FILTER (WHERE status = 'pending') AS pending,
            COUNT(*) FILTER (WHERE created_at >= DATE_TRUNC('month', NOW())) AS this_month
            """,
        )
        return ClientStats(
            total=count_value(row, "total"),
            active=count_value(row, "active"),
            inactive=count_value(row, "inactive"),
            pending=count_value(row, "pending"),
            this_month=count_value(row, "this_month"),
        )
