"""Repository for projects (tenant-scoped)."""

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    TenantTableRepository,
    amount_value,
    count_value,
)
from src.lexdesk.schemas.project import ProjectStats

PROJECTS = EntityDescriptor(
    kind="project",
    table="projects",
    columns=(
        Column("title", "VARCHAR NOT NULL"),
        Column("description", "TEXT"),
        Column("client_name", "VARCHAR NOT NULL"),
        Column("client_id", "VARCHAR"),
        Column("organization", "VARCHAR"),
        Column("address", "TEXT"),
        Column("budget", "DECIMAL(15,2)"),
        Column("currency", "VARCHAR(3) DEFAULT 'BRL'"),
        Column("status", "VARCHAR DEFAULT 'contacted'"),
        Column("priority", "VARCHAR DEFAULT 'medium'"),
        Column("start_date", "DATE"),
        Column("due_date", "DATE"),
        Column("tags", "JSONB DEFAULT '[]'", json=True),
        Column("assigned_to", "JSONB DEFAULT '[]'", json=True),
        Column("notes", "TEXT"),
        Column("contacts", "JSONB DEFAULT '[]'", json=True),
    ),
    indexes=("status", "priority", "client_id", "due_date"),
    search_columns=("title", "client_name"),
    equality_filters={"status": "status", "priority": "priority", "client_id": "client_id"},
    overlap_filters={"tags": "tags", "assigned_to": "assigned_to"},
)


class ProjectRepository(TenantTableRepository):
    """Repository for projects in a tenant schema."""

    descriptor = PROJECTS

    async def stats(self, tenant_id: str) -> ProjectStats:
        row = await self._aggregate(
            tenant_id,
            """
            COUNT(*) AS total,
            COUNT(*) FILTER (WHERE status = 'contacted') AS contacted,
            COUNT(*) FILTER (WHERE status = 'proposal') AS proposal,
            COUNT(*) FILTER (WHERE status = 'won') AS won,
            COUNT(*) FILTER (WHERE status = 'lost') AS lost,
            COALESCE(SUM(budget), 0) AS total_budget,
            COUNT(*) FILTER (WHERE created_at >= DATE_TRUNC('month', NOW())) AS this_month
            """,
        )
        return ProjectStats(
            total=count_value(row, "total"),
            contacted=count_value(row, "contacted"),
            proposal=count_value(row, "proposal"),
            won=count_value(row, "won"),
            lost=count_value(row, "lost"),
            total_budget=amount_value(row, "total_budget"),
            this_month=count_value(row, "this_month"),
        )
