"""Repository for tasks (tenant-scoped)."""

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    TenantTableRepository,
    count_value,
)
from src.lexdesk.schemas.task import TaskStats

TASKS = EntityDescriptor(
    kind="task",
    table="tasks",
    columns=(
        Column("title", "VARCHAR NOT NULL"),
        Column("description", "TEXT"),
        Column("project_id", "VARCHAR"),
        Column("project_title", "VARCHAR"),
        Column("client_id", "VARCHAR"),
        Column("client_name", "VARCHAR"),
        Column("assigned_to", "VARCHAR"),
        Column("status", "VARCHAR DEFAULT 'not_started'"),
        Column("priority", "VARCHAR DEFAULT 'medium'"),
        Column("start_date", "DATE"),
        Column("end_date", "DATE"),
        Column("estimated_hours", "DECIMAL(8,2)"),
        Column("actual_hours", "DECIMAL(8,2)"),
        Column("progress", "INTEGER DEFAULT 0 CHECK (progress >= 0 AND progress <= 100)"),
        Column("tags", "JSONB DEFAULT '[]'", json=True),
        Column("notes", "TEXT"),
        Column("subtasks", "JSONB DEFAULT '[]'", json=True),
    ),
    indexes=("status", "priority", "assigned_to", "project_id", "client_id", "end_date"),
    search_columns=("title", "description"),
    equality_filters={
        "status": "status",
        "priority": "priority",
        "assigned_to": "assigned_to",
        "project_id": "project_id",
        "client_id": "client_id",
    },
    overlap_filters={"tags": "tags"},
    date_column="end_date",
)


class TaskRepository(TenantTableRepository):
    """Repository for tasks in a tenant schema."""

    descriptor = TASKS

    async def stats(self, tenant_id: str) -> TaskStats:
        row = await self._aggregate(
            tenant_id,
            """
            COUNT(*) AS total,
            COUNT(*) FILTER (WHERE status = 'completed') AS completed,
            COUNT(*) FILTER (WHERE status = 'in_progress') AS in_progress,
            COUNT(*) FILTER (WHERE status = 'not_started') AS not_started,
            COUNT(*) FILTER (WHERE priority = 'urgent') AS urgent
            """,
        )
        return TaskStats(
            total=count_value(row, "total"),
            completed=count_value(row, "completed"),
            in_progress=count_value(row, "in_progress"),
            not_started=count_value(row, "not_started"),
            urgent=count_value(row, "urgent"),
        )
