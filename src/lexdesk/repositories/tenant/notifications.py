"""Repository for in-app notifications (tenant-scoped, per user)."""

from typing import Any

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    Page,
    TenantTableRepository,
    count_value,
)
from src.lexdesk.schemas.notification import NotificationCreate, NotificationFilters

NOTIFICATIONS = EntityDescriptor(
    kind="notification",
    table="notifications",
    columns=(
        Column("user_id", "VARCHAR NOT NULL"),
        Column("actor_id", "VARCHAR"),
        Column("type", "VARCHAR NOT NULL DEFAULT 'system'"),
        Column("title", "VARCHAR NOT NULL"),
        Column("message", "TEXT NOT NULL"),
        Column("payload", "JSONB DEFAULT '{}'", json=True),
        Column("link", "VARCHAR"),
        Column("read", "BOOLEAN DEFAULT FALSE"),
    ),
    indexes=("user_id", "read", "type"),
    equality_filters={"user_id": "user_id", "type": "type"},
    flag_filters={"unread_only": "read = FALSE"},
)


class UserNotificationFilters(NotificationFilters):
    user_id: str


class NotificationCreateRecord(NotificationCreate):
    """Insert payload with the acting user filled in from the token."""

    actor_id: str | None = None


class NotificationRepository(TenantTableRepository):
    """Repository for notifications. Reads and writes are scoped to one user."""

    descriptor = NOTIFICATIONS

    async def notify(
        self, tenant_id: str, data: NotificationCreate, actor_id: str
    ) -> dict[str, Any]:
        record = NotificationCreateRecord(**data.model_dump(), actor_id=actor_id)
        return await self.create(tenant_id, record, created_by=actor_id)

    async def list_for_user(
        self, tenant_id: str, user_id: str, filters: NotificationFilters
    ) -> Page:
        scoped = UserNotificationFilters(**filters.model_dump(), user_id=user_id)
        return await self.list(tenant_id, scoped)

    async def get_for_user(
        self, tenant_id: str, notification_id: str, user_id: str
    ) -> dict[str, Any] | None:
        notification = await self.get_by_id(tenant_id, notification_id)
        if notification is None or notification["user_id"] != user_id:
            return None
        return notification

    async def mark_read(
        self, tenant_id: str, notification_id: str, user_id: str
    ) -> dict[str, Any] | None:
        """Mark one of the user's notifications read. None if it is not theirs."""
        await self.ensure_schema(tenant_id)
        d = self.descriptor
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {d.qualified_table} SET read = TRUE, updated_at = NOW() "
            "WHERE id = :id AND user_id = :user_id AND is_active = TRUE "
            f"RETURNING {d.select_list}",
            {"id": notification_id, "user_id": user_id},
        )
        return rows[0] if rows else None

    async def mark_all_read(self, tenant_id: str, user_id: str) -> int:
        """Mark every unread notification of the user read and return how many changed."""
        await self.ensure_schema(tenant_id)
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {self.descriptor.qualified_table} SET read = TRUE, updated_at = NOW() "
            "WHERE user_id = :user_id AND read = FALSE AND is_active = TRUE RETURNING id",
            {"user_id": user_id},
        )
        return len(rows)

    async def unread_count(self, tenant_id: str, user_id: str) -> int:
        row = await self._aggregate(
            tenant_id,
            "COUNT(*) AS count",
            " AND user_id = :user_id AND read = FALSE",
            {"user_id": user_id},
        )
        return count_value(row, "count")

    async def delete_for_user(self, tenant_id: str, notification_id: str, user_id: str) -> bool:
        await self.ensure_schema(tenant_id)
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {self.descriptor.qualified_table} "
            "SET is_active = FALSE, updated_at = NOW() "
            "WHERE id = :id AND user_id = :user_id AND is_active = TRUE RETURNING id",
            {"id": notification_id, "user_id": user_id},
        )
        return len(rows) > 0
