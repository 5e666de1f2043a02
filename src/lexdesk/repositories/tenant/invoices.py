"""Repository for invoices (tenant-scoped)."""

from typing import Any

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    TenantTableRepository,
    amount_value,
    count_value,
)
from src.lexdesk.schemas.invoice import InvoiceStats

INVOICES = EntityDescriptor(
    kind="invoice",
    table="invoices",
    columns=(
        Column("number", "VARCHAR NOT NULL"),
        Column("title", "VARCHAR NOT NULL"),
        Column("description", "TEXT"),
        Column("client_id", "VARCHAR"),
        Column("client_name", "VARCHAR NOT NULL"),
        Column("client_email", "VARCHAR"),
        Column("client_phone", "VARCHAR"),
        Column("amount", "DECIMAL(15,2) NOT NULL"),
        Column("currency", "VARCHAR(3) DEFAULT 'BRL'"),
        Column("status", "VARCHAR DEFAULT 'draft'"),
        Column("due_date", "DATE NOT NULL"),
        Column("items", "JSONB DEFAULT '[]'", json=True),
        Column("tags", "JSONB DEFAULT '[]'", json=True),
        Column("notes", "TEXT"),
        Column("payment_status", "VARCHAR DEFAULT 'pending'"),
        Column("payment_method", "VARCHAR"),
        Column("payment_date", "DATE"),
        Column("email_sent", "BOOLEAN DEFAULT FALSE"),
        Column("email_sent_at", "TIMESTAMP"),
        Column("reminders_sent", "INTEGER DEFAULT 0"),
        Column("last_reminder_at", "TIMESTAMP"),
    ),
    indexes=("number", "client_id", "status", "payment_status", "due_date"),
    unique_columns=("number",),
    search_columns=("number", "title", "client_name"),
    equality_filters={
        "status": "status",
        "payment_status": "payment_status",
        "client_id": "client_id",
    },
    overlap_filters={"tags": "tags"},
    date_column="due_date",
)


class InvoiceRepository(TenantTableRepository):
    """Repository for invoices in a tenant schema."""

    descriptor = INVOICES

    async def stats(self, tenant_id: str) -> InvoiceStats:
        row = await self._aggregate(
            tenant_id,
            """
            COUNT(*) AS total,
            COUNT(*) FILTER (WHERE status = 'draft') AS draft,
            COUNT(*) FILTER (WHERE status = 'pending') AS pending,
            COUNT(*) FILTER (WHERE payment_status = 'paid') AS paid,
            COUNT(*) FILTER (WHERE payment_status = 'overdue') AS overdue,
            COALESCE(SUM(amount), 0) AS total_amount,
            COALESCE(SUM(amount) FILTER (WHERE payment_status = 'paid'), 0) AS paid_amount,
            COUNT(*) FILTER (WHERE created_at >= DATE_TRUNC('month', NOW())) AS this_month
            """,
        )
        return InvoiceStats(
            total=count_value(row, "total"),
            draft=count_value(row, "draft"),
            pending=count_value(row, "pending"),
            paid=count_value(row, "paid"),
            overdue=count_value(row, "overdue"),
            total_amount=amount_value(row, "total_amount"),
            paid_amount=amount_value(row, "paid_amount"),
            this_month=count_value(row, "this_month"),
        )

    async def _touch(
        self, tenant_id: str, invoice_id: str, assignments: str
    ) -> dict[str, Any] | None:
        await self.ensure_schema(tenant_id)
        d = self.descriptor
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {d.qualified_table} SET {assignments}, updated_at = NOW() "
            f"WHERE id = :id AND is_active = TRUE RETURNING {d.select_list}",
            {"id": invoice_id},
        )
        return rows[0] if rows else None

    async def mark_sent(self, tenant_id: str, invoice_id: str) -> dict[str, Any] | None:
        """Record that the invoice was emailed. A draft moves to ``sent``."""
        return await self._touch(
            tenant_id,
            invoice_id,
            "email_sent = TRUE, email_sent_at = NOW(), "
            "status = CASE WHEN status = 'draft' THEN 'sent' ELSE status END",
        )

    async def increment_reminders(self, tenant_id: str, invoice_id: str) -> dict[str, Any] | None:
        return await self._touch(
            tenant_id,
            invoice_id,
            "reminders_sent = COALESCE(reminders_sent, 0) + 1, last_reminder_at = NOW()",
        )

    async def get_by_number(self, tenant_id: str, number: str) -> dict[str, Any] | None:
        await self.ensure_schema(tenant_id)
        d = self.descriptor
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"SELECT {d.select_list} FROM {d.qualified_table} WHERE number = :number",
            {"number": number},
        )
        return rows[0] if rows else None
