"""Repository for cash-flow transactions (tenant-scoped)."""

from datetime import date
from typing import Any

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    TenantTableRepository,
    amount_value,
    count_value,
)
from src.lexdesk.schemas.transaction import CategoryTotal, TransactionStats

TRANSACTIONS = EntityDescriptor(
    kind="transaction",
    table="transactions",
    columns=(
        Column("type", "VARCHAR NOT NULL CHECK (type IN ('income', 'expense'))"),
        Column("amount", "DECIMAL(15,2) NOT NULL"),
        Column("category_id", "VARCHAR NOT NULL"),
        Column("category", "VARCHAR NOT NULL"),
        Column("description", "VARCHAR NOT NULL"),
        Column("date", "DATE NOT NULL"),
        Column(
            "payment_method",
            "VARCHAR CHECK (payment_method IN "
            "('pix', 'credit_card', 'debit_card', 'bank_transfer', 'boleto', 'cash', 'check'))",
        ),
        Column(
            "status",
            "VARCHAR DEFAULT 'confirmed' CHECK (status IN ('pending', 'confirmed', 'cancelled'))",
        ),
        Column("project_id", "VARCHAR"),
        Column("project_title", "VARCHAR"),
        Column("client_id", "VARCHAR"),
        Column("client_name", "VARCHAR"),
        Column("tags", "JSONB DEFAULT '[]'", json=True),
        Column("notes", "TEXT"),
        Column("is_recurring", "BOOLEAN DEFAULT FALSE"),
        Column(
            "recurring_frequency",
            "VARCHAR CHECK (recurring_frequency IN ('monthly', 'quarterly', 'yearly'))",
        ),
    ),
    indexes=("type", "category_id", "status", "date", "project_id", "client_id", "is_recurring"),
    search_columns=("description", "category"),
    equality_filters={
        "type": "type",
        "status": "status",
        "category_id": "category_id",
        "project_id": "project_id",
        "client_id": "client_id",
        "payment_method": "payment_method",
        "is_recurring": "is_recurring",
    },
    overlap_filters={"tags": "tags"},
    date_column="date",
    order_by="date DESC, created_at DESC",
)


def _date_range(date_from: date | None, date_to: date | None) -> tuple[str, dict[str, Any]]:
    where = ""
    params: dict[str, Any] = {}
    if date_from is not None:
        where += " AND date >= :date_from"
        params["date_from"] = date_from
    if date_to is not None:
        where += " AND date <= :date_to"
        params["date_to"] = date_to
    return where, params


class TransactionRepository(TenantTableRepository):
    """Repository for income and expense transactions in a tenant schema."""

    descriptor = TRANSACTIONS

    async def stats(
        self,
        tenant_id: str,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> TransactionStats:
        """Cash-flow totals, optionally restricted to a date range."""
        where, params = _date_range(date_from, date_to)
        row = await self._aggregate(
            tenant_id,
            """
            COALESCE(SUM(amount) FILTER (WHERE type = 'income'), 0) AS total_income,
            COALESCE(SUM(amount) FILTER (WHERE type = 'expense'), 0) AS total_expense,
            COUNT(*) AS total_transactions,
            COUNT(*) FILTER (WHERE status = 'confirmed') AS confirmed_transactions,
            COUNT(*) FILTER (WHERE status = 'pending') AS pending_transactions,
            COALESCE(SUM(amount) FILTER (
                WHERE type = 'income' AND date >= DATE_TRUNC('month', NOW())
            ), 0) AS this_month_income,
            COALESCE(SUM(amount) FILTER (
                WHERE type = 'expense' AND date >= DATE_TRUNC('month', NOW())
            ), 0) AS this_month_expense,
            COUNT(*) FILTER (WHERE is_recurring = TRUE) AS recurring_transactions
            """,
            where,
            params,
        )
        total_income = amount_value(row, "total_income")
        total_expense = amount_value(row, "total_expense")
        return TransactionStats(
            total_income=total_income,
            total_expense=total_expense,
            net_amount=total_income - total_expense,
            total_transactions=count_value(row, "total_transactions"),
            confirmed_transactions=count_value(row, "confirmed_transactions"),
            pending_transactions=count_value(row, "pending_transactions"),
            this_month_income=amount_value(row, "this_month_income"),
            this_month_expense=amount_value(row, "this_month_expense"),
            recurring_transactions=count_value(row, "recurring_transactions"),
        )

    async def by_category(
        self,
        tenant_id: str,
        type: str | None = None,
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> list[CategoryTotal]:
        """Sum and count active transactions per category, largest first."""
        await self.ensure_schema(tenant_id)
        where, params = _date_range(date_from, date_to)
        if type is not None:
            where += " AND type = :type"
            params["type"] = type

        rows = await self.router.execute_in_schema(
            tenant_id,
            f"""
            SELECT category_id, category, SUM(amount) AS amount, COUNT(*) AS count
            FROM {self.descriptor.qualified_table}
            WHERE is_active = TRUE{where}
            GROUP BY category_id, category
            ORDER BY amount DESC
            """,
            params,
        )
        return [
            CategoryTotal(
                category_id=row["category_id"],
                category=row["category"],
                amount=amount_value(row, "amount"),
                count=count_value(row, "count"),
            )
            for row in rows
        ]

    async def recurring(self, tenant_id: str) -> list[dict[str, Any]]:
        """All active recurring transactions, oldest first."""
        await self.ensure_schema(tenant_id)
        d = self.descriptor
        return await self.router.execute_in_schema(
            tenant_id,
            f"SELECT {d.select_list} FROM {d.qualified_table} "
            "WHERE is_active = TRUE AND is_recurring = TRUE ORDER BY date ASC",
        )
