"""Integration tests for tenant tables against a real PostgreSQL."""

from datetime import date
from decimal import Decimal

import pytest
from sqlalchemy.exc import IntegrityError

from src.lexdesk.core.exceptions import QueryExecutionError
from src.lexdesk.repositories import (
    ClientRepository,
    InvoiceRepository,
    NotificationRepository,
    TransactionRepository,
)
from src.lexdesk.schemas import (
    ClientFilters,
    ClientRead,
    ClientUpdate,
    NotificationCreate,
    NotificationFilters,
)
from tests.factories import (
    ClientCreateFactory,
    InvoiceCreateFactory,
    TransactionCreateFactory,
)

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


class TestSchemaBootstrap:
    async def test_ensure_schema_is_idempotent(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)

        await repo.ensure_schema(tenant)
        await repo.ensure_schema(tenant)

        page = await repo.list(tenant)
        assert page.total == 0
        assert page.items == []


class TestClientLifecycle:
    async def test_create_then_get_returns_stored_record(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        payload = ClientCreateFactory.build(name="Maria Souza", tags=["vip", "litigation"])

        created = await repo.create(tenant, payload, created_by="user-1")
        fetched = await repo.get_by_id(tenant, created["id"])

        assert created["id"].startswith("client_")
        assert fetched is not None
        assert fetched["name"] == "Maria Souza"
        assert fetched["created_by"] == "user-1"
        assert fetched["is_active"] is True
        assert ClientRead.model_validate(fetched).tags == ["vip", "litigation"]

    async def test_partial_update_changes_only_sent_fields(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        created = await repo.create(
            tenant, ClientCreateFactory.build(phone="555-0100"), created_by="user-1"
        )

        updated = await repo.update(tenant, created["id"], ClientUpdate(status="inactive"))

        assert updated is not None
        assert updated["status"] == "inactive"
        assert updated["phone"] == "555-0100"
        assert updated["name"] == created["name"]
        assert updated["updated_at"] >= created["updated_at"]

    async def test_soft_delete_hides_record_but_keeps_row(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        created = await repo.create(tenant, ClientCreateFactory.build(), created_by="user-1")

        assert await repo.soft_delete(tenant, created["id"]) is True
        assert await repo.soft_delete(tenant, created["id"]) is False
        assert await repo.get_by_id(tenant, created["id"]) is None
        assert (await repo.list(tenant)).total == 0

        rows = await query_router.execute_in_schema(
            tenant,
            "SELECT is_active FROM ${schema}.clients WHERE id = :id",
            {"id": created["id"]},
        )
        assert rows == [{"is_active": False}]

    async def test_update_of_deleted_record_returns_none(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        created = await repo.create(tenant, ClientCreateFactory.build(), created_by="user-1")
        await repo.soft_delete(tenant, created["id"])

        assert await repo.update(tenant, created["id"], ClientUpdate(notes="late")) is None


class TestListing:
    async def test_pages_are_disjoint_and_cover_all_records(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        for _ in range(5):
            await repo.create(tenant, ClientCreateFactory.build(), created_by="user-1")

        seen: list[str] = []
        for page_number in (1, 2, 3):
            page = await repo.list(tenant, ClientFilters(page=page_number, limit=2))
            assert page.total == 5
            assert page.total_pages == 3
            seen.extend(item["id"] for item in page.items)

        assert len(seen) == 5
        assert len(set(seen)) == 5

    async def test_search_and_tag_filters(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = ClientRepository(query_router)
        await repo.create(
            tenant, ClientCreateFactory.build(name="Ana Ribeiro", tags=["vip"]), created_by="u"
        )
        await repo.create(
            tenant, ClientCreateFactory.build(name="Bruno Lima", tags=["pro-bono"]), created_by="u"
        )

        by_name = await repo.list(tenant, ClientFilters(search="ribeiro"))
        by_tag = await repo.list(tenant, ClientFilters(tags=["pro-bono", "unused"]))

        assert [item["name"] for item in by_name.items] == ["Ana Ribeiro"]
        assert [item["name"] for item in by_tag.items] == ["Bruno Lima"]


class TestTenantIsolation:
    async def test_records_are_invisible_to_other_tenants(self, query_router, make_tenant):
        tenant_a, tenant_b = make_tenant(), make_tenant()
        repo = ClientRepository(query_router)
        created = await repo.create(tenant_a, ClientCreateFactory.build(), created_by="user-1")

        assert await repo.get_by_id(tenant_b, created["id"]) is None
        assert (await repo.list(tenant_b)).total == 0
        assert (await repo.list(tenant_a)).total == 1


class TestTransactionAggregates:
    async def test_stats_and_category_breakdown(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = TransactionRepository(query_router)
        day = date(2024, 3, 10)
        await repo.create(
            tenant,
            TransactionCreateFactory.build(type="income", amount=Decimal("1000.00"), date=day),
            created_by="u",
        )
        await repo.create(
            tenant,
            TransactionCreateFactory.build(
                type="expense",
                amount=Decimal("300.00"),
                category_id="cat_rent",
                category="Rent",
                date=day,
            ),
            created_by="u",
        )
        await repo.create(
            tenant,
            TransactionCreateFactory.build(
                type="income", amount=Decimal("50.00"), date=date(2023, 1, 1)
            ),
            created_by="u",
        )

        stats = await repo.stats(tenant, date_from=date(2024, 1, 1))
        expenses = await repo.by_category(tenant, type="expense")

        assert stats.total_income == 1000.0
        assert stats.total_expense == 300.0
        assert stats.net_amount == 700.0
        assert stats.total_transactions == 2
        assert [(c.category_id, c.amount, c.count) for c in expenses] == [("cat_rent", 300.0, 1)]


class TestInvoices:
    async def test_duplicate_number_is_rejected_by_the_database(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = InvoiceRepository(query_router)
        await repo.create(tenant, InvoiceCreateFactory.build(number="INV-001"), created_by="u")

        with pytest.raises(QueryExecutionError) as exc_info:
            await repo.create(tenant, InvoiceCreateFactory.build(number="INV-001"), created_by="u")

        assert isinstance(exc_info.value.__cause__, IntegrityError)
        assert exc_info.value.is_unique_violation

    async def test_mark_sent_and_reminders(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = InvoiceRepository(query_router)
        created = await repo.create(tenant, InvoiceCreateFactory.build(), created_by="u")

        sent = await repo.mark_sent(tenant, created["id"])
        reminded = await repo.increment_reminders(tenant, created["id"])

        assert sent is not None
        assert sent["email_sent"] is True
        assert sent["email_sent_at"] is not None
        assert reminded is not None
        assert reminded["reminders_sent"] == 1
        assert reminded["last_reminder_at"] is not None


class TestNotifications:
    async def test_notifications_are_scoped_to_their_user(self, query_router, make_tenant):
        tenant = make_tenant()
        repo = NotificationRepository(query_router)
        mine = await repo.notify(
            tenant, NotificationCreate(user_id="alice", title="Hi", message="Hello"), "bob"
        )
        await repo.notify(
            tenant, NotificationCreate(user_id="carol", title="Hi", message="Hello"), "bob"
        )

        assert await repo.unread_count(tenant, "alice") == 1
        assert await repo.get_for_user(tenant, mine["id"], "carol") is None
        assert await repo.mark_read(tenant, mine["id"], "carol") is None

        assert await repo.mark_all_read(tenant, "alice") == 1
        assert await repo.unread_count(tenant, "alice") == 0

        page = await repo.list_for_user(tenant, "alice", NotificationFilters(unread_only=True))
        assert page.total == 0
