"""HTTP tests for the tenant resource endpoints with the database faked out."""

from datetime import UTC, datetime, timedelta

import pytest
from httpx import AsyncClient
from jose import jwt

from src.lexdesk.core.config import get_settings
from src.lexdesk.core.exceptions import QueryExecutionError
from tests.helpers import FakeQueryRouter, stored_row

pytestmark = [pytest.mark.unit, pytest.mark.asyncio]


def _client_row(record_id: str = "client_1", **fields) -> dict:
    return stored_row(record_id, name="Ada Lovelace", email="ada@example.com", **fields)


def _token(claims: dict) -> dict[str, str]:
    settings = get_settings()
    claims = {"exp": datetime.now(UTC) + timedelta(minutes=5), **claims}
    token = jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    return {"Authorization": f"Bearer {token}"}


# --- Authentication ---


async def test_missing_token_rejected(api_client: AsyncClient):
    response = await api_client.get("/api/v1/clients")

    assert response.status_code == 401
    body = response.json()
    assert body["detail"] == "Missing or invalid authorization header"
    assert body["request_id"]


async def test_garbage_token_rejected(api_client: AsyncClient):
    response = await api_client.get(
        "/api/v1/clients", headers={"Authorization": "Bearer not-a-jwt"}
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


async def test_expired_token_rejected(api_client: AsyncClient):
    headers = _token(
        {
            "sub": "user-1",
            "tenant_id": "acme",
            "type": "access",
            "exp": datetime.now(UTC) - timedelta(minutes=1),
        }
    )

    response = await api_client.get("/api/v1/clients", headers=headers)

    assert response.status_code == 401


@pytest.mark.parametrize(
    "claims",
    [
        {"sub": "user-1", "tenant_id": "acme", "type": "refresh"},
        {"sub": "user-1", "type": "access"},
        {"tenant_id": "acme", "type": "access"},
    ],
)
async def test_incomplete_claims_rejected(api_client: AsyncClient, claims: dict):
    response = await api_client.get("/api/v1/clients", headers=_token(claims))

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid or expired token"


async def test_tenant_comes_from_token_only(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    response = await api_client.get(
        "/api/v1/clients?tenant_id=globex", headers=auth_headers(tenant_id="acme-law")
    )

    assert response.status_code == 200
    assert {call.tenant_id for call in fake_router.calls} == {"acme-law"}
    assert all("tenant_globex" not in call.query for call in fake_router.calls)


async def test_invalid_tenant_claim_is_bad_request(api_client: AsyncClient, auth_headers):
    response = await api_client.get("/api/v1/clients", headers=auth_headers(tenant_id="bad tenant"))

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "Invalid tenant identifier"
    assert "request_id" in body


# --- CRUD ---


async def test_list_clients(api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers):
    fake_router.respond("COUNT(*) AS total", [{"total": 1}])
    fake_router.respond("ORDER BY created_at DESC", [_client_row(tags='["vip"]')])

    response = await api_client.get(
        "/api/v1/clients",
        params={"status": "active", "tags": ["vip", "tax"], "page": 1, "limit": 10},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 1
    assert body["page"] == 1
    assert body["limit"] == 10
    assert body["total_pages"] == 1
    assert body["has_next"] is False
    assert body["items"][0]["name"] == "Ada Lovelace"
    assert body["items"][0]["tags"] == ["vip"]
    rows_query = fake_router.statements[0]
    assert rows_query.query.count("tenant_acmelaw.clients") == 1
    assert rows_query.params["f_tags"] == ["vip", "tax"]


async def test_list_limit_is_capped(api_client: AsyncClient, auth_headers):
    response = await api_client.get("/api/v1/clients?limit=500", headers=auth_headers())

    assert response.status_code == 422


async def test_stats_route_not_shadowed_by_id(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond("COUNT(*) AS total", [{"total": 2, "active": 2}])

    response = await api_client.get("/api/v1/clients/stats/overview", headers=auth_headers())

    assert response.status_code == 200
    assert response.json() == {
        "total": 2,
        "active": 2,
        "inactive": 0,
        "pending": 0,
        "this_month": 0,
    }


async def test_get_client(api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers):
    fake_router.respond("WHERE id = :id", [_client_row(address='{"city": "Recife"}')])

    response = await api_client.get("/api/v1/clients/client_1", headers=auth_headers())

    assert response.status_code == 200
    assert response.json()["address"] == {"city": "Recife"}
    assert fake_router.statements[0].params == {"id": "client_1"}


async def test_get_missing_client(api_client: AsyncClient, auth_headers):
    response = await api_client.get("/api/v1/clients/client_404", headers=auth_headers())

    assert response.status_code == 404
    assert response.json()["detail"] == "Client client_404 not found"


async def test_create_client(api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers):
    fake_router.respond(
        "INSERT INTO",
        lambda _q, p: [_client_row(p["id"], tags=p["v_tags"], status=p["v_status"])],
    )

    response = await api_client.post(
        "/api/v1/clients",
        json={"name": "Ada Lovelace", "email": "ada@example.com", "tags": ["vip"]},
        headers=auth_headers(user_id="user-9"),
    )

    assert response.status_code == 201
    body = response.json()
    assert body["id"].startswith("client_")
    assert body["tags"] == ["vip"]
    assert body["status"] == "active"
    assert fake_router.statements[0].params["created_by"] == "user-9"


async def test_create_client_validation(api_client: AsyncClient, auth_headers):
    response = await api_client.post(
        "/api/v1/clients",
        json={"name": "Ada", "email": "not-an-email"},
        headers=auth_headers(),
    )

    assert response.status_code == 422


@pytest.mark.parametrize("method", ["put", "patch"])
async def test_update_client(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers, method: str
):
    fake_router.respond("UPDATE", [_client_row(status="inactive")])

    response = await api_client.request(
        method.upper(),
        "/api/v1/clients/client_1",
        json={"status": "inactive"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert response.json()["status"] == "inactive"
    assert fake_router.statements[0].params == {"id": "client_1", "v_status": "inactive"}


async def test_update_with_empty_body(api_client: AsyncClient, auth_headers):
    response = await api_client.patch("/api/v1/clients/client_1", json={}, headers=auth_headers())

    assert response.status_code == 400
    body = response.json()
    assert body["detail"] == "No fields to update"
    assert "request_id" in body


async def test_update_missing_client(api_client: AsyncClient, auth_headers):
    response = await api_client.patch(
        "/api/v1/clients/client_404", json={"notes": "x"}, headers=auth_headers()
    )

    assert response.status_code == 404


async def test_update_rejects_null_for_required_field(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    response = await api_client.patch(
        "/api/v1/clients/client_1", json={"name": None}, headers=auth_headers()
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Fields cannot be null: name"
    assert fake_router.statements == []


async def test_delete_client(api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers):
    fake_router.respond("SET is_active = FALSE", [{"id": "client_1"}])

    response = await api_client.delete("/api/v1/clients/client_1", headers=auth_headers())

    assert response.status_code == 204
    assert response.content == b""


async def test_delete_missing_client(api_client: AsyncClient, auth_headers):
    response = await api_client.delete("/api/v1/clients/client_404", headers=auth_headers())

    assert response.status_code == 404


async def test_query_failure_is_generic_500(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    def fail(_query, _params):
        raise QueryExecutionError("acme-law", 'relation "tenant_acmelaw.clients" does not exist')

    fake_router.respond("WHERE id = :id", fail)

    response = await api_client.get("/api/v1/clients/client_1", headers=auth_headers())

    assert response.status_code == 500
    body = response.json()
    assert body["detail"] == "Internal server error"
    assert "tenant_acmelaw" not in response.text
    assert body["request_id"]


# --- Account-type gate ---


@pytest.mark.parametrize("path", ["/api/v1/transactions", "/api/v1/invoices"])
@pytest.mark.parametrize("account_type", [None, "SIMPLES", "composta"])
async def test_finance_requires_account_type(
    api_client: AsyncClient, auth_headers, path: str, account_type: str | None
):
    response = await api_client.get(path, headers=auth_headers(account_type=account_type))

    assert response.status_code == 403


@pytest.mark.parametrize("account_type", ["COMPOSTA", "GERENCIAL"])
async def test_finance_allowed_account_types(
    api_client: AsyncClient, auth_headers, account_type: str
):
    response = await api_client.get(
        "/api/v1/transactions", headers=auth_headers(account_type=account_type)
    )

    assert response.status_code == 200


async def test_non_finance_resources_open_to_any_account(api_client: AsyncClient, auth_headers):
    response = await api_client.get("/api/v1/tasks", headers=auth_headers(account_type=None))

    assert response.status_code == 200


# --- Entity-specific routes ---


async def test_transactions_by_category(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond(
        "GROUP BY",
        [{"category_id": "cat_fees", "category": "Fees", "amount": "900.00", "count": 3}],
    )

    response = await api_client.get(
        "/api/v1/transactions/stats/by-category?type=income&date_from=2026-01-01",
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert response.json() == [
        {"category_id": "cat_fees", "category": "Fees", "amount": 900.0, "count": 3}
    ]


async def test_invoice_mark_sent(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond(
        "email_sent = TRUE",
        [
            stored_row(
                "invoice_1",
                number="2026-001",
                title="Retainer",
                client_name="Ada Lovelace",
                amount="1200.00",
                due_date="2026-02-01",
                status="sent",
                email_sent=True,
            )
        ],
    )

    response = await api_client.post("/api/v1/invoices/invoice_1/mark-sent", headers=auth_headers())

    assert response.status_code == 200
    body = response.json()
    assert body["status"] == "sent"
    assert body["email_sent"] is True
    assert body["amount"] == 1200.0


async def test_invoice_reminder_missing(api_client: AsyncClient, auth_headers):
    response = await api_client.post(
        "/api/v1/invoices/invoice_404/reminders", headers=auth_headers()
    )

    assert response.status_code == 404


async def test_duplicate_invoice_number_conflicts(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond("WHERE number = :number", [{"id": "invoice_1"}])

    response = await api_client.post(
        "/api/v1/invoices",
        json={
            "number": "2026-001",
            "title": "Retainer",
            "client_name": "Ada Lovelace",
            "amount": "1200.00",
            "due_date": "2026-02-01",
        },
        headers=auth_headers(),
    )

    assert response.status_code == 409


async def test_invoice_update_with_null_title_is_not_a_conflict(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    response = await api_client.patch(
        "/api/v1/invoices/invoice_1",
        json={"number": "INV-9", "title": None},
        headers=auth_headers(),
    )

    assert response.status_code == 400
    assert response.json()["detail"] == "Fields cannot be null: title"


@pytest.mark.parametrize(
    ("sqlstate", "expected_status"),
    [("23505", 409), ("23514", 500), (None, 500)],
)
async def test_invoice_update_conflict_only_on_unique_violation(
    api_client: AsyncClient,
    fake_router: FakeQueryRouter,
    auth_headers,
    sqlstate: str | None,
    expected_status: int,
):
    def fail(_query, _params):
        raise QueryExecutionError("acme-law", "constraint failed", sqlstate=sqlstate)

    fake_router.respond("UPDATE", fail)

    response = await api_client.patch(
        "/api/v1/invoices/invoice_1", json={"number": "INV-9"}, headers=auth_headers()
    )

    assert response.status_code == expected_status


async def test_notification_unread_count(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond("COUNT(*) AS count", [{"count": 4}])

    response = await api_client.get(
        "/api/v1/notifications/unread-count", headers=auth_headers(user_id="user-7")
    )

    assert response.status_code == 200
    assert response.json() == {"count": 4}
    assert fake_router.statements[0].params == {"user_id": "user-7"}


async def test_mark_all_notifications_read(
    api_client: AsyncClient, fake_router: FakeQueryRouter, auth_headers
):
    fake_router.respond("SET read = TRUE", [{"id": "n1"}])

    response = await api_client.patch(
        "/api/v1/notifications/mark-all-read", headers=auth_headers()
    )

    assert response.status_code == 200
    assert response.json() == {"updated": 1}


async def test_health(api_client: AsyncClient):
    response = await api_client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"
