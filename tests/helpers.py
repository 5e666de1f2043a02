"""Test doubles for the tenant data-access layer."""

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from src.lexdesk.core.db.router import render_query

Responder = Callable[[str, dict[str, Any]], list[dict[str, Any]]]


@dataclass
class RecordedQuery:
    tenant_id: str
    query: str
    params: dict[str, Any]


@dataclass
class FakeQueryRouter:
    """Records every statement and answers from a list of responders.

    DDL statements return no rows. For anything else the first responder
    whose key is contained in the rendered query decides the rows.
    """

    calls: list[RecordedQuery] = field(default_factory=list)
    responders: list[tuple[str, Responder]] = field(default_factory=list)

    def respond(self, fragment: str, rows: list[dict[str, Any]] | Responder) -> None:
        responder = rows if callable(rows) else (lambda _q, _p, rows=rows: rows)
        self.responders.insert(0, (fragment, responder))

    async def execute_in_schema(
        self,
        tenant_id: str,
        query_template: str,
        params: Mapping[str, Any] | None = None,
    ) -> list[dict[str, Any]]:
        query = render_query(tenant_id, query_template)
        bound = dict(params or {})
        self.calls.append(RecordedQuery(tenant_id, query, bound))
        if query.lstrip().startswith("CREATE"):
            return []
        for fragment, responder in self.responders:
            if fragment in query:
                return responder(query, bound)
        return []

    @property
    def statements(self) -> list[RecordedQuery]:
        """Recorded calls without the idempotent DDL."""
        return [c for c in self.calls if not c.query.lstrip().startswith("CREATE")]


def stored_row(record_id: str, **fields: Any) -> dict[str, Any]:
    """A row as the database returns it, with bookkeeping columns filled in."""
    return {
        "id": record_id,
        "created_by": "user-1",
        "created_at": "2026-01-15T10:00:00",
        "updated_at": "2026-01-15T10:00:00",
        "is_active": True,
        **fields,
    }
