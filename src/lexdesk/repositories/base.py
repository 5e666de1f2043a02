"""Generic tenant-table repository.

Every tenant resource (clients, projects, tasks, ...) is one table inside the
tenant's schema with the same bookkeeping columns and the same CRUD shape.
The differences between them are data, captured by an ``EntityDescriptor``;
``TenantTableRepository`` turns a descriptor into SQL templates and runs them
through the ``TenantQueryRouter``.

Table and column names only ever come from descriptors defined in code.
Values are always bound parameters.
"""

import asyncio
import json
import math
import secrets
import string
import time
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, ClassVar, Final

from pydantic import BaseModel

from src.lexdesk.core.config import get_settings
from src.lexdesk.core.db.router import SCHEMA_PLACEHOLDER, TenantQueryRouter
from src.lexdesk.core.exceptions import NoFieldsToUpdate, RequiredFieldNull

ID_SUFFIX_LENGTH: Final[int] = 9
_BASE36_ALPHABET: Final[str] = string.digits + string.ascii_lowercase

PAGINATION_FIELDS: Final[frozenset[str]] = frozenset({"page", "limit"})


def generate_record_id(kind: str) -> str:
    """Generate a primary key of the form ``{kind}_{unix_millis}_{9 base36 chars}``."""
    suffix = "".join(secrets.choice(_BASE36_ALPHABET) for _ in range(ID_SUFFIX_LENGTH))
    return f"{kind}_{int(time.time() * 1000)}_{suffix}"


@dataclass(frozen=True)
class Column:
    """A payload column. ``name`` is both the schema field and the DB column."""

    name: str
    ddl: str
    json: bool = False

    @property
    def nullable(self) -> bool:
        return "NOT NULL" not in self.ddl.upper()


@dataclass(frozen=True)
class EntityDescriptor:
    """Describes one tenant table and how it can be filtered."""

    kind: str
    table: str
    columns: tuple[Column, ...]
    indexes: tuple[str, ...] = ()
    unique_columns: tuple[str, ...] = ()
    search_columns: tuple[str, ...] = ()
    equality_filters: Mapping[str, str] = field(default_factory=dict)
    overlap_filters: Mapping[str, str] = field(default_factory=dict)
    flag_filters: Mapping[str, str] = field(default_factory=dict)
    date_column: str | None = None
    order_by: str = "created_at DESC"

    @property
    def qualified_table(self) -> str:
        return f"{SCHEMA_PLACEHOLDER}.{self.table}"

    @property
    def column_names(self) -> tuple[str, ...]:
        return tuple(c.name for c in self.columns)

    @property
    def json_columns(self) -> frozenset[str]:
        return frozenset(c.name for c in self.columns if c.json)

    @property
    def required_columns(self) -> frozenset[str]:
        return frozenset(c.name for c in self.columns if not c.nullable)

    @property
    def select_list(self) -> str:
        return ", ".join(
            ("id", *self.column_names, "created_by", "created_at", "updated_at", "is_active")
        )


@dataclass
class Page:
    """One page of an offset-paginated listing."""

    items: list[dict[str, Any]]
    page: int
    limit: int
    total: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1


def count_value(row: Mapping[str, Any], key: str) -> int:
    """Read an aggregate count from a stats row, treating NULL as zero."""
    value = row.get(key)
    return int(value) if value is not None else 0


def amount_value(row: Mapping[str, Any], key: str) -> float:
    """Read an aggregate sum from a stats row, treating NULL as zero."""
    value = row.get(key)
    return float(value) if value is not None else 0.0


class TenantTableRepository:
    """CRUD, filtered listing and soft delete for one tenant table.

    Subclasses set ``descriptor`` and add aggregate or entity-specific
    queries. Every public operation first runs ``ensure_schema``.
    """

    descriptor: ClassVar[EntityDescriptor]

    def __init__(self, router: TenantQueryRouter):
        self.router = router

    # -- DDL -----------------------------------------------------------------

    def schema_statements(self) -> list[str]:
        """Idempotent DDL that creates the schema, table and indexes."""
        d = self.descriptor
        column_defs = ["id VARCHAR PRIMARY KEY"]
        for column in d.columns:
            unique = " UNIQUE" if column.name in d.unique_columns else ""
            column_defs.append(f"{column.name} {column.ddl}{unique}")
        column_defs += [
            "created_by VARCHAR NOT NULL",
            "created_at TIMESTAMP DEFAULT NOW()",
            "updated_at TIMESTAMP DEFAULT NOW()",
            "is_active BOOLEAN DEFAULT TRUE",
        ]
        statements = [
            f"CREATE SCHEMA IF NOT EXISTS {SCHEMA_PLACEHOLDER}",
            f"CREATE TABLE IF NOT EXISTS {d.qualified_table} (\n    "
            + ",\n    ".join(column_defs)
            + "\n)",
        ]
        for column in (*d.indexes, "is_active", "created_by"):
            statements.append(
                f"CREATE INDEX IF NOT EXISTS idx_{d.table}_{column} "
                f"ON {d.qualified_table}({column})"
            )
        return statements

    async def ensure_schema(self, tenant_id: str) -> None:
        """Create the tenant schema, table and indexes if they do not exist."""
        for statement in self.schema_statements():
            await self.router.execute_in_schema(tenant_id, statement)

    # -- Reads ---------------------------------------------------------------

    def build_where(self, filters: BaseModel | None) -> tuple[str, dict[str, Any]]:
        """Build a WHERE clause from the filters that are present.

        Filters are ANDed with ``is_active = TRUE``. Unknown filter names are a
        programming error and raise ``ValueError``.
        """
        d = self.descriptor
        conditions = ["is_active = TRUE"]
        params: dict[str, Any] = {}
        if filters is None:
            return "WHERE " + " AND ".join(conditions), params

        values = filters.model_dump(exclude_none=True, exclude=set(PAGINATION_FIELDS))
        for name, value in values.items():
            if name == "search":
                if not value:
                    continue
                params["f_search"] = f"%{value}%"
                conditions.append(
                    "(" + " OR ".join(f"{col} ILIKE :f_search" for col in d.search_columns) + ")"
                )
            elif name in d.equality_filters:
                params[f"f_{name}"] = value
                conditions.append(f"{d.equality_filters[name]} = :f_{name}")
            elif name in d.overlap_filters:
                if not value:
                    continue
                params[f"f_{name}"] = list(value)
                conditions.append(f"{d.overlap_filters[name]} ?| CAST(:f_{name} AS text[])")
            elif name in d.flag_filters:
                if value:
                    conditions.append(d.flag_filters[name])
            elif name in ("date_from", "date_to") and d.date_column:
                operator = ">=" if name == "date_from" else "<="
                params[f"f_{name}"] = value
                conditions.append(f"{d.date_column} {operator} :f_{name}")
            else:
                raise ValueError(f"Unsupported filter for {d.table}: {name}")

        return "WHERE " + " AND ".join(conditions), params

    async def list(
        self,
        tenant_id: str,
        filters: BaseModel | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> Page:
        """List active records matching ``filters`` with offset pagination.

        ``page`` and ``limit`` are read from ``filters`` when it defines them.
        Without either, the configured default page size applies.
        """
        await self.ensure_schema(tenant_id)
        d = self.descriptor

        page = getattr(filters, "page", None) or page
        limit = getattr(filters, "limit", None) or limit or get_settings().default_page_size
        where, params = self.build_where(filters)

        rows_query = (
            f"SELECT {d.select_list} FROM {d.qualified_table} {where} "
            f"ORDER BY {d.order_by} LIMIT :limit OFFSET :offset"
        )
        count_query = f"SELECT COUNT(*) AS total FROM {d.qualified_table} {where}"

        rows, count_rows = await asyncio.gather(
            self.router.execute_in_schema(
                tenant_id, rows_query, {**params, "limit": limit, "offset": (page - 1) * limit}
            ),
            self.router.execute_in_schema(tenant_id, count_query, params),
        )
        total = count_value(count_rows[0], "total") if count_rows else 0
        return Page(items=rows, page=page, limit=limit, total=total)

    async def get_by_id(self, tenant_id: str, record_id: str) -> dict[str, Any] | None:
        """Get an active record by primary key. Soft-deleted records are not returned."""
        await self.ensure_schema(tenant_id)
        d = self.descriptor
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"SELECT {d.select_list} FROM {d.qualified_table} "
            "WHERE id = :id AND is_active = TRUE",
            {"id": record_id},
        )
        return rows[0] if rows else None

    # -- Writes --------------------------------------------------------------

    def _bind(self, column: str, value: Any) -> tuple[str, Any]:
        """Return the SQL expression and bound value for one column."""
        if column in self.descriptor.json_columns:
            encoded = None if value is None else json.dumps(value, default=str)
            return f"CAST(CAST(:v_{column} AS text) AS jsonb)", encoded
        return f":v_{column}", value

    async def create(
        self, tenant_id: str, data: BaseModel, created_by: str
    ) -> dict[str, Any]:
        """Insert a new record and return it as stored.

        Fields left as None are omitted so the column defaults apply.
        """
        await self.ensure_schema(tenant_id)
        d = self.descriptor

        record_id = generate_record_id(d.kind)
        values = data.model_dump(exclude_none=True)
        columns = ["id"]
        expressions = [":id"]
        params: dict[str, Any] = {"id": record_id, "created_by": created_by}
        for column in d.column_names:
            if column not in values:
                continue
            expression, bound = self._bind(column, values[column])
            columns.append(column)
            expressions.append(expression)
            params[f"v_{column}"] = bound
        columns.append("created_by")
        expressions.append(":created_by")

        rows = await self.router.execute_in_schema(
            tenant_id,
            f"INSERT INTO {d.qualified_table} ({', '.join(columns)}) "
            f"VALUES ({', '.join(expressions)}) RETURNING {d.select_list}",
            params,
        )
        return rows[0]

    async def update(
        self, tenant_id: str, record_id: str, data: BaseModel
    ) -> dict[str, Any] | None:
        """Apply a partial update using only the fields explicitly set in ``data``.

        Returns None when the record does not exist or was soft-deleted.

        Raises:
            NoFieldsToUpdate: If ``data`` sets no updatable field.
            RequiredFieldNull: If ``data`` sets a NOT NULL column to None.
        """
        await self.ensure_schema(tenant_id)
        d = self.descriptor

        values = data.model_dump(exclude_unset=True)
        nulled = sorted(c for c in d.required_columns if c in values and values[c] is None)
        if nulled:
            raise RequiredFieldNull(f"Fields cannot be null: {', '.join(nulled)}")

        assignments: list[str] = []
        params: dict[str, Any] = {"id": record_id}
        for column in d.column_names:
            if column not in values:
                continue
            expression, bound = self._bind(column, values[column])
            assignments.append(f"{column} = {expression}")
            params[f"v_{column}"] = bound

        if not assignments:
            raise NoFieldsToUpdate("No fields to update")
        assignments.append("updated_at = NOW()")

        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {d.qualified_table} SET {', '.join(assignments)} "
            f"WHERE id = :id AND is_active = TRUE RETURNING {d.select_list}",
            params,
        )
        return rows[0] if rows else None

    async def soft_delete(self, tenant_id: str, record_id: str) -> bool:
        """Mark a record inactive. Returns False if it was missing or already deleted."""
        await self.ensure_schema(tenant_id)
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"UPDATE {self.descriptor.qualified_table} "
            "SET is_active = FALSE, updated_at = NOW() "
            "WHERE id = :id AND is_active = TRUE RETURNING id",
            {"id": record_id},
        )
        return len(rows) > 0

    async def _aggregate(
        self, tenant_id: str, select: str, where: str = "", params: dict[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a single-row aggregate over active records."""
        await self.ensure_schema(tenant_id)
        rows = await self.router.execute_in_schema(
            tenant_id,
            f"SELECT {select} FROM {self.descriptor.qualified_table} "
            f"WHERE is_active = TRUE{where}",
            params,
        )
        return rows[0] if rows else {}
