"""Tenant identifier and schema name validators.

``tenant_schema_name`` is the only way a schema name is produced. Nothing else
may concatenate tenant input into SQL text.
"""

import re
from typing import Any, Final

from src.lexdesk.core.exceptions import InvalidTenantId

MAX_SCHEMA_LENGTH: Final[int] = 63  # PostgreSQL identifier limit
MAX_TENANT_ID_LENGTH: Final[int] = 50
TENANT_SCHEMA_PREFIX: Final[str] = "tenant_"
RESERVED_SCHEMAS: Final[frozenset[str]] = frozenset({"public", "information_schema"})
FORBIDDEN_PATTERNS: Final[tuple[str, ...]] = ("pg_", "--", ";", "/*", "*/")
TENANT_ID_REGEX: Final[str] = r"[a-zA-Z0-9-]+"
TENANT_SCHEMA_REGEX: Final[str] = rf"{TENANT_SCHEMA_PREFIX}[a-z0-9]+"

_TENANT_ID_PATTERN: Final[re.Pattern[str]] = re.compile(TENANT_ID_REGEX)
_TENANT_SCHEMA_PATTERN: Final[re.Pattern[str]] = re.compile(TENANT_SCHEMA_REGEX)


def validate_tenant_id(tenant_id: Any) -> str:
    """Validate a tenant identifier and return its normalized schema suffix.

    The identifier must be a string of 1-50 characters drawn from
    ``[a-zA-Z0-9-]``. Hyphens are stripped from the result.

    Raises:
        InvalidTenantId: If the identifier is empty, not a string, too long,
            contains any other character, or is made only of hyphens.

    Examples:
        >>> validate_tenant_id("client-a-1")
        'clienta1'
        >>> validate_tenant_id("a; DROP TABLE x")  # raises InvalidTenantId
    """
    if not isinstance(tenant_id, str) or not tenant_id:
        raise InvalidTenantId("Tenant ID must be a non-empty string")

    if len(tenant_id) > MAX_TENANT_ID_LENGTH:
        raise InvalidTenantId(
            f"Tenant ID exceeds {MAX_TENANT_ID_LENGTH} characters: {len(tenant_id)}"
        )

    if not _TENANT_ID_PATTERN.fullmatch(tenant_id):
        raise InvalidTenantId(
            "Tenant ID may only contain ASCII letters, digits and hyphens"
        )

    suffix = tenant_id.replace("-", "")
    if not suffix:
        raise InvalidTenantId("Tenant ID is empty after removing hyphens")
    return suffix


def tenant_schema_name(tenant_id: Any) -> str:
    """Derive the PostgreSQL schema name for a tenant.

    The suffix is lower-cased because PostgreSQL folds unquoted identifiers,
    so ``Client-A-1`` and ``client-a-1`` address the same ``tenant_clienta1``.
    """
    schema_name = f"{TENANT_SCHEMA_PREFIX}{validate_tenant_id(tenant_id).lower()}"
    validate_schema_name(schema_name)
    return schema_name


def validate_schema_name(schema_name: str) -> None:
    """Validate a schema name follows the strict tenant naming convention.

    Schema names must:
    - Not be a reserved PostgreSQL schema (``public``, ``information_schema``)
    - Start with 'tenant_' prefix
    - Contain only lowercase letters and digits after the prefix
    - Not exceed 63 characters (PostgreSQL limit)
    - Not contain forbidden patterns

    Raises:
        InvalidTenantId: If schema name is invalid
    """
    if schema_name.lower() in RESERVED_SCHEMAS:
        raise InvalidTenantId(f"Schema name is reserved: {schema_name!r}")

    if len(schema_name) > MAX_SCHEMA_LENGTH:
        raise InvalidTenantId(
            f"Schema name exceeds PostgreSQL limit: {len(schema_name)} > {MAX_SCHEMA_LENGTH}"
        )

    if not _TENANT_SCHEMA_PATTERN.fullmatch(schema_name):
        raise InvalidTenantId(
            f"Invalid schema name format: {schema_name!r}. "
            "Must be 'tenant_' followed by lowercase alphanumerics."
        )

    if any(pattern in schema_name.lower() for pattern in FORBIDDEN_PATTERNS):
        raise InvalidTenantId(f"Schema name contains forbidden pattern: {schema_name!r}")
