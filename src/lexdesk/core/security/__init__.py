"""Security utilities - tokens and validators.

Re-exports all security-related functions for convenience.
"""

from src.lexdesk.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
)
from src.lexdesk.core.security.validators import (
    tenant_schema_name,
    validate_schema_name,
    validate_tenant_id,
)

__all__ = [
    # Tokens
    "ACCESS_TOKEN_TYPE",
    "create_access_token",
    "decode_token",
    # Validators
    "tenant_schema_name",
    "validate_schema_name",
    "validate_tenant_id",
]
