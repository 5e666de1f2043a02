"""JWT helpers - access tokens carry the tenant the request is scoped to."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import JWTError, jwt

from src.lexdesk.core.config import get_settings

ACCESS_TOKEN_TYPE = "access"
DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES = 15


def create_access_token(
    subject: str,
    tenant_id: str,
    account_type: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed access token.

    Tokens are normally issued by the identity service; this helper exists for
    operational scripts and tests that need a token the API will accept.
    """
    settings = get_settings()

    if expires_delta:
        expire = datetime.now(UTC) + expires_delta
    else:
        expire = datetime.now(UTC) + timedelta(minutes=DEFAULT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode: dict[str, Any] = {
        "sub": str(subject),
        "tenant_id": str(tenant_id),
        "exp": expire,
        "type": ACCESS_TOKEN_TYPE,
    }
    if account_type is not None:
        to_encode["account_type"] = account_type

    return jwt.encode(  # type: ignore[no-any-return]
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def decode_token(token: str) -> dict[str, Any] | None:
    """Decode and validate JWT token. Returns None on any error."""
    settings = get_settings()
    try:
        return jwt.decode(  # type: ignore[no-any-return]
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
