"""Authentication and authorization dependencies.

The tenant is never taken from the request body or query string. It comes
from the ``tenant_id`` claim of a verified access token.
"""

from collections.abc import Callable, Coroutine
from dataclasses import dataclass
from typing import Annotated, Any, Final

from fastapi import Depends, Header, HTTPException, status

from src.lexdesk.core.logging import bind_tenant_context
from src.lexdesk.core.security import ACCESS_TOKEN_TYPE, decode_token

FINANCE_ACCOUNT_TYPES: Final[frozenset[str]] = frozenset({"COMPOSTA", "GERENCIAL"})


@dataclass(frozen=True)
class TenantPrincipal:
    """The authenticated caller as described by its access token."""

    user_id: str
    tenant_id: str
    account_type: str | None = None


def _unauthorized(detail: str = "Invalid or expired token") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_principal(
    authorization: Annotated[str | None, Header()] = None,
) -> TenantPrincipal:
    """Verify the bearer token and return the caller's user and tenant."""
    if not authorization or not authorization.startswith("Bearer "):
        raise _unauthorized("Missing or invalid authorization header")

    payload = decode_token(authorization[7:])
    if payload is None:
        raise _unauthorized()

    if payload.get("type") != ACCESS_TOKEN_TYPE:
        raise _unauthorized()

    user_id = payload.get("sub")
    tenant_id = payload.get("tenant_id")
    if not user_id or not tenant_id:
        raise _unauthorized()

    principal = TenantPrincipal(
        user_id=str(user_id),
        tenant_id=str(tenant_id),
        account_type=payload.get("account_type"),
    )
    bind_tenant_context(principal.user_id, principal.tenant_id)
    return principal


CurrentPrincipal = Annotated[TenantPrincipal, Depends(get_current_principal)]


def require_account_type(
    *allowed: str,
) -> Callable[[TenantPrincipal], Coroutine[Any, Any, TenantPrincipal]]:
    """Build a dependency that only admits principals with one of ``allowed`` account types."""
    allowed_types = frozenset(allowed)

    async def dependency(principal: CurrentPrincipal) -> TenantPrincipal:
        if principal.account_type not in allowed_types:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Account type does not have access to this resource",
            )
        return principal

    return dependency


FinancePrincipal = Annotated[
    TenantPrincipal, Depends(require_account_type(*FINANCE_ACCOUNT_TYPES))
]
