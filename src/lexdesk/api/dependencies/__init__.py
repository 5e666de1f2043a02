"""FastAPI dependency injection definitions.

Re-exports all dependencies for convenience.
"""

# Auth
from src.lexdesk.api.dependencies.auth import (
    FINANCE_ACCOUNT_TYPES,
    CurrentPrincipal,
    FinancePrincipal,
    TenantPrincipal,
    get_current_principal,
    require_account_type,
)

# Database
from src.lexdesk.api.dependencies.db import (
    QueryRouter,
    Registry,
    get_connection_registry,
    get_query_router,
)

# Repositories
from src.lexdesk.api.dependencies.repositories import (
    ClientRepo,
    InvoiceRepo,
    NotificationRepo,
    ProjectRepo,
    TaskRepo,
    TransactionRepo,
    get_client_repository,
    get_invoice_repository,
    get_notification_repository,
    get_project_repository,
    get_task_repository,
    get_transaction_repository,
)

__all__ = [
    # Auth
    "FINANCE_ACCOUNT_TYPES",
    "CurrentPrincipal",
    "FinancePrincipal",
    "TenantPrincipal",
    "get_current_principal",
    "require_account_type",
    # Database
    "QueryRouter",
    "Registry",
    "get_connection_registry",
    "get_query_router",
    # Repositories
    "ClientRepo",
    "InvoiceRepo",
    "NotificationRepo",
    "ProjectRepo",
    "TaskRepo",
    "TransactionRepo",
    "get_client_repository",
    "get_invoice_repository",
    "get_notification_repository",
    "get_project_repository",
    "get_task_repository",
    "get_transaction_repository",
]
