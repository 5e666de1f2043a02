"""Repository layer - tenant data access."""

from src.lexdesk.repositories.base import (
    Column,
    EntityDescriptor,
    Page,
    TenantTableRepository,
    generate_record_id,
)
from src.lexdesk.repositories.tenant import (
    ClientRepository,
    InvoiceRepository,
    NotificationRepository,
    ProjectRepository,
    TaskRepository,
    TransactionRepository,
)

__all__ = [
    # Base
    "Column",
    "EntityDescriptor",
    "Page",
    "TenantTableRepository",
    "generate_record_id",
    # Tenant schema
    "ClientRepository",
    "InvoiceRepository",
    "NotificationRepository",
    "ProjectRepository",
    "TaskRepository",
    "TransactionRepository",
]
