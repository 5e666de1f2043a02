"""Tenant-scoped repositories (one table per tenant schema)."""

from src.lexdesk.repositories.tenant.clients import ClientRepository
from src.lexdesk.repositories.tenant.invoices import InvoiceRepository
from src.lexdesk.repositories.tenant.notifications import NotificationRepository
from src.lexdesk.repositories.tenant.projects import ProjectRepository
from src.lexdesk.repositories.tenant.tasks import TaskRepository
from src.lexdesk.repositories.tenant.transactions import TransactionRepository

__all__ = [
    "ClientRepository",
    "InvoiceRepository",
    "NotificationRepository",
    "ProjectRepository",
    "TaskRepository",
    "TransactionRepository",
]
