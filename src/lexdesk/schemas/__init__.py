from src.lexdesk.schemas.client import (
    ClientCreate,
    ClientFilters,
    ClientRead,
    ClientStats,
    ClientUpdate,
)
from src.lexdesk.schemas.invoice import (
    InvoiceCreate,
    InvoiceFilters,
    InvoiceRead,
    InvoiceStats,
    InvoiceUpdate,
)
from src.lexdesk.schemas.notification import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationFilters,
    NotificationRead,
    UnreadCount,
)
from src.lexdesk.schemas.pagination import PaginatedResponse
from src.lexdesk.schemas.project import (
    ProjectCreate,
    ProjectFilters,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
)
from src.lexdesk.schemas.task import TaskCreate, TaskFilters, TaskRead, TaskStats, TaskUpdate
from src.lexdesk.schemas.transaction import (
    CategoryBreakdownParams,
    CategoryTotal,
    DateRange,
    TransactionCreate,
    TransactionFilters,
    TransactionRead,
    TransactionStats,
    TransactionUpdate,
)

__all__ = [
    # Client
    "ClientCreate",
    "ClientFilters",
    "ClientRead",
    "ClientStats",
    "ClientUpdate",
    # Invoice
    "InvoiceCreate",
    "InvoiceFilters",
    "InvoiceRead",
    "InvoiceStats",
    "InvoiceUpdate",
    # Notification
    "MarkAllReadResult",
    "NotificationCreate",
    "NotificationFilters",
    "NotificationRead",
    "UnreadCount",
    # Pagination
    "PaginatedResponse",
    # Project
    "ProjectCreate",
    "ProjectFilters",
    "ProjectRead",
    "ProjectStats",
    "ProjectUpdate",
    # Task
    "TaskCreate",
    "TaskFilters",
    "TaskRead",
    "TaskStats",
    "TaskUpdate",
    # Transaction
    "CategoryBreakdownParams",
    "CategoryTotal",
    "DateRange",
    "TransactionCreate",
    "TransactionFilters",
    "TransactionRead",
    "TransactionStats",
    "TransactionUpdate",
]
