"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.lexdesk.api.dependencies.db import QueryRouter
from src.lexdesk.repositories import (
    ClientRepository,
    InvoiceRepository,
    NotificationRepository,
    ProjectRepository,
    TaskRepository,
    TransactionRepository,
)


def get_client_repository(router: QueryRouter) -> ClientRepository:
    return ClientRepository(router)


def get_project_repository(router: QueryRouter) -> ProjectRepository:
    return ProjectRepository(router)


def get_task_repository(router: QueryRouter) -> TaskRepository:
    return TaskRepository(router)


def get_transaction_repository(router: QueryRouter) -> TransactionRepository:
    return TransactionRepository(router)


def get_invoice_repository(router: QueryRouter) -> InvoiceRepository:
    return InvoiceRepository(router)


def get_notification_repository(router: QueryRouter) -> NotificationRepository:
    return NotificationRepository(router)


ClientRepo = Annotated[ClientRepository, Depends(get_client_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
TaskRepo = Annotated[TaskRepository, Depends(get_task_repository)]
TransactionRepo = Annotated[TransactionRepository, Depends(get_transaction_repository)]
InvoiceRepo = Annotated[InvoiceRepository, Depends(get_invoice_repository)]
NotificationRepo = Annotated[NotificationRepository, Depends(get_notification_repository)]
