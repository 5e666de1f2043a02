from fastapi import APIRouter

from src.lexdesk.api.v1 import clients, invoices, notifications, projects, tasks, transactions

api_router = APIRouter(prefix="/api/v1")
api_router.include_router(clients.router)
api_router.include_router(projects.router)
api_router.include_router(tasks.router)
api_router.include_router(transactions.router)
api_router.include_router(invoices.router)
api_router.include_router(notifications.router)
