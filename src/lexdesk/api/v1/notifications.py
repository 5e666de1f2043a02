"""Notification endpoints - per-user inbox inside the caller's tenant."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import CurrentPrincipal, NotificationRepo
from src.lexdesk.schemas.notification import (
    MarkAllReadResult,
    NotificationCreate,
    NotificationFilters,
    NotificationRead,
    UnreadCount,
)
from src.lexdesk.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/notifications", tags=["notifications"])


def _not_found(notification_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Notification {notification_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[NotificationRead],
    summary="List my notifications",
    description="List the caller's notifications, newest first.",
)
async def list_notifications(
    repo: NotificationRepo,
    principal: CurrentPrincipal,
    filters: Annotated[NotificationFilters, Query()],
) -> PaginatedResponse[NotificationRead]:
    page = await repo.list_for_user(principal.tenant_id, principal.user_id, filters)
    return PaginatedResponse[NotificationRead].from_page(page)


@router.get("/unread-count", response_model=UnreadCount, summary="Count unread notifications")
async def unread_notification_count(
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> UnreadCount:
    count = await repo.unread_count(principal.tenant_id, principal.user_id)
    return UnreadCount(count=count)


@router.patch(
    "/mark-all-read",
    response_model=MarkAllReadResult,
    summary="Mark all notifications read",
)
async def mark_all_notifications_read(
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> MarkAllReadResult:
    updated = await repo.mark_all_read(principal.tenant_id, principal.user_id)
    return MarkAllReadResult(updated=updated)


@router.get(
    "/{notification_id}",
    response_model=NotificationRead,
    summary="Get notification",
    responses={404: {"description": "Notification not found"}},
)
async def get_notification(
    notification_id: str,
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> NotificationRead:
    notification = await repo.get_for_user(
        principal.tenant_id, notification_id, principal.user_id
    )
    if notification is None:
        raise _not_found(notification_id)
    return NotificationRead.model_validate(notification)


@router.post(
    "",
    response_model=NotificationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Send notification",
    description="Send a notification to a user of the same tenant.",
)
async def create_notification(
    request: NotificationCreate,
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> NotificationRead:
    notification = await repo.notify(principal.tenant_id, request, actor_id=principal.user_id)
    return NotificationRead.model_validate(notification)


@router.patch(
    "/{notification_id}/read",
    response_model=NotificationRead,
    summary="Mark notification read",
    responses={404: {"description": "Notification not found"}},
)
async def mark_notification_read(
    notification_id: str,
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> NotificationRead:
    notification = await repo.mark_read(principal.tenant_id, notification_id, principal.user_id)
    if notification is None:
        raise _not_found(notification_id)
    return NotificationRead.model_validate(notification)


@router.delete(
    "/{notification_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete notification",
    responses={404: {"description": "Notification not found"}},
)
async def delete_notification(
    notification_id: str,
    repo: NotificationRepo,
    principal: CurrentPrincipal,
) -> None:
    if not await repo.delete_for_user(principal.tenant_id, notification_id, principal.user_id):
        raise _not_found(notification_id)
