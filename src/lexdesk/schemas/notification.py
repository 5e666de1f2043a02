"""Notification schemas for API request/response."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from src.lexdesk.schemas.common import JsonDict, ListParams, TenantRecordRead

NotificationType = Literal["task", "invoice", "system", "client", "project"]


class NotificationCreate(BaseModel):
    """Schema for creating a notification addressed to one user."""

    user_id: str = Field(min_length=1)
    type: NotificationType = "system"
    title: str = Field(min_length=1, max_length=200)
    message: str = Field(min_length=1)
    payload: dict[str, Any] = Field(default_factory=dict)
    link: str | None = None


class NotificationRead(TenantRecordRead):
    """Schema for reading a notification."""

    user_id: str
    actor_id: str | None = None
    type: str
    title: str
    message: str
    payload: JsonDict = Field(default_factory=dict)
    link: str | None = None
    read: bool = False


class NotificationFilters(ListParams):
    type: NotificationType | None = None
    unread_only: bool = False


class UnreadCount(BaseModel):
    count: int = 0


class MarkAllReadResult(BaseModel):
    updated: int = 0
