"""Task schemas for API request/response."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.lexdesk.schemas.common import JsonList, ListParams, TenantRecordRead
from src.lexdesk.schemas.project import Priority

TaskStatus = Literal["not_started", "in_progress", "completed", "on_hold", "cancelled"]


class Subtask(BaseModel):
    title: str
    completed: bool = False


class TaskBase(BaseModel):
    description: str | None = None
    project_id: str | None = None
    project_title: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    assigned_to: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    estimated_hours: Decimal | None = Field(default=None, ge=0)
    actual_hours: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None


class TaskCreate(TaskBase):
    """Schema for creating a task."""

    title: str = Field(min_length=1, max_length=200)
    status: TaskStatus = "not_started"
    priority: Priority = "medium"
    progress: int = Field(default=0, ge=0, le=100)
    tags: list[str] = Field(default_factory=list)
    subtasks: list[Subtask] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Task title cannot be empty or whitespace only")
        return v


class TaskUpdate(TaskBase):
    """Schema for updating a task."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    status: TaskStatus | None = None
    priority: Priority | None = None
    progress: int | None = Field(default=None, ge=0, le=100)
    tags: list[str] | None = None
    subtasks: list[Subtask] | None = None


class TaskRead(TenantRecordRead):
    """Schema for reading a task."""

    title: str
    description: str | None = None
    project_id: str | None = None
    project_title: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    assigned_to: str | None = None
    status: str | None = None
    priority: str | None = None
    start_date: date | None = None
    end_date: date | None = None
    estimated_hours: float | None = None
    actual_hours: float | None = None
    progress: int | None = None
    tags: JsonList = Field(default_factory=list)
    notes: str | None = None
    subtasks: JsonList = Field(default_factory=list)


class TaskFilters(ListParams):
    status: TaskStatus | None = None
    priority: Priority | None = None
    assigned_to: str | None = None
    project_id: str | None = None
    client_id: str | None = None
    search: str | None = Field(default=None, description="Matches title or description")
    tags: list[str] | None = None
    date_from: date | None = Field(default=None, description="End date on or after")
    date_to: date | None = Field(default=None, description="End date on or before")


class TaskStats(BaseModel):
    total: int = 0
    completed: int = 0
    in_progress: int = 0
    not_started: int = 0
    urgent: int = 0
