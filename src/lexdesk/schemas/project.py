"""Project schemas for API request/response."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from src.lexdesk.schemas.common import Currency, JsonList, ListParams, TenantRecordRead

ProjectStatus = Literal["contacted", "proposal", "won", "lost"]
Priority = Literal["low", "medium", "high", "urgent"]


class Contact(BaseModel):
    name: str
    email: str | None = None
    phone: str | None = None
    role: str | None = None


class ProjectBase(BaseModel):
    description: str | None = None
    client_id: str | None = None
    organization: str | None = Field(default=None, max_length=200)
    address: str | None = None
    budget: Decimal | None = Field(default=None, ge=0)
    start_date: date | None = None
    due_date: date | None = None
    notes: str | None = None


class ProjectCreate(ProjectBase):
    """Schema for creating a project."""

    title: str = Field(min_length=1, max_length=200)
    client_name: str = Field(min_length=1, max_length=200)
    currency: Currency = "BRL"
    status: ProjectStatus = "contacted"
    priority: Priority = "medium"
    tags: list[str] = Field(default_factory=list)
    assigned_to: list[str] = Field(default_factory=list)
    contacts: list[Contact] = Field(default_factory=list)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project title cannot be empty or whitespace only")
        return v


class ProjectUpdate(ProjectBase):
    """Schema for updating a project."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    currency: Currency | None = None
    status: ProjectStatus | None = None
    priority: Priority | None = None
    tags: list[str] | None = None
    assigned_to: list[str] | None = None
    contacts: list[Contact] | None = None


class ProjectRead(TenantRecordRead):
    """Schema for reading a project."""

    title: str
    description: str | None = None
    client_name: str | None = None
    client_id: str | None = None
    organization: str | None = None
    address: str | None = None
    budget: float | None = None
    currency: str | None = None
    status: str | None = None
    priority: str | None = None
    start_date: date | None = None
    due_date: date | None = None
    tags: JsonList = Field(default_factory=list)
    assigned_to: JsonList = Field(default_factory=list)
    notes: str | None = None
    contacts: JsonList = Field(default_factory=list)


class ProjectFilters(ListParams):
    status: ProjectStatus | None = None
    priority: Priority | None = None
    search: str | None = Field(default=None, description="Matches title or client name")
    tags: list[str] | None = None
    assigned_to: list[str] | None = None
    client_id: str | None = None


class ProjectStats(BaseModel):
    total: int = 0
    contacted: int = 0
    proposal: int = 0
    won: int = 0
    lost: int = 0
    total_budget: float = 0.0
    this_month: int = 0
