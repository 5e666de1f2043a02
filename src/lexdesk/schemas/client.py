"""Client schemas for API request/response."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, EmailStr, Field, field_validator

from src.lexdesk.schemas.common import Currency, JsonDict, JsonList, ListParams, TenantRecordRead

ClientStatus = Literal["active", "inactive", "pending"]


class Address(BaseModel):
    """Postal address stored as a JSON object."""

    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    country: str | None = None


class ClientBase(BaseModel):
    phone: str | None = Field(default=None, max_length=50)
    organization: str | None = Field(default=None, max_length=200)
    address: Address | None = None
    budget: Decimal | None = Field(default=None, ge=0)
    notes: str | None = None
    cpf: str | None = Field(default=None, max_length=20)
    rg: str | None = Field(default=None, max_length=30)
    professional_title: str | None = Field(default=None, max_length=100)
    marital_status: str | None = Field(default=None, max_length=50)
    birth_date: date | None = None


class ClientCreate(ClientBase):
    """Schema for creating a client."""

    name: str = Field(min_length=1, max_length=200)
    email: EmailStr
    currency: Currency = "BRL"
    status: ClientStatus = "active"
    tags: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Client name cannot be empty or whitespace only")
        return v


class ClientUpdate(ClientBase):
    """Schema for updating a client. Only fields that are sent are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    email: EmailStr | None = None
    currency: Currency | None = None
    status: ClientStatus | None = None
    tags: list[str] | None = None


class ClientRead(TenantRecordRead):
    """Schema for reading a client."""

    name: str
    email: str | None = None
    phone: str | None = None
    organization: str | None = None
    address: JsonDict | None = None
    budget: float | None = None
    currency: str | None = None
    status: str | None = None
    tags: JsonList = Field(default_factory=list)
    notes: str | None = None
    cpf: str | None = None
    rg: str | None = None
    professional_title: str | None = None
    marital_status: str | None = None
    birth_date: date | None = None


class ClientFilters(ListParams):
    """Query filters for listing clients."""

    status: ClientStatus | None = None
    search: str | None = Field(default=None, description="Matches name or email")
    tags: list[str] | None = Field(default=None, description="Matches any of the tags")


class ClientStats(BaseModel):
    total: int = 0
    active: int = 0
    inactive: int = 0
    pending: int = 0
    this_month: int = 0
