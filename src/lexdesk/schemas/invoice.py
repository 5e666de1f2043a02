"""Invoice (receivables) schemas for API request/response."""

from datetime import date, datetime
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, EmailStr, Field

from src.lexdesk.schemas.common import Currency, JsonList, ListParams, TenantRecordRead

InvoiceStatus = Literal[
    "draft", "sent", "viewed", "approved", "rejected", "pending", "paid", "overdue", "cancelled"
]
PaymentStatus = Literal["pending", "paid", "partial", "overdue", "cancelled"]
InvoicePaymentMethod = Literal[
    "PIX", "CREDIT_CARD", "DEBIT_CARD", "BANK_TRANSFER", "BOLETO", "CASH", "CHECK"
]


class InvoiceItem(BaseModel):
    description: str
    quantity: float = Field(default=1, gt=0)
    unit_price: float = Field(ge=0)
    total: float | None = None


class InvoiceBase(BaseModel):
    description: str | None = None
    client_id: str | None = None
    client_email: EmailStr | None = None
    client_phone: str | None = None
    notes: str | None = None
    payment_method: InvoicePaymentMethod | None = None
    payment_date: date | None = None


class InvoiceCreate(InvoiceBase):
    """Schema for creating an invoice."""

    number: str = Field(min_length=1, max_length=50)
    title: str = Field(min_length=1, max_length=200)
    client_name: str = Field(min_length=1, max_length=200)
    amount: Decimal = Field(ge=0, max_digits=15, decimal_places=2)
    currency: Currency = "BRL"
    status: InvoiceStatus = "draft"
    due_date: date
    items: list[InvoiceItem] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    payment_status: PaymentStatus = "pending"


class InvoiceUpdate(InvoiceBase):
    """Schema for updating an invoice."""

    number: str | None = Field(default=None, min_length=1, max_length=50)
    title: str | None = Field(default=None, min_length=1, max_length=200)
    client_name: str | None = Field(default=None, min_length=1, max_length=200)
    amount: Decimal | None = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    currency: Currency | None = None
    status: InvoiceStatus | None = None
    due_date: date | None = None
    items: list[InvoiceItem] | None = None
    tags: list[str] | None = None
    payment_status: PaymentStatus | None = None


class InvoiceRead(TenantRecordRead):
    """Schema for reading an invoice."""

    number: str
    title: str
    description: str | None = None
    client_id: str | None = None
    client_name: str
    client_email: str | None = None
    client_phone: str | None = None
    amount: float
    currency: str | None = None
    status: str | None = None
    due_date: date
    items: JsonList = Field(default_factory=list)
    tags: JsonList = Field(default_factory=list)
    notes: str | None = None
    payment_status: str | None = None
    payment_method: str | None = None
    payment_date: date | None = None
    email_sent: bool = False
    email_sent_at: datetime | None = None
    reminders_sent: int = 0
    last_reminder_at: datetime | None = None


class InvoiceFilters(ListParams):
    status: InvoiceStatus | None = None
    payment_status: PaymentStatus | None = None
    search: str | None = Field(default=None, description="Matches number, title or client name")
    client_id: str | None = None
    tags: list[str] | None = None
    date_from: date | None = Field(default=None, description="Due date on or after")
    date_to: date | None = Field(default=None, description="Due date on or before")


class InvoiceStats(BaseModel):
    total: int = 0
    draft: int = 0
    pending: int = 0
    paid: int = 0
    overdue: int = 0
    total_amount: float = 0.0
    paid_amount: float = 0.0
    this_month: int = 0
