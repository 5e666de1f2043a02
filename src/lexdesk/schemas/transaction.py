"""Transaction (cash flow) schemas for API request/response."""

import datetime as dt
from decimal import Decimal
from typing import Literal

from pydantic import BaseModel, Field, model_validator

from src.lexdesk.schemas.common import JsonList, ListParams, TenantRecordRead

TransactionType = Literal["income", "expense"]
TransactionStatus = Literal["pending", "confirmed", "cancelled"]
PaymentMethod = Literal[
    "pix", "credit_card", "debit_card", "bank_transfer", "boleto", "cash", "check"
]
RecurringFrequency = Literal["monthly", "quarterly", "yearly"]


class TransactionBase(BaseModel):
    payment_method: PaymentMethod | None = None
    project_id: str | None = None
    project_title: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    notes: str | None = None
    recurring_frequency: RecurringFrequency | None = None


class TransactionCreate(TransactionBase):
    """Schema for creating a transaction."""

    type: TransactionType
    amount: Decimal = Field(gt=0, max_digits=15, decimal_places=2)
    category_id: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    date: dt.date
    status: TransactionStatus = "confirmed"
    tags: list[str] = Field(default_factory=list)
    is_recurring: bool = False

    @model_validator(mode="after")
    def check_recurring(self) -> "TransactionCreate":
        if self.is_recurring and self.recurring_frequency is None:
            raise ValueError("Recurring transactions require a recurring_frequency")
        return self


class TransactionUpdate(TransactionBase):
    """Schema for updating a transaction."""

    type: TransactionType | None = None
    amount: Decimal | None = Field(default=None, gt=0, max_digits=15, decimal_places=2)
    category_id: str | None = Field(default=None, min_length=1)
    category: str | None = Field(default=None, min_length=1)
    description: str | None = Field(default=None, min_length=1)
    date: dt.date | None = None
    status: TransactionStatus | None = None
    tags: list[str] | None = None
    is_recurring: bool | None = None


class TransactionRead(TenantRecordRead):
    """Schema for reading a transaction."""

    type: str
    amount: float
    category_id: str
    category: str
    description: str
    date: dt.date
    payment_method: str | None = None
    status: str | None = None
    project_id: str | None = None
    project_title: str | None = None
    client_id: str | None = None
    client_name: str | None = None
    tags: JsonList = Field(default_factory=list)
    notes: str | None = None
    is_recurring: bool = False
    recurring_frequency: str | None = None


class TransactionFilters(ListParams):
    type: TransactionType | None = None
    status: TransactionStatus | None = None
    category_id: str | None = None
    search: str | None = Field(default=None, description="Matches description or category")
    project_id: str | None = None
    client_id: str | None = None
    tags: list[str] | None = None
    date_from: dt.date | None = None
    date_to: dt.date | None = None
    payment_method: PaymentMethod | None = None
    is_recurring: bool | None = None


class DateRange(BaseModel):
    date_from: dt.date | None = None
    date_to: dt.date | None = None


class CategoryBreakdownParams(DateRange):
    type: TransactionType | None = None


class TransactionStats(BaseModel):
    total_income: float = 0.0
    total_expense: float = 0.0
    net_amount: float = 0.0
    total_transactions: int = 0
    confirmed_transactions: int = 0
    pending_transactions: int = 0
    this_month_income: float = 0.0
    this_month_expense: float = 0.0
    recurring_transactions: int = 0


class CategoryTotal(BaseModel):
    category_id: str
    category: str
    amount: float = 0.0
    count: int = 0
