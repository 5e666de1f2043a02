"""Pagination schemas for offset-based pagination."""

from typing import TYPE_CHECKING, Generic, TypeVar

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from src.lexdesk.repositories.base import Page

T = TypeVar("T")


class PaginatedResponse(BaseModel, Generic[T]):
    """Generic paginated response with page/limit pagination."""

    items: list[T]
    page: int = Field(description="Current page, starting at 1")
    limit: int = Field(description="Page size")
    total: int = Field(description="Number of matching records")
    total_pages: int
    has_next: bool = Field(default=False, description="Whether a later page exists.")
    has_prev: bool = Field(default=False, description="Whether an earlier page exists.")

    @classmethod
    def from_page(cls, page: "Page") -> "PaginatedResponse[T]":
        return cls(
            items=page.items,
            page=page.page,
            limit=page.limit,
            total=page.total,
            total_pages=page.total_pages,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )
