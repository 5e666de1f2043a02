"""Shared schema building blocks for tenant records."""

import json
from datetime import datetime
from typing import Annotated, Any, Literal

from pydantic import BaseModel, BeforeValidator, Field, field_validator

from src.lexdesk.core.config import get_settings


def _parse_json(value: Any) -> Any:
    # JSONB columns may come back as text depending on the driver codecs
    if isinstance(value, (str, bytes, bytearray)):
        return json.loads(value)
    return value


JsonList = Annotated[list[Any], BeforeValidator(_parse_json)]
JsonDict = Annotated[dict[str, Any], BeforeValidator(_parse_json)]

Currency = Literal["BRL", "USD", "EUR"]


class ListParams(BaseModel):
    """Offset pagination query parameters.

    The default page size and the cap come from ``Settings``.
    """

    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    limit: int = Field(
        default_factory=lambda: get_settings().default_page_size,
        ge=1,
        description="Max items per page",
    )

    @field_validator("limit")
    @classmethod
    def cap_limit(cls, v: int) -> int:
        max_page_size = get_settings().max_page_size
        if v > max_page_size:
            raise ValueError(f"limit must be at most {max_page_size}")
        return v


class TenantRecordRead(BaseModel):
    """Bookkeeping columns present on every tenant table."""

    id: str
    created_by: str
    created_at: datetime | None = None
    updated_at: datetime | None = None
    is_active: bool = True
