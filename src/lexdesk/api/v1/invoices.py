"""Invoice endpoints - tenant-scoped receivables.

Only COMPOSTA and GERENCIAL accounts have access to financial data.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import FinancePrincipal, InvoiceRepo
from src.lexdesk.core.exceptions import QueryExecutionError
from src.lexdesk.schemas.invoice import (
    InvoiceCreate,
    InvoiceFilters,
    InvoiceRead,
    InvoiceStats,
    InvoiceUpdate,
)
from src.lexdesk.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/invoices", tags=["invoices"])

_FORBIDDEN = {403: {"description": "Account type has no access to financial data"}}


def _not_found(invoice_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Invoice {invoice_id} not found",
    )


def _duplicate_number(number: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_409_CONFLICT,
        detail=f"Invoice with number '{number}' already exists",
    )


@router.get(
    "",
    response_model=PaginatedResponse[InvoiceRead],
    summary="List invoices",
    responses={200: {"description": "Paginated list of invoices"}, **_FORBIDDEN},
)
async def list_invoices(
    repo: InvoiceRepo,
    principal: FinancePrincipal,
    filters: Annotated[InvoiceFilters, Query()],
) -> PaginatedResponse[InvoiceRead]:
    page = await repo.list(principal.tenant_id, filters)
    return PaginatedResponse[InvoiceRead].from_page(page)


@router.get(
    "/stats/overview",
    response_model=InvoiceStats,
    summary="Invoice statistics",
    responses=_FORBIDDEN,
)
async def invoice_stats(repo: InvoiceRepo, principal: FinancePrincipal) -> InvoiceStats:
    return await repo.stats(principal.tenant_id)


@router.get(
    "/{invoice_id}",
    response_model=InvoiceRead,
    summary="Get invoice",
    responses={
        200: {"description": "Invoice details"},
        404: {"description": "Invoice not found"},
        **_FORBIDDEN,
    },
)
async def get_invoice(
    invoice_id: str,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> InvoiceRead:
    invoice = await repo.get_by_id(principal.tenant_id, invoice_id)
    if invoice is None:
        raise _not_found(invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.post(
    "",
    response_model=InvoiceRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create invoice",
    responses={
        201: {"description": "Invoice created"},
        409: {"description": "Invoice with this number already exists"},
        **_FORBIDDEN,
    },
)
async def create_invoice(
    request: InvoiceCreate,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> InvoiceRead:
    if await repo.get_by_number(principal.tenant_id, request.number) is not None:
        raise _duplicate_number(request.number)

    try:
        invoice = await repo.create(principal.tenant_id, request, created_by=principal.user_id)
    except QueryExecutionError as e:
        # Fallback in case of race condition
        if e.is_unique_violation:
            raise _duplicate_number(request.number) from e
        raise
    return InvoiceRead.model_validate(invoice)


@router.put("/{invoice_id}", response_model=InvoiceRead, summary="Update invoice")
@router.patch(
    "/{invoice_id}",
    response_model=InvoiceRead,
    summary="Update invoice",
    responses={
        200: {"description": "Invoice updated"},
        400: {"description": "No fields to update"},
        404: {"description": "Invoice not found"},
        409: {"description": "Invoice with this number already exists"},
        **_FORBIDDEN,
    },
)
async def update_invoice(
    invoice_id: str,
    request: InvoiceUpdate,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> InvoiceRead:
    try:
        invoice = await repo.update(principal.tenant_id, invoice_id, request)
    except QueryExecutionError as e:
        if request.number is not None and e.is_unique_violation:
            raise _duplicate_number(request.number) from e
        raise
    if invoice is None:
        raise _not_found(invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.delete(
    "/{invoice_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete invoice",
    responses={
        204: {"description": "Invoice deleted"},
        404: {"description": "Invoice not found"},
        **_FORBIDDEN,
    },
)
async def delete_invoice(
    invoice_id: str,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> None:
    if not await repo.soft_delete(principal.tenant_id, invoice_id):
        raise _not_found(invoice_id)


@router.post(
    "/{invoice_id}/mark-sent",
    response_model=InvoiceRead,
    summary="Mark invoice as sent",
    description="Record that the invoice was emailed. A draft invoice moves to 'sent'.",
    responses={404: {"description": "Invoice not found"}, **_FORBIDDEN},
)
async def mark_invoice_sent(
    invoice_id: str,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> InvoiceRead:
    invoice = await repo.mark_sent(principal.tenant_id, invoice_id)
    if invoice is None:
        raise _not_found(invoice_id)
    return InvoiceRead.model_validate(invoice)


@router.post(
    "/{invoice_id}/reminders",
    response_model=InvoiceRead,
    summary="Record a payment reminder",
    responses={404: {"description": "Invoice not found"}, **_FORBIDDEN},
)
async def record_invoice_reminder(
    invoice_id: str,
    repo: InvoiceRepo,
    principal: FinancePrincipal,
) -> InvoiceRead:
    invoice = await repo.increment_reminders(principal.tenant_id, invoice_id)
    if invoice is None:
        raise _not_found(invoice_id)
    return InvoiceRead.model_validate(invoice)
