"""Transaction endpoints - tenant-scoped cash flow.

Only COMPOSTA and GERENCIAL accounts have access to financial data.
"""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import FinancePrincipal, TransactionRepo
from src.lexdesk.schemas.pagination import PaginatedResponse
from src.lexdesk.schemas.transaction import (
    CategoryBreakdownParams,
    CategoryTotal,
    DateRange,
    TransactionCreate,
    TransactionFilters,
    TransactionRead,
    TransactionStats,
    TransactionUpdate,
)

router = APIRouter(prefix="/transactions", tags=["transactions"])

_FORBIDDEN = {403: {"description": "Account type has no access to financial data"}}


def _not_found(transaction_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Transaction {transaction_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[TransactionRead],
    summary="List transactions",
    description="List active transactions, newest date first, with filters and pagination.",
    responses={200: {"description": "Paginated list of transactions"}, **_FORBIDDEN},
)
async def list_transactions(
    repo: TransactionRepo,
    principal: FinancePrincipal,
    filters: Annotated[TransactionFilters, Query()],
) -> PaginatedResponse[TransactionRead]:
    page = await repo.list(principal.tenant_id, filters)
    return PaginatedResponse[TransactionRead].from_page(page)


@router.get(
    "/stats/overview",
    response_model=TransactionStats,
    summary="Cash-flow statistics",
    description="Income, expense and counts, optionally restricted to a date range.",
    responses=_FORBIDDEN,
)
async def transaction_stats(
    repo: TransactionRepo,
    principal: FinancePrincipal,
    period: Annotated[DateRange, Query()],
) -> TransactionStats:
    return await repo.stats(principal.tenant_id, period.date_from, period.date_to)


@router.get(
    "/stats/by-category",
    response_model=list[CategoryTotal],
    summary="Totals per category",
    responses=_FORBIDDEN,
)
async def transactions_by_category(
    repo: TransactionRepo,
    principal: FinancePrincipal,
    params: Annotated[CategoryBreakdownParams, Query()],
) -> list[CategoryTotal]:
    return await repo.by_category(
        principal.tenant_id,
        type=params.type,
        date_from=params.date_from,
        date_to=params.date_to,
    )


@router.get(
    "/recurring",
    response_model=list[TransactionRead],
    summary="List recurring transactions",
    responses=_FORBIDDEN,
)
async def list_recurring_transactions(
    repo: TransactionRepo,
    principal: FinancePrincipal,
) -> list[TransactionRead]:
    rows = await repo.recurring(principal.tenant_id)
    return [TransactionRead.model_validate(row) for row in rows]


@router.get(
    "/{transaction_id}",
    response_model=TransactionRead,
    summary="Get transaction",
    responses={
        200: {"description": "Transaction details"},
        404: {"description": "Transaction not found"},
        **_FORBIDDEN,
    },
)
async def get_transaction(
    transaction_id: str,
    repo: TransactionRepo,
    principal: FinancePrincipal,
) -> TransactionRead:
    transaction = await repo.get_by_id(principal.tenant_id, transaction_id)
    if transaction is None:
        raise _not_found(transaction_id)
    return TransactionRead.model_validate(transaction)


@router.post(
    "",
    response_model=TransactionRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create transaction",
    responses={201: {"description": "Transaction created"}, **_FORBIDDEN},
)
async def create_transaction(
    request: TransactionCreate,
    repo: TransactionRepo,
    principal: FinancePrincipal,
) -> TransactionRead:
    transaction = await repo.create(principal.tenant_id, request, created_by=principal.user_id)
    return TransactionRead.model_validate(transaction)


@router.put("/{transaction_id}", response_model=TransactionRead, summary="Update transaction")
@router.patch(
    "/{transaction_id}",
    response_model=TransactionRead,
    summary="Update transaction",
    responses={
        200: {"description": "Transaction updated"},
        400: {"description": "No fields to update"},
        404: {"description": "Transaction not found"},
        **_FORBIDDEN,
    },
)
async def update_transaction(
    transaction_id: str,
    request: TransactionUpdate,
    repo: TransactionRepo,
    principal: FinancePrincipal,
) -> TransactionRead:
    transaction = await repo.update(principal.tenant_id, transaction_id, request)
    if transaction is None:
        raise _not_found(transaction_id)
    return TransactionRead.model_validate(transaction)


@router.delete(
    "/{transaction_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete transaction",
    responses={
        204: {"description": "Transaction deleted"},
        404: {"description": "Transaction not found"},
        **_FORBIDDEN,
    },
)
async def delete_transaction(
    transaction_id: str,
    repo: TransactionRepo,
    principal: FinancePrincipal,
) -> None:
    if not await repo.soft_delete(principal.tenant_id, transaction_id):
        raise _not_found(transaction_id)
