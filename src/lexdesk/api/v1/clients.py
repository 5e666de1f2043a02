"""Client endpoints - tenant-scoped CRM records."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import ClientRepo, CurrentPrincipal
from src.lexdesk.schemas.client import (
    ClientCreate,
    ClientFilters,
    ClientRead,
    ClientStats,
    ClientUpdate,
)
from src.lexdesk.schemas.pagination import PaginatedResponse

router = APIRouter(prefix="/clients", tags=["clients"])


def _not_found(client_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Client {client_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[ClientRead],
    summary="List clients",
    description="List active clients of the caller's tenant with filters and pagination.",
    responses={
        200: {"description": "Paginated list of clients"},
    },
)
async def list_clients(
    repo: ClientRepo,
    principal: CurrentPrincipal,
    filters: Annotated[ClientFilters, Query()],
) -> PaginatedResponse[ClientRead]:
    page = await repo.list(principal.tenant_id, filters)
    return PaginatedResponse[ClientRead].from_page(page)


@router.get(
    "/stats/overview",
    response_model=ClientStats,
    summary="Client statistics",
)
async def client_stats(repo: ClientRepo, principal: CurrentPrincipal) -> ClientStats:
    return await repo.stats(principal.tenant_id)


@router.get(
    "/{client_id}",
    response_model=ClientRead,
    summary="Get client",
    responses={
        200: {"description": "Client details"},
        404: {"description": "Client not found"},
    },
)
async def get_client(
    client_id: str,
    repo: ClientRepo,
    principal: CurrentPrincipal,
) -> ClientRead:
    client = await repo.get_by_id(principal.tenant_id, client_id)
    if client is None:
        raise _not_found(client_id)
    return ClientRead.model_validate(client)


@router.post(
    "",
    response_model=ClientRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create client",
    responses={
        201: {"description": "Client created"},
    },
)
async def create_client(
    request: ClientCreate,
    repo: ClientRepo,
    principal: CurrentPrincipal,
) -> ClientRead:
    client = await repo.create(principal.tenant_id, request, created_by=principal.user_id)
    return ClientRead.model_validate(client)


@router.put("/{client_id}", response_model=ClientRead, summary="Update client")
@router.patch(
    "/{client_id}",
    response_model=ClientRead,
    summary="Update client",
    description="Update the fields sent in the body; omitted fields are left unchanged.",
    responses={
        200: {"description": "Client updated"},
        400: {"description": "No fields to update"},
        404: {"description": "Client not found"},
    },
)
async def update_client(
    client_id: str,
    request: ClientUpdate,
    repo: ClientRepo,
    principal: CurrentPrincipal,
) -> ClientRead:
    client = await repo.update(principal.tenant_id, client_id, request)
    if client is None:
        raise _not_found(client_id)
    return ClientRead.model_validate(client)


@router.delete(
    "/{client_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete client",
    description="Soft-delete a client. The row is kept but hidden from every read.",
    responses={
        204: {"description": "Client deleted"},
        404: {"description": "Client not found"},
    },
)
async def delete_client(
    client_id: str,
    repo: ClientRepo,
    principal: CurrentPrincipal,
) -> None:
    if not await repo.soft_delete(principal.tenant_id, client_id):
        raise _not_found(client_id)
