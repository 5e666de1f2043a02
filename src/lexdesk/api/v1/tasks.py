"""Task endpoints - tenant-scoped work items."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import CurrentPrincipal, TaskRepo
from src.lexdesk.schemas.pagination import PaginatedResponse
from src.lexdesk.schemas.task import (
    TaskCreate,
    TaskFilters,
    TaskRead,
    TaskStats,
    TaskUpdate,
)

router = APIRouter(prefix="/tasks", tags=["tasks"])


def _not_found(task_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Task {task_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[TaskRead],
    summary="List tasks",
    description="List active tasks of the caller's tenant with filters and pagination.",
    responses={
        200: {"description": "Paginated list of tasks"},
    },
)
async def list_tasks(
    repo: TaskRepo,
    principal: CurrentPrincipal,
    filters: Annotated[TaskFilters, Query()],
) -> PaginatedResponse[TaskRead]:
    page = await repo.list(principal.tenant_id, filters)
    return PaginatedResponse[TaskRead].from_page(page)


@router.get(
    "/stats/overview",
    response_model=TaskStats,
    summary="Task statistics",
)
async def task_stats(repo: TaskRepo, principal: CurrentPrincipal) -> TaskStats:
    return await repo.stats(principal.tenant_id)


@router.get(
    "/{task_id}",
    response_model=TaskRead,
    summary="Get task",
    responses={
        200: {"description": "Task details"},
        404: {"description": "Task not found"},
    },
)
async def get_task(
    task_id: str,
    repo: TaskRepo,
    principal: CurrentPrincipal,
) -> TaskRead:
    task = await repo.get_by_id(principal.tenant_id, task_id)
    if task is None:
        raise _not_found(task_id)
    return TaskRead.model_validate(task)


@router.post(
    "",
    response_model=TaskRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create task",
    responses={
        201: {"description": "Task created"},
    },
)
async def create_task(
    request: TaskCreate,
    repo: TaskRepo,
    principal: CurrentPrincipal,
) -> TaskRead:
    task = await repo.create(principal.tenant_id, request, created_by=principal.user_id)
    return TaskRead.model_validate(task)


@router.put("/{task_id}", response_model=TaskRead, summary="Update task")
@router.patch(
    "/{task_id}",
    response_model=TaskRead,
    summary="Update task",
    description="Update the fields sent in the body; omitted fields are left unchanged.",
    responses={
        200: {"description": "Task updated"},
        400: {"description": "No fields to update"},
        404: {"description": "Task not found"},
    },
)
async def update_task(
    task_id: str,
    request: TaskUpdate,
    repo: TaskRepo,
    principal: CurrentPrincipal,
) -> TaskRead:
    task = await repo.update(principal.tenant_id, task_id, request)
    if task is None:
        raise _not_found(task_id)
    return TaskRead.model_validate(task)


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete task",
    description="Soft-delete a task. The row is kept but hidden from every read.",
    responses={
        204: {"description": "Task deleted"},
        404: {"description": "Task not found"},
    },
)
async def delete_task(
    task_id: str,
    repo: TaskRepo,
    principal: CurrentPrincipal,
) -> None:
    if not await repo.soft_delete(principal.tenant_id, task_id):
        raise _not_found(task_id)
