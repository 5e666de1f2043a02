"""Project endpoints - tenant-scoped pipeline deals."""

from typing import Annotated

from fastapi import APIRouter, HTTPException, Query, status

from src.lexdesk.api.dependencies import CurrentPrincipal, ProjectRepo
from src.lexdesk.schemas.pagination import PaginatedResponse
from src.lexdesk.schemas.project import (
    ProjectCreate,
    ProjectFilters,
    ProjectRead,
    ProjectStats,
    ProjectUpdate,
)

router = APIRouter(prefix="/projects", tags=["projects"])


def _not_found(project_id: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Project {project_id} not found",
    )


@router.get(
    "",
    response_model=PaginatedResponse[ProjectRead],
    summary="List projects",
    description="List active projects of the caller's tenant with filters and pagination.",
    responses={
        200: {"description": "Paginated list of projects"},
    },
)
async def list_projects(
    repo: ProjectRepo,
    principal: CurrentPrincipal,
    filters: Annotated[ProjectFilters, Query()],
) -> PaginatedResponse[ProjectRead]:
    page = await repo.list(principal.tenant_id, filters)
    return PaginatedResponse[ProjectRead].from_page(page)


@router.get(
    "/stats/overview",
    response_model=ProjectStats,
    summary="Project statistics",
)
async def project_stats(repo: ProjectRepo, principal: CurrentPrincipal) -> ProjectStats:
    return await repo.stats(principal.tenant_id)


@router.get(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Get project",
    responses={
        200: {"description": "Project details"},
        404: {"description": "Project not found"},
    },
)
async def get_project(
    project_id: str,
    repo: ProjectRepo,
    principal: CurrentPrincipal,
) -> ProjectRead:
    project = await repo.get_by_id(principal.tenant_id, project_id)
    if project is None:
        raise _not_found(project_id)
    return ProjectRead.model_validate(project)


@router.post(
    "",
    response_model=ProjectRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create project",
    responses={
        201: {"description": "Project created"},
    },
)
async def create_project(
    request: ProjectCreate,
    repo: ProjectRepo,
    principal: CurrentPrincipal,
) -> ProjectRead:
    project = await repo.create(principal.tenant_id, request, created_by=principal.user_id)
    return ProjectRead.model_validate(project)


@router.put("/{project_id}", response_model=ProjectRead, summary="Update project")
@router.patch(
    "/{project_id}",
    response_model=ProjectRead,
    summary="Update project",
    description="Update the fields sent in the body; omitted fields are left unchanged.",
    responses={
        200: {"description": "Project updated"},
        400: {"description": "No fields to update"},
        404: {"description": "Project not found"},
    },
)
async def update_project(
    project_id: str,
    request: ProjectUpdate,
    repo: ProjectRepo,
    principal: CurrentPrincipal,
) -> ProjectRead:
    project = await repo.update(principal.tenant_id, project_id, request)
    if project is None:
        raise _not_found(project_id)
    return ProjectRead.model_validate(project)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    description="Soft-delete a project. The row is kept but hidden from every read.",
    responses={
        204: {"description": "Project deleted"},
        404: {"description": "Project not found"},
    },
)
async def delete_project(
    project_id: str,
    repo: ProjectRepo,
    principal: CurrentPrincipal,
) -> None:
    if not await repo.soft_delete(principal.tenant_id, project_id):
        raise _not_found(project_id)
