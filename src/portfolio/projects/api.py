from __future__ import annotations

from functools import lru_cache
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, Query  # type: ignore[import-not-found]
from sqlalchemy.ext.asyncio import AsyncSession  # type: ignore[import-not-found]
from starlette import status as http_status  # type: ignore[import-not-found]

from portfolio.auth.depends import current_principal_required
from portfolio.auth.gate import Principal
from portfolio.commons.depends import database_session
from portfolio.commons.schemas import (
    DEFAULT_PAGE_LIMIT,
    MAX_PAGE_LIMIT,
    OkResponse,
    Pagination,
    Status,
)
from portfolio.projects.exceptions import (
    PROJECT_NOT_FOUND,
    ProjectsServiceNotFoundException,
)
from portfolio.projects.schemas import (
    CreateProjectRequest,
    ListProjectsResponse,
    ProjectPublic,
    ProjectUpdate,
)
from portfolio.projects.service import ProjectsService

router = APIRouter(prefix="/projects", tags=["projects"])
public_router = APIRouter(prefix="/public/projects", tags=["public"])


@lru_cache
def get_projects_service() -> ProjectsService:
    return ProjectsService.create()


async def _list(
    session: AsyncSession,
    svc: ProjectsService,
    *,
    status: str | None,
    page: int,
    limit: int,
    published_only: bool = False,
) -> ListProjectsResponse:
    views, total = await svc.list_projects(
        session, status=status, page=page, limit=limit, published_only=published_only
    )
    return ListProjectsResponse(
        items=[await v.to_public(session) for v in views],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.get("", response_model=ListProjectsResponse)
async def list_projects(
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
    status: Status | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ListProjectsResponse:
    return await _list(session, svc, status=status, page=page, limit=limit)


@router.get("/{project_id}", response_model=ProjectPublic)
async def get_project(
    project_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
) -> ProjectPublic:
    view = await svc.get_project(session, project_id=project_id)
    return await view.to_public(session)


@router.post("", response_model=ProjectPublic, status_code=http_status.HTTP_201_CREATED)
async def create_project(
    req: CreateProjectRequest,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
) -> ProjectPublic:
    view = await svc.create_project(session, req=req)
    return await view.to_public(session)


@router.put("/{project_id}", response_model=ProjectPublic)
async def update_project(
    project_id: UUID,
    changes: ProjectUpdate,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
) -> ProjectPublic:
    view = await svc.update_project(session, project_id=project_id, changes=changes)
    return await view.to_public(session)


@router.delete("/{project_id}", response_model=OkResponse)
async def delete_project(
    project_id: UUID,
    _: Annotated[Principal, Depends(current_principal_required)],
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
) -> OkResponse:
    await svc.delete_project(session, project_id=project_id)
    return OkResponse(message="Project deleted")


@public_router.get("", response_model=ListProjectsResponse)
async def list_published_projects(
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=DEFAULT_PAGE_LIMIT, ge=1, le=MAX_PAGE_LIMIT),
) -> ListProjectsResponse:
    return await _list(
        session, svc, status="published", page=page, limit=limit, published_only=True
    )


@public_router.get("/{project_id}", response_model=ProjectPublic)
async def get_published_project(
    project_id: UUID,
    session: Annotated[AsyncSession, Depends(database_session)],
    svc: Annotated[ProjectsService, Depends(get_projects_service)],
) -> ProjectPublic:
    view = await svc.get_project(session, project_id=project_id)
    if view.project.status != "published" or view.project.is_draft:
        raise ProjectsServiceNotFoundException("Project not found", PROJECT_NOT_FOUND)
    return await view.to_public(session)
