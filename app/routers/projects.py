# =============================================================================
# app/routers/projects.py - Project CRUD Endpoints
# =============================================================================
# GET routes are public; POST, PATCH and DELETE require the admin token.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from app.auth import require_admin
from app.dependencies import JsonBody, SessionDep
from core.models import Page, ProjectCreate, ProjectResponse, ProjectUpdate
from core.services import ProjectService
from lib.validators import MISSING, parse_pagination, parse_search

router = APIRouter()

ProjectId = Annotated[str, Path(description="Project id")]


@router.get("", response_model=Page[ProjectResponse])
async def list_projects(request: Request, session: SessionDep):
    """
    List projects with pagination.

    Query parameters: page (default 1), limit (default 10, max 100) and
    search (case-insensitive match on title). Newest year first.
    """
    query = request.query_params
    return await ProjectService(session).list_projects(
        pagination=parse_pagination(query),
        search=parse_search(query.get("search", MISSING)),
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: ProjectId, session: SessionDep):
    return await ProjectService(session).get_project(project_id)


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_project(payload: JsonBody, session: SessionDep):
    """
    Create a project.

    Rich-text fields (description, overviewHtml, challengeHtml,
    solutionHtml) are sanitized before they are stored.
    """
    data = ProjectCreate.from_payload(payload)
    return await ProjectService(session).create_project(data)


@router.patch(
    "/{project_id}",
    response_model=ProjectResponse,
    dependencies=[Depends(require_admin)],
)
async def update_project(project_id: ProjectId, payload: JsonBody, session: SessionDep):
    """Update the supplied fields of a project."""
    data = ProjectUpdate.from_payload(payload)
    return await ProjectService(session).update_project(project_id, data)


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_project(project_id: ProjectId, session: SessionDep):
    await ProjectService(session).delete_project(project_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
