# =============================================================================
# app/routers/experiences.py - Work Experience Endpoints
# =============================================================================
# The list is returned whole, ordered by sortOrder, then newest start month.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from app.auth import require_admin
from app.dependencies import JsonBody, SessionDep
from core.models import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from core.services import ExperienceService
from lib.validators import MISSING, parse_search

router = APIRouter()

ExperienceId = Annotated[str, Path(description="Experience id")]


@router.get("", response_model=list[ExperienceResponse])
async def list_experiences(request: Request, session: SessionDep):
    """List experiences; ?search= matches company or role."""
    search = parse_search(request.query_params.get("search", MISSING))
    return await ExperienceService(session).list_experiences(search=search)


@router.get("/{experience_id}", response_model=ExperienceResponse)
async def get_experience(experience_id: ExperienceId, session: SessionDep):
    return await ExperienceService(session).get_experience(experience_id)


@router.post(
    "",
    response_model=ExperienceResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_experience(payload: JsonBody, session: SessionDep):
    """
    Create an experience entry.

    endMonth must not precede startMonth, and a current role has no
    endMonth.
    """
    data = ExperienceCreate.from_payload(payload)
    return await ExperienceService(session).create_experience(data)


@router.patch(
    "/{experience_id}",
    response_model=ExperienceResponse,
    dependencies=[Depends(require_admin)],
)
async def update_experience(experience_id: ExperienceId, payload: JsonBody, session: SessionDep):
    """
    Update an experience entry.

    Chronology is checked against the stored entry merged with the
    supplied fields.
    """
    data = ExperienceUpdate.from_payload(payload)
    return await ExperienceService(session).update_experience(experience_id, data)


@router.delete(
    "/{experience_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_experience(experience_id: ExperienceId, session: SessionDep):
    await ExperienceService(session).delete_experience(experience_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
