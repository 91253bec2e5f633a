# =============================================================================
# app/routers/categories.py - Blog Category Endpoints
# =============================================================================
# Categories are few, so the list is not paginated.
# A category that still has blogs cannot be deleted (409).
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from app.auth import require_admin
from app.dependencies import JsonBody, SessionDep
from core.models import CategoryCreate, CategoryDetail, CategoryResponse, CategoryUpdate
from core.services import CategoryService

router = APIRouter()

CategoryId = Annotated[str, Path(description="Category id")]


@router.get("", response_model=list[CategoryResponse])
async def list_categories(session: SessionDep):
    """List all categories ordered by name."""
    return await CategoryService(session).list_categories()


@router.get("/{category_id}", response_model=CategoryDetail)
async def get_category(category_id: CategoryId, session: SessionDep):
    """Get a category together with the number of blogs filed under it."""
    return await CategoryService(session).get_category(category_id)


@router.post(
    "",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_category(payload: JsonBody, session: SessionDep):
    """
    Create a category.

    Names are unique; a duplicate surfaces as 409 CONFLICT.
    """
    data = CategoryCreate.from_payload(payload)
    return await CategoryService(session).create_category(data)


@router.patch(
    "/{category_id}",
    response_model=CategoryResponse,
    dependencies=[Depends(require_admin)],
)
async def update_category(category_id: CategoryId, payload: JsonBody, session: SessionDep):
    data = CategoryUpdate.from_payload(payload)
    return await CategoryService(session).update_category(category_id, data)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_category(category_id: CategoryId, session: SessionDep):
    await CategoryService(session).delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
