# =============================================================================
# app/routers/blogs.py - Blog Post Endpoints
# =============================================================================
# Every blog in a response embeds its category as {id, name}.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Request, Response, status

from app.auth import require_admin
from app.dependencies import JsonBody, SessionDep
from core.models import BlogCreate, BlogResponse, BlogUpdate, Page
from core.services import BlogService
from lib.validators import MISSING, parse_pagination, parse_search

router = APIRouter()

BlogId = Annotated[str, Path(description="Blog id")]


@router.get("", response_model=Page[BlogResponse])
async def list_blogs(request: Request, session: SessionDep):
    """
    List blogs with pagination, newest first.

    Query parameters: page, limit, search (title) and categoryId.
    """
    query = request.query_params
    category_id = (query.get("categoryId") or "").strip() or None

    return await BlogService(session).list_blogs(
        pagination=parse_pagination(query),
        search=parse_search(query.get("search", MISSING)),
        category_id=category_id,
    )


@router.get("/{blog_id}", response_model=BlogResponse)
async def get_blog(blog_id: BlogId, session: SessionDep):
    return await BlogService(session).get_blog(blog_id)


@router.post(
    "",
    response_model=BlogResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
async def create_blog(payload: JsonBody, session: SessionDep):
    """
    Create a blog post.

    categoryId must reference an existing category (400 otherwise).
    """
    data = BlogCreate.from_payload(payload)
    return await BlogService(session).create_blog(data)


@router.patch(
    "/{blog_id}",
    response_model=BlogResponse,
    dependencies=[Depends(require_admin)],
)
async def update_blog(blog_id: BlogId, payload: JsonBody, session: SessionDep):
    data = BlogUpdate.from_payload(payload)
    return await BlogService(session).update_blog(blog_id, data)


@router.delete(
    "/{blog_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin)],
)
async def delete_blog(blog_id: BlogId, session: SessionDep):
    await BlogService(session).delete_blog(blog_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
