# =============================================================================
# core/services/blog_service.py - Blog Business Logic
# =============================================================================
# Blogs belong to exactly one category. Every blog returned by this service
# embeds its category as {id, name}.
# =============================================================================

import logging

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.exceptions import BadRequestError, NotFoundError
from core.entities import Blog, Category
from core.models.blog import BlogCreate, BlogResponse, BlogUpdate
from core.models.common import Page, PaginationMeta
from lib.validators import Pagination

logger = logging.getLogger(__name__)


def _with_category(statement: Select) -> Select:
    return statement.options(selectinload(Blog.category))


class BlogService:
    """Service for blog operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_or_404(self, blog_id: str) -> Blog:
        blog = await self.session.scalar(
            _with_category(select(Blog).where(Blog.id == blog_id))
            .execution_options(populate_existing=True)
        )
        if blog is None:
            raise NotFoundError("Blog not found")
        return blog

    async def _ensure_category_exists(self, category_id: str) -> None:
        if await self.session.get(Category, category_id) is None:
            raise BadRequestError("Invalid categoryId")

    async def list_blogs(
        self,
        pagination: Pagination,
        search: str | None = None,
        category_id: str | None = None,
    ) -> Page[BlogResponse]:
        """
        List blogs, newest first.

        Args:
            pagination: page window from parse_pagination()
            search: optional case-insensitive substring of the title
            category_id: optional category filter

        Returns:
            Page with data and meta
        """
        conditions = []
        if search:
            conditions.append(Blog.title.icontains(search, autoescape=True))
        if category_id:
            conditions.append(Blog.category_id == category_id)

        # Count and page share the session's transaction
        total = await self.session.scalar(
            select(func.count()).select_from(Blog).where(*conditions)
        )
        rows = await self.session.scalars(
            _with_category(select(Blog))
            .where(*conditions)
            .order_by(Blog.created_at.desc())
            .offset(pagination.skip)
            .limit(pagination.limit)
        )

        return Page[BlogResponse](
            data=[BlogResponse.model_validate(row) for row in rows],
            meta=PaginationMeta.build(pagination, total or 0),
        )

    async def get_blog(self, blog_id: str) -> BlogResponse:
        return BlogResponse.model_validate(await self._get_or_404(blog_id))

    async def create_blog(self, data: BlogCreate) -> BlogResponse:
        await self._ensure_category_exists(data.category_id)

        blog = Blog(
            title=data.title,
            description=data.description,
            images=data.images,
            category_id=data.category_id,
        )

        self.session.add(blog)
        await self.session.commit()

        logger.info(f"Created blog: {blog.id} in category {blog.category_id}")
        return BlogResponse.model_validate(await self._get_or_404(blog.id))

    async def update_blog(self, blog_id: str, data: BlogUpdate) -> BlogResponse:
        blog = await self._get_or_404(blog_id)

        changes = data.changes()
        if "category_id" in changes:
            await self._ensure_category_exists(changes["category_id"])

        for field, value in changes.items():
            setattr(blog, field, value)

        await self.session.commit()

        logger.info(f"Updated blog {blog_id}: {sorted(changes)}")
        return BlogResponse.model_validate(await self._get_or_404(blog_id))

    async def delete_blog(self, blog_id: str) -> None:
        blog = await self._get_or_404(blog_id)

        await self.session.delete(blog)
        await self.session.commit()

        logger.info(f"Deleted blog: {blog_id}")
