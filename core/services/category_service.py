# =============================================================================
# core/services/category_service.py - Category Business Logic
# =============================================================================
# Categories own blogs. A category with blogs cannot be deleted; this is
# checked here first and backed by the ON DELETE RESTRICT foreign key.
# Duplicate names surface as IntegrityError and become CONFLICT in the
# error normalizer.
# =============================================================================

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import ConflictError, NotFoundError
from core.entities import Blog, Category
from core.models.category import (
    CategoryCreate,
    CategoryDetail,
    CategoryResponse,
    CategoryUpdate,
)

logger = logging.getLogger(__name__)


class CategoryService:
    """Service for category operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_or_404(self, category_id: str) -> Category:
        category = await self.session.get(Category, category_id)
        if category is None:
            raise NotFoundError("Category not found")
        return category

    async def _count_blogs(self, category_id: str) -> int:
        count = await self.session.scalar(
            select(func.count()).select_from(Blog).where(Blog.category_id == category_id)
        )
        return count or 0

    async def list_categories(self) -> list[CategoryResponse]:
        rows = await self.session.scalars(select(Category).order_by(Category.name.asc()))
        return [CategoryResponse.model_validate(row) for row in rows]

    async def get_category(self, category_id: str) -> CategoryDetail:
        category = await self._get_or_404(category_id)
        detail = CategoryDetail.model_validate(category)
        return detail.model_copy(update={"blog_count": await self._count_blogs(category_id)})

    async def create_category(self, data: CategoryCreate) -> CategoryResponse:
        category = Category(name=data.name, description=data.description)

        self.session.add(category)
        await self.session.commit()
        await self.session.refresh(category)

        logger.info(f"Created category: {category.id} ({category.name})")
        return CategoryResponse.model_validate(category)

    async def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryResponse:
        category = await self._get_or_404(category_id)

        changes = data.changes()
        for field, value in changes.items():
            setattr(category, field, value)

        await self.session.commit()
        await self.session.refresh(category)

        logger.info(f"Updated category {category_id}: {sorted(changes)}")
        return CategoryResponse.model_validate(category)

    async def delete_category(self, category_id: str) -> None:
        """
        Delete a category.

        Raises:
            NotFoundError: category does not exist
            ConflictError: at least one blog still references it
        """
        category = await self._get_or_404(category_id)

        if await self._count_blogs(category_id) > 0:
            raise ConflictError("Cannot delete category with existing blogs")

        await self.session.delete(category)
        await self.session.commit()

        logger.info(f"Deleted category: {category_id}")
