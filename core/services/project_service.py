# =============================================================================
# core/services/project_service.py - Project Business Logic
# =============================================================================
# Handles project CRUD operations.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from core.entities import Project
from core.models.common import Page, PaginationMeta, dump_links
from core.models.project import HTML_FIELDS, ProjectCreate, ProjectResponse, ProjectUpdate
from lib.sanitizer import sanitize_rich_html
from lib.validators import Pagination

logger = logging.getLogger(__name__)


class ProjectService:
    """
    Service for project operations.

    Provides a clean interface between API routes and database.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_or_404(self, project_id: str) -> Project:
        project = await self.session.get(Project, project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def list_projects(
        self,
        pagination: Pagination,
        search: str | None = None,
    ) -> Page[ProjectResponse]:
        """
        List projects, newest year first.

        Args:
            pagination: page window from parse_pagination()
            search: optional case-insensitive substring of the title

        Returns:
            Page with data and meta (page, limit, total, totalPages)
        """
        conditions = []
        if search:
            conditions.append(Project.title.icontains(search, autoescape=True))

        # Count and page share the session's transaction
        total = await self.session.scalar(
            select(func.count()).select_from(Project).where(*conditions)
        )
        rows = await self.session.scalars(
            select(Project)
            .where(*conditions)
            .order_by(Project.year.desc(), Project.created_at.desc())
            .offset(pagination.skip)
            .limit(pagination.limit)
        )

        return Page[ProjectResponse](
            data=[ProjectResponse.model_validate(row) for row in rows],
            meta=PaginationMeta.build(pagination, total or 0),
        )

    async def get_project(self, project_id: str) -> ProjectResponse:
        return ProjectResponse.model_validate(await self._get_or_404(project_id))

    async def create_project(self, data: ProjectCreate) -> ProjectResponse:
        project = Project(
            title=data.title,
            description=sanitize_rich_html(data.description),
            year=data.year,
            tags=data.tags,
            client=data.client,
            duration=data.duration,
            overview_html=sanitize_rich_html(data.overview_html),
            challenge_html=sanitize_rich_html(data.challenge_html),
            solution_html=sanitize_rich_html(data.solution_html),
            links=dump_links(data.links),
            images=data.images,
        )

        self.session.add(project)
        await self.session.commit()
        await self.session.refresh(project)

        logger.info(f"Created project: {project.id}")
        return ProjectResponse.model_validate(project)

    async def update_project(self, project_id: str, data: ProjectUpdate) -> ProjectResponse:
        project = await self._get_or_404(project_id)

        changes = data.changes()
        for field in HTML_FIELDS:
            if field in changes:
                changes[field] = sanitize_rich_html(changes[field])
        if "links" in changes:
            changes["links"] = dump_links(changes["links"])

        for field, value in changes.items():
            setattr(project, field, value)

        await self.session.commit()
        await self.session.refresh(project)

        logger.info(f"Updated project {project_id}: {sorted(changes)}")
        return ProjectResponse.model_validate(project)

    async def delete_project(self, project_id: str) -> None:
        project = await self._get_or_404(project_id)

        await self.session.delete(project)
        await self.session.commit()

        logger.info(f"Deleted project: {project_id}")
