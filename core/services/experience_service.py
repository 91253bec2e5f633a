# =============================================================================
# core/services/experience_service.py - Experience Business Logic
# =============================================================================
# Work history CRUD. Updates re-check chronology against the merged state:
# incoming fields win, stored fields fill the gaps.
# =============================================================================

import logging

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import NotFoundError
from core.entities import Experience
from core.models.common import dump_links
from core.models.experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate
from lib.sanitizer import sanitize_rich_html
from lib.validators import validate_experience_chronology

logger = logging.getLogger(__name__)


class ExperienceService:
    """Service for experience operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _get_or_404(self, experience_id: str) -> Experience:
        experience = await self.session.get(Experience, experience_id)
        if experience is None:
            raise NotFoundError("Experience not found")
        return experience

    async def list_experiences(self, search: str | None = None) -> list[ExperienceResponse]:
        """All entries in display order, optionally filtered by company or role."""
        statement = select(Experience).order_by(
            Experience.sort_order.asc(),
            Experience.start_month.desc(),
            Experience.created_at.desc(),
        )
        if search:
            statement = statement.where(
                or_(
                    Experience.company.icontains(search, autoescape=True),
                    Experience.role.icontains(search, autoescape=True),
                )
            )

        rows = await self.session.scalars(statement)
        return [ExperienceResponse.model_validate(row) for row in rows]

    async def get_experience(self, experience_id: str) -> ExperienceResponse:
        return ExperienceResponse.model_validate(await self._get_or_404(experience_id))

    async def create_experience(self, data: ExperienceCreate) -> ExperienceResponse:
        experience = Experience(
            company=data.company,
            role=data.role,
            employment_type=data.employment_type,
            location=data.location,
            start_month=data.start_month,
            end_month=None if data.is_current else data.end_month,
            is_current=data.is_current,
            summary_html=sanitize_rich_html(data.summary_html),
            highlights=data.highlights,
            tech_tags=data.tech_tags,
            links=dump_links(data.links),
            sort_order=data.sort_order,
        )

        self.session.add(experience)
        await self.session.commit()
        await self.session.refresh(experience)

        logger.info(f"Created experience: {experience.id} ({experience.company})")
        return ExperienceResponse.model_validate(experience)

    async def update_experience(self, experience_id: str, data: ExperienceUpdate) -> ExperienceResponse:
        """
        Apply a partial update.

        endMonth resolution:
        - sent explicitly (value or null): use it
        - not sent, entry now current: cleared
        - not sent, entry not current: keep the stored value

        Raises:
            NotFoundError: entry does not exist
            BadRequestError: merged state breaks chronology
        """
        experience = await self._get_or_404(experience_id)
        changes = data.changes()

        start_month = changes.get("start_month", experience.start_month)
        is_current = changes.get("is_current", experience.is_current)
        if "end_month" in changes:
            end_month = changes["end_month"]
        else:
            end_month = None if is_current else experience.end_month

        validate_experience_chronology(start_month, end_month, is_current)

        if "end_month" in changes or "is_current" in changes:
            changes["end_month"] = end_month
        if "summary_html" in changes:
            changes["summary_html"] = sanitize_rich_html(changes["summary_html"])
        if "links" in changes:
            changes["links"] = dump_links(changes["links"])

        for field, value in changes.items():
            setattr(experience, field, value)

        await self.session.commit()
        await self.session.refresh(experience)

        logger.info(f"Updated experience {experience_id}: {sorted(changes)}")
        return ExperienceResponse.model_validate(experience)

    async def delete_experience(self, experience_id: str) -> None:
        experience = await self._get_or_404(experience_id)

        await self.session.delete(experience)
        await self.session.commit()

        logger.info(f"Deleted experience: {experience_id}")
