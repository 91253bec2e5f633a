# =============================================================================
# core/entities.py - ORM Entities
# =============================================================================
# SQLAlchemy models for everything the portfolio stores:
# - Project: portfolio case studies
# - Category / Blog: blog posts grouped by category
# - Experience: work history entries
# - User: admin accounts (login only)
#
# List-valued columns are stored as JSON so the same schema works on
# PostgreSQL and SQLite.
# =============================================================================

import uuid
from datetime import datetime, timezone

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from core.database import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TimestampMixin:
    """id plus creation/update timestamps shared by every entity."""

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
        nullable=False,
    )


class Project(TimestampMixin, Base):
    __tablename__ = "projects"

    title: Mapped[str] = mapped_column(String(160), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[int] = mapped_column(Integer, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    client: Mapped[str | None] = mapped_column(String(120), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(120), nullable=True)
    overview_html: Mapped[str] = mapped_column(Text, default="", nullable=False)
    challenge_html: Mapped[str] = mapped_column(Text, default="", nullable=False)
    solution_html: Mapped[str] = mapped_column(Text, default="", nullable=False)
    links: Mapped[list[dict]] = mapped_column(JSON, default=list, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return f"<Project(id={self.id!r}, title={self.title!r})>"


class Category(TimestampMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # No cascade: categories with blogs cannot be deleted
    blogs: Mapped[list["Blog"]] = relationship(back_populates="category", passive_deletes="all")

    def __repr__(self) -> str:
        return f"<Category(id={self.id!r}, name={self.name!r})>"


class Blog(TimestampMixin, Base):
    __tablename__ = "blogs"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    images: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    category_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("categories.id", ondelete="RESTRICT", onupdate="CASCADE"),
        nullable=False,
        index=True,
    )

    category: Mapped[Category] = relationship(back_populates="blogs")

    def __repr__(self) -> str:
        return f"<Blog(id={self.id!r}, title={self.title!r})>"


class Experience(TimestampMixin, Base):
    __tablename__ = "experiences"

    company: Mapped[str] = mapped_column(String(120), nullable=False)
    role: Mapped[str] = mapped_column(String(120), nullable=False)
    employment_type: Mapped[str | None] = mapped_column(String(80), nullable=True)
    location: Mapped[str | None] = mapped_column(String(120), nullable=True)
    start_month: Mapped[str] = mapped_column(String(7), nullable=False)
    end_month: Mapped[str | None] = mapped_column(String(7), nullable=True)
    is_current: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    summary_html: Mapped[str] = mapped_column(Text, default="", nullable=False)
    highlights: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    tech_tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)
    links: Mapped[list[dict]] = mapped_column(JSON, default=list, nullable=False)
    sort_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Experience(id={self.id!r}, company={self.company!r}, role={self.role!r})>"


class User(TimestampMixin, Base):
    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(255), unique=True, index=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<User(id={self.id!r}, email={self.email!r})>"
