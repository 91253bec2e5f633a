# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - common.py: shared bases, links, pagination envelope
# - project.py: Project create/update/response schemas
# - category.py: Category schemas
# - blog.py: Blog schemas
# - experience.py: Experience schemas
#
# These models define the "contract" between API and clients. Request
# models are built with from_payload(), which runs lib.validators.
# =============================================================================

from .common import ApiModel, ExternalLink, InputModel, Page, PaginationMeta
from .project import ProjectCreate, ProjectResponse, ProjectUpdate
from .category import (
    CategoryCreate,
    CategoryDetail,
    CategoryResponse,
    CategorySummary,
    CategoryUpdate,
)
from .blog import BlogCreate, BlogResponse, BlogUpdate
from .experience import ExperienceCreate, ExperienceResponse, ExperienceUpdate

__all__ = [
    # Common
    "ApiModel",
    "ExternalLink",
    "InputModel",
    "Page",
    "PaginationMeta",
    # Project
    "ProjectCreate",
    "ProjectResponse",
    "ProjectUpdate",
    # Category
    "CategoryCreate",
    "CategoryDetail",
    "CategoryResponse",
    "CategorySummary",
    "CategoryUpdate",
    # Blog
    "BlogCreate",
    "BlogResponse",
    "BlogUpdate",
    # Experience
    "ExperienceCreate",
    "ExperienceResponse",
    "ExperienceUpdate",
]
