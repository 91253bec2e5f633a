# =============================================================================
# core/models/blog.py - Blog Schemas
# =============================================================================

from datetime import datetime
from typing import Any

from lib.validators import (
    MISSING,
    require_at_least_one_field,
    validate_image_links,
    validate_optional_image_links,
    validate_optional_string,
    validate_required_string,
)

from .category import CategorySummary
from .common import ApiModel, InputModel

BLOG_FIELDS = ["title", "description", "images", "categoryId"]


class BlogCreate(InputModel):
    title: str
    description: str
    images: list[str]
    category_id: str

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BlogCreate":
        return cls._from_values({
            "title": validate_required_string(payload.get("title"), "title"),
            "description": validate_required_string(payload.get("description"), "description"),
            "images": validate_image_links(payload.get("images")),
            "category_id": validate_required_string(payload.get("categoryId"), "categoryId"),
        })


class BlogUpdate(InputModel):
    title: str | None = None
    description: str | None = None
    images: list[str] | None = None
    category_id: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "BlogUpdate":
        require_at_least_one_field(payload, BLOG_FIELDS)
        return cls._from_values({
            "title": validate_optional_string(payload.get("title", MISSING), "title"),
            "description": validate_optional_string(payload.get("description", MISSING), "description"),
            "images": validate_optional_image_links(payload.get("images", MISSING)),
            "category_id": validate_optional_string(payload.get("categoryId", MISSING), "categoryId"),
        })


class BlogResponse(ApiModel):
    id: str
    title: str
    description: str
    images: list[str]
    category_id: str
    category: CategorySummary
    created_at: datetime
    updated_at: datetime
