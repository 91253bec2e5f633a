# =============================================================================
# core/models/category.py - Category Schemas
# =============================================================================

from datetime import datetime
from typing import Any

from lib.validators import (
    MISSING,
    nullable,
    require_at_least_one_field,
    validate_optional_string,
    validate_required_string,
)

from .common import ApiModel, InputModel

CATEGORY_FIELDS = ["name", "description"]


class CategoryCreate(InputModel):
    name: str
    description: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CategoryCreate":
        return cls._from_values({
            "name": validate_required_string(payload.get("name"), "name"),
            "description": validate_optional_string(payload.get("description", MISSING), "description"),
        })


class CategoryUpdate(InputModel):
    name: str | None = None
    description: str | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "CategoryUpdate":
        require_at_least_one_field(payload, CATEGORY_FIELDS)
        return cls._from_values({
            "name": validate_optional_string(payload.get("name", MISSING), "name"),
            # null clears the description
            "description": nullable(validate_optional_string, payload.get("description", MISSING), "description"),
        })


class CategoryResponse(ApiModel):
    id: str
    name: str
    description: str | None = None
    created_at: datetime
    updated_at: datetime


class CategoryDetail(CategoryResponse):
    """Single category, with the number of blogs filed under it."""
    blog_count: int = 0


class CategorySummary(ApiModel):
    """Category as embedded in a blog."""
    id: str
    name: str
