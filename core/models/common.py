# =============================================================================
# core/models/common.py - Shared Schema Pieces
# =============================================================================
# Base classes and small models reused by every resource:
# - ApiModel: camelCase on the wire, snake_case in Python
# - InputModel: frozen request models built by from_payload()
# - ExternalLink, PaginationMeta, Page
# =============================================================================

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from lib.validators import MISSING, Pagination

T = TypeVar("T")


class ApiModel(BaseModel):
    """Response model: reads ORM attributes, serializes as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class InputModel(BaseModel):
    """
    Validated, immutable request body.

    Subclasses build instances with from_payload(); only fields present in
    the payload are passed in, so model_fields_set tells updates which
    columns to touch.
    """

    model_config = ConfigDict(frozen=True)

    @classmethod
    def _from_values(cls, values: dict[str, Any]):
        return cls(**{key: value for key, value in values.items() if value is not MISSING})

    def changes(self) -> dict[str, Any]:
        """Fields supplied by the client, by attribute name."""
        return {name: getattr(self, name) for name in self.model_fields_set}


class ExternalLink(ApiModel):
    label: str
    url: str


class PaginationMeta(ApiModel):
    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, pagination: Pagination, total: int) -> "PaginationMeta":
        return cls(
            page=pagination.page,
            limit=pagination.limit,
            total=total,
            total_pages=math.ceil(total / pagination.limit) or 1,
        )


class Page(ApiModel, Generic[T]):
    """Paginated list response: {"data": [...], "meta": {...}}."""
    data: list[T]
    meta: PaginationMeta


def dump_links(links: list[ExternalLink]) -> list[dict[str, str]]:
    """Links as plain dicts for the JSON column."""
    return [link.model_dump() for link in links]
