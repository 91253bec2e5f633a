# =============================================================================
# core/models/project.py - Project Schemas
# =============================================================================
# - ProjectCreate / ProjectUpdate: validated request bodies
# - ProjectResponse: what the API returns
#
# Rich-text fields (description, overviewHtml, challengeHtml, solutionHtml)
# are length-checked here and sanitized by ProjectService before writing.
# =============================================================================

from datetime import datetime
from typing import Any

from lib.validators import (
    MISSING,
    nullable,
    require_at_least_one_field,
    validate_external_links,
    validate_image_links,
    validate_optional_external_links,
    validate_optional_html_field,
    validate_optional_image_links,
    validate_optional_string_with_max_length,
    validate_optional_tags,
    validate_optional_year,
    validate_required_html_field,
    validate_required_string_with_max_length,
    validate_required_year,
    validate_tags,
)

from .common import ApiModel, ExternalLink, InputModel

TITLE_MAX_LENGTH = 160
META_MAX_LENGTH = 120
HTML_MAX_LENGTH = 50000

HTML_FIELDS = ("description", "overview_html", "challenge_html", "solution_html")

PROJECT_FIELDS = [
    "title",
    "description",
    "year",
    "images",
    "tags",
    "links",
    "client",
    "duration",
    "overviewHtml",
    "challengeHtml",
    "solutionHtml",
]


class ProjectCreate(InputModel):
    title: str
    description: str
    year: int
    tags: list[str]
    client: str | None = None
    duration: str | None = None
    overview_html: str
    challenge_html: str
    solution_html: str
    links: list[ExternalLink] = []
    images: list[str]

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProjectCreate":
        get = payload.get
        return cls._from_values({
            "title": validate_required_string_with_max_length(get("title"), "title", TITLE_MAX_LENGTH),
            "description": validate_required_html_field(get("description"), "description", HTML_MAX_LENGTH),
            "year": validate_required_year(get("year"), "year"),
            "tags": validate_tags(get("tags"), "tags"),
            "client": nullable(
                validate_optional_string_with_max_length, get("client", MISSING), "client", META_MAX_LENGTH
            ),
            "duration": nullable(
                validate_optional_string_with_max_length, get("duration", MISSING), "duration", META_MAX_LENGTH
            ),
            "overview_html": validate_required_html_field(get("overviewHtml"), "overviewHtml", HTML_MAX_LENGTH),
            "challenge_html": validate_required_html_field(get("challengeHtml"), "challengeHtml", HTML_MAX_LENGTH),
            "solution_html": validate_required_html_field(get("solutionHtml"), "solutionHtml", HTML_MAX_LENGTH),
            "links": validate_external_links(get("links", []), "links"),
            "images": validate_image_links(get("images")),
        })


class ProjectUpdate(InputModel):
    title: str | None = None
    description: str | None = None
    year: int | None = None
    tags: list[str] | None = None
    client: str | None = None
    duration: str | None = None
    overview_html: str | None = None
    challenge_html: str | None = None
    solution_html: str | None = None
    links: list[ExternalLink] | None = None
    images: list[str] | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ProjectUpdate":
        require_at_least_one_field(payload, PROJECT_FIELDS)

        def get(key: str) -> Any:
            return payload.get(key, MISSING)

        return cls._from_values({
            "title": validate_optional_string_with_max_length(get("title"), "title", TITLE_MAX_LENGTH),
            "description": validate_optional_html_field(get("description"), "description", HTML_MAX_LENGTH),
            "year": validate_optional_year(get("year"), "year"),
            "tags": validate_optional_tags(get("tags"), "tags"),
            "links": validate_optional_external_links(get("links"), "links"),
            "client": nullable(validate_optional_string_with_max_length, get("client"), "client", META_MAX_LENGTH),
            "duration": nullable(
                validate_optional_string_with_max_length, get("duration"), "duration", META_MAX_LENGTH
            ),
            "overview_html": validate_optional_html_field(get("overviewHtml"), "overviewHtml", HTML_MAX_LENGTH),
            "challenge_html": validate_optional_html_field(get("challengeHtml"), "challengeHtml", HTML_MAX_LENGTH),
            "solution_html": validate_optional_html_field(get("solutionHtml"), "solutionHtml", HTML_MAX_LENGTH),
            "images": validate_optional_image_links(get("images")),
        })


class ProjectResponse(ApiModel):
    id: str
    title: str
    description: str
    year: int
    tags: list[str]
    client: str | None = None
    duration: str | None = None
    overview_html: str
    challenge_html: str
    solution_html: str
    links: list[ExternalLink]
    images: list[str]
    created_at: datetime
    updated_at: datetime
