# =============================================================================
# core/models/experience.py - Experience Schemas
# =============================================================================
# Work history entries. startMonth/endMonth are "YYYY-MM" strings; an entry
# is either current (no endMonth) or ended (endMonth >= startMonth).
#
# Chronology for creates is checked in from_payload(). Updates can only be
# checked after merging with the stored row, so ExperienceService does that.
# =============================================================================

from datetime import datetime
from typing import Any

from lib.validators import (
    MISSING,
    nullable,
    require_at_least_one_field,
    validate_boolean,
    validate_external_links,
    validate_experience_chronology,
    validate_highlights,
    validate_optional_boolean,
    validate_optional_external_links,
    validate_optional_highlights,
    validate_optional_html_field,
    validate_optional_month_string,
    validate_optional_sort_order,
    validate_optional_string_with_max_length,
    validate_optional_tech_tags,
    validate_required_html_field,
    validate_required_month_string,
    validate_required_string_with_max_length,
    validate_sort_order,
    validate_tech_tags,
)

from .common import ApiModel, ExternalLink, InputModel

COMPANY_MAX_LENGTH = 120
ROLE_MAX_LENGTH = 120
EMPLOYMENT_TYPE_MAX_LENGTH = 80
LOCATION_MAX_LENGTH = 120
SUMMARY_MAX_LENGTH = 50000

EXPERIENCE_FIELDS = [
    "company",
    "role",
    "employmentType",
    "location",
    "startMonth",
    "endMonth",
    "isCurrent",
    "summaryHtml",
    "highlights",
    "techTags",
    "links",
    "sortOrder",
]


class ExperienceCreate(InputModel):
    company: str
    role: str
    employment_type: str | None = None
    location: str | None = None
    start_month: str
    end_month: str | None = None
    is_current: bool = False
    summary_html: str
    highlights: list[str] = []
    tech_tags: list[str] = []
    links: list[ExternalLink] = []
    sort_order: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ExperienceCreate":
        get = payload.get

        def list_or_empty(key: str) -> Any:
            value = get(key)
            return [] if value is None else value

        start_month = validate_required_month_string(get("startMonth"), "startMonth")
        end_month = nullable(validate_optional_month_string, get("endMonth", MISSING), "endMonth")
        is_current = validate_boolean(get("isCurrent", False), "isCurrent")

        validate_experience_chronology(start_month, end_month or None, is_current)

        return cls._from_values({
            "company": validate_required_string_with_max_length(get("company"), "company", COMPANY_MAX_LENGTH),
            "role": validate_required_string_with_max_length(get("role"), "role", ROLE_MAX_LENGTH),
            "employment_type": nullable(
                validate_optional_string_with_max_length,
                get("employmentType", MISSING),
                "employmentType",
                EMPLOYMENT_TYPE_MAX_LENGTH,
            ),
            "location": nullable(
                validate_optional_string_with_max_length, get("location", MISSING), "location", LOCATION_MAX_LENGTH
            ),
            "start_month": start_month,
            "end_month": end_month,
            "is_current": is_current,
            "summary_html": validate_required_html_field(get("summaryHtml"), "summaryHtml", SUMMARY_MAX_LENGTH),
            "highlights": validate_highlights(list_or_empty("highlights"), "highlights"),
            "tech_tags": validate_tech_tags(list_or_empty("techTags"), "techTags"),
            "links": validate_external_links(list_or_empty("links"), "links"),
            "sort_order": validate_sort_order(get("sortOrder", 0)),
        })


class ExperienceUpdate(InputModel):
    company: str | None = None
    role: str | None = None
    employment_type: str | None = None
    location: str | None = None
    start_month: str | None = None
    end_month: str | None = None
    is_current: bool | None = None
    summary_html: str | None = None
    highlights: list[str] | None = None
    tech_tags: list[str] | None = None
    links: list[ExternalLink] | None = None
    sort_order: int | None = None

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "ExperienceUpdate":
        require_at_least_one_field(payload, EXPERIENCE_FIELDS)

        def get(key: str) -> Any:
            return payload.get(key, MISSING)

        return cls._from_values({
            "company": validate_optional_string_with_max_length(get("company"), "company", COMPANY_MAX_LENGTH),
            "role": validate_optional_string_with_max_length(get("role"), "role", ROLE_MAX_LENGTH),
            "employment_type": nullable(
                validate_optional_string_with_max_length,
                get("employmentType"),
                "employmentType",
                EMPLOYMENT_TYPE_MAX_LENGTH,
            ),
            "location": nullable(
                validate_optional_string_with_max_length, get("location"), "location", LOCATION_MAX_LENGTH
            ),
            "start_month": validate_optional_month_string(get("startMonth"), "startMonth"),
            "end_month": nullable(validate_optional_month_string, get("endMonth"), "endMonth"),
            "is_current": validate_optional_boolean(get("isCurrent"), "isCurrent"),
            "summary_html": validate_optional_html_field(get("summaryHtml"), "summaryHtml", SUMMARY_MAX_LENGTH),
            "highlights": validate_optional_highlights(get("highlights"), "highlights"),
            "tech_tags": validate_optional_tech_tags(get("techTags"), "techTags"),
            "links": validate_optional_external_links(get("links"), "links"),
            "sort_order": validate_optional_sort_order(get("sortOrder")),
        })


class ExperienceResponse(ApiModel):
    id: str
    company: str
    role: str
    employment_type: str | None = None
    location: str | None = None
    start_month: str
    end_month: str | None = None
    is_current: bool
    summary_html: str
    highlights: list[str]
    tech_tags: list[str]
    links: list[ExternalLink]
    sort_order: int
    created_at: datetime
    updated_at: datetime
