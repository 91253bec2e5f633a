# =============================================================================
# lib/validators.py - Request Field Validators
# =============================================================================
# Pure functions that check and normalize single request fields.
#
# Every validator takes the raw value decoded from JSON (or a query string)
# plus the field name, and either returns a normalized value or raises
# BadRequestError with a message naming the field.
#
# Optional variants return MISSING untouched, so a field absent from a PATCH
# body is a no-op, but apply the same rules once a value is present.
#
# Usage:
#   from lib.validators import MISSING, validate_tags
#   tags = validate_tags(payload.get("tags", MISSING))
# =============================================================================

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping, TypeVar

from pydantic import HttpUrl, TypeAdapter, ValidationError

from app.exceptions import BadRequestError

T = TypeVar("T")


class _Missing:
    """Sentinel for a field that was not sent at all (as opposed to null)."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING: Any = _Missing()

MONTH_PATTERN = re.compile(r"[0-9]{4}-(0[1-9]|1[0-2])")
INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
DECIMAL_PATTERN = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")

TAG_MAX_LENGTH = 40
HIGHLIGHT_MAX_LENGTH = 200
LINK_LABEL_MAX_LENGTH = 40

MIN_YEAR = 1900
MAX_YEAR = 2100

MIN_SORT_ORDER = 0
MAX_SORT_ORDER = 10000

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100

_http_url_adapter = TypeAdapter(HttpUrl)


# =============================================================================
# Helpers
# =============================================================================

def is_valid_http_url(value: Any) -> bool:
    """Absolute http/https URL with a host."""
    if not isinstance(value, str):
        return False
    try:
        _http_url_adapter.validate_python(value)
    except ValidationError:
        return False
    return True


def coerce_integer(value: Any) -> int | None:
    """
    Interpret a JSON number or numeric query string as an integer.

    Returns None when the value is not a whole number. Booleans are never
    numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        text = value.strip()
        if INTEGER_PATTERN.fullmatch(text):
            try:
                return int(text)
            except ValueError:
                return None
        if not DECIMAL_PATTERN.fullmatch(text):
            return None
        number = float(text)
        return int(number) if number.is_integer() else None
    return None


def optional(validator: Callable[..., T]) -> Callable[..., T]:
    """Wrap a validator so MISSING passes through untouched."""

    def wrapper(value: Any, *args: Any, **kwargs: Any) -> T:
        if value is MISSING:
            return MISSING
        return validator(value, *args, **kwargs)

    wrapper.__name__ = f"optional_{validator.__name__}"
    wrapper.__doc__ = validator.__doc__
    return wrapper


def nullable(validator: Callable[..., T], value: Any, *args: Any) -> T | None:
    """Explicit null clears a nullable column; anything else is validated."""
    if value is None:
        return None
    return validator(value, *args)


def _dedupe_strings(value: Any, field_name: str, max_length: int) -> list[str]:
    if not isinstance(value, list):
        raise BadRequestError(f"{field_name} must be an array of strings")

    deduped: list[str] = []
    seen: set[str] = set()

    for entry in value:
        if not isinstance(entry, str):
            raise BadRequestError(f"{field_name} must contain only strings")

        normalized = entry.strip()
        if not normalized or len(normalized) > max_length:
            raise BadRequestError(
                f"{field_name} entries must be between 1 and {max_length} characters"
            )

        key = normalized.lower()
        if key not in seen:
            seen.add(key)
            deduped.append(normalized)

    return deduped


# =============================================================================
# Strings
# =============================================================================

def validate_required_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise BadRequestError(f"{field_name} is required")
    return value.strip()


def validate_optional_string(value: Any, field_name: str) -> str:
    if value is MISSING:
        return MISSING
    if not isinstance(value, str):
        raise BadRequestError(f"{field_name} must be a string")

    trimmed = value.strip()
    if not trimmed:
        raise BadRequestError(f"{field_name} cannot be empty")
    return trimmed


def _check_max_length(value: str, field_name: str, max_length: int) -> str:
    if len(value) > max_length:
        raise BadRequestError(f"{field_name} must be {max_length} characters or fewer")
    return value


def validate_required_string_with_max_length(value: Any, field_name: str, max_length: int) -> str:
    return _check_max_length(validate_required_string(value, field_name), field_name, max_length)


def validate_optional_string_with_max_length(value: Any, field_name: str, max_length: int) -> str:
    validated = validate_optional_string(value, field_name)
    if validated is MISSING:
        return MISSING
    return _check_max_length(validated, field_name, max_length)


def validate_required_html_field(value: Any, field_name: str, max_length: int) -> str:
    """
    Rich-text field: any string up to max_length, empty allowed.

    The value is returned as-is; sanitization happens right before the
    write (see lib.sanitizer).
    """
    if not isinstance(value, str):
        raise BadRequestError(f"{field_name} must be a string")
    return _check_max_length(value, field_name, max_length)


validate_optional_html_field = optional(validate_required_html_field)


# =============================================================================
# URLs
# =============================================================================

def validate_image_links(value: Any, field_name: str = "images") -> list[str]:
    if not isinstance(value, list):
        raise BadRequestError(f"{field_name} must be an array of URLs")

    if any(not is_valid_http_url(entry) for entry in value):
        raise BadRequestError(f"{field_name} must only contain valid http/https URLs")

    return list(value)


validate_optional_image_links = optional(validate_image_links)


def validate_external_links(value: Any, field_name: str = "links") -> list[dict[str, str]]:
    """
    List of {label, url} objects.

    Labels are trimmed (1..40 chars); URLs must be http/https. Entries are
    deduplicated by case-insensitive URL, keeping the first.
    """
    if not isinstance(value, list):
        raise BadRequestError(f"{field_name} must be an array")

    deduped: list[dict[str, str]] = []
    seen_urls: set[str] = set()

    for item in value:
        if not isinstance(item, dict):
            raise BadRequestError(f"{field_name} items must be objects")

        raw_label = item.get("label")
        raw_url = item.get("url")

        if not isinstance(raw_label, str) or not raw_label.strip():
            raise BadRequestError(f"{field_name}.label is required")

        label = raw_label.strip()
        if len(label) > LINK_LABEL_MAX_LENGTH:
            raise BadRequestError(
                f"{field_name}.label must be {LINK_LABEL_MAX_LENGTH} characters or fewer"
            )

        if not is_valid_http_url(raw_url):
            raise BadRequestError(f"{field_name}.url must be a valid http/https URL")

        url = raw_url.strip()
        key = url.lower()
        if key not in seen_urls:
            seen_urls.add(key)
            deduped.append({"label": label, "url": url})

    return deduped


validate_optional_external_links = optional(validate_external_links)


# =============================================================================
# Tag-like Lists
# =============================================================================

def validate_tags(value: Any, field_name: str = "tags") -> list[str]:
    return _dedupe_strings(value, field_name, TAG_MAX_LENGTH)


validate_optional_tags = optional(validate_tags)


def validate_tech_tags(value: Any, field_name: str = "techTags") -> list[str]:
    return _dedupe_strings(value, field_name, TAG_MAX_LENGTH)


validate_optional_tech_tags = optional(validate_tech_tags)


def validate_highlights(value: Any, field_name: str = "highlights") -> list[str]:
    return _dedupe_strings(value, field_name, HIGHLIGHT_MAX_LENGTH)


validate_optional_highlights = optional(validate_highlights)


# =============================================================================
# Numbers and Flags
# =============================================================================

def validate_required_year(value: Any, field_name: str = "year") -> int:
    year = coerce_integer(value)
    if year is None or not MIN_YEAR <= year <= MAX_YEAR:
        raise BadRequestError(f"{field_name} must be an integer between {MIN_YEAR} and {MAX_YEAR}")
    return year


validate_optional_year = optional(validate_required_year)


def validate_sort_order(value: Any, field_name: str = "sortOrder") -> int:
    sort_order = coerce_integer(value)
    if sort_order is None or not MIN_SORT_ORDER <= sort_order <= MAX_SORT_ORDER:
        raise BadRequestError(
            f"{field_name} must be an integer between {MIN_SORT_ORDER} and {MAX_SORT_ORDER}"
        )
    return sort_order


validate_optional_sort_order = optional(validate_sort_order)


def validate_boolean(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise BadRequestError(f"{field_name} must be a boolean")
    return value


validate_optional_boolean = optional(validate_boolean)


# =============================================================================
# Months
# =============================================================================

def validate_required_month_string(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not MONTH_PATTERN.fullmatch(value):
        raise BadRequestError(f"{field_name} must use YYYY-MM format")
    return value


validate_optional_month_string = optional(validate_required_month_string)


def validate_experience_chronology(
    start_month: str,
    end_month: str | None,
    is_current: bool,
) -> None:
    """
    Cross-field check over the merged (stored + incoming) experience state.

    YYYY-MM strings compare chronologically as plain strings.
    """
    if is_current and end_month:
        raise BadRequestError("endMonth must be null when isCurrent is true")

    if end_month and end_month < start_month:
        raise BadRequestError("endMonth cannot be earlier than startMonth")


# =============================================================================
# Query Parameters
# =============================================================================

@dataclass(frozen=True)
class Pagination:
    """Offset pagination window."""
    page: int
    limit: int
    skip: int


def parse_pagination(query: Mapping[str, Any]) -> Pagination:
    """
    Read page/limit from query parameters.

    page defaults to 1 (integer >= 1); limit defaults to 10 (integer 1..100).
    """
    page_raw = query.get("page", MISSING)
    limit_raw = query.get("limit", MISSING)

    page = DEFAULT_PAGE if page_raw is MISSING else coerce_integer(page_raw)
    limit = DEFAULT_LIMIT if limit_raw is MISSING else coerce_integer(limit_raw)

    if page is None or page < 1:
        raise BadRequestError("page must be an integer >= 1")

    if limit is None or not 1 <= limit <= MAX_LIMIT:
        raise BadRequestError(f"limit must be an integer between 1 and {MAX_LIMIT}")

    return Pagination(page=page, limit=limit, skip=(page - 1) * limit)


def parse_search(value: Any) -> str | None:
    if value is MISSING or value is None:
        return None
    if not isinstance(value, str):
        raise BadRequestError("search must be a string")
    return value.strip() or None


def require_at_least_one_field(payload: Mapping[str, Any], fields: Iterable[str]) -> None:
    fields = list(fields)
    if not any(field in payload for field in fields):
        raise BadRequestError(
            f"At least one of these fields is required: {', '.join(fields)}"
        )
