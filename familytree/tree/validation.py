"""Input validation for person attributes and relation-type literals."""

from __future__ import annotations

import re
from datetime import date, datetime
from enum import Enum
from typing import Any, Mapping, Optional

from familytree.errors import ValidationError

_OPTIONAL_TEXT = ("last_name", "photo_url")
_DATE_FIELDS = ("birth_date", "death_date", "wedding_anniversary")
_GENDER_ALIASES = {"M": "M", "MALE": "M", "F": "F", "FEMALE": "F"}
_YEAR_RE = re.compile(r"\d{4}")
_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_DATETIME_RE = re.compile(
    r"\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(:\d{2}(\.(\d{6}|\d{3}))?)?(Z|[+-]\d{2}:\d{2})?"
)


class RelationType(str, Enum):
    """Where a new node goes relative to its anchor."""

    CHILDREN = "children"
    PARENTS = "parents"
    SPOUSES = "spouses"


def parse_relation_type(value: Any) -> RelationType:
    try:
        return RelationType(value)
    except ValueError:
        allowed = ", ".join(r.value for r in RelationType)
        raise ValidationError(
            f"Unknown relation type {value!r}; expected one of: {allowed}"
        ) from None


def _clean_text(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def parse_gender(value: Any) -> Optional[str]:
    text = _clean_text(value)
    if text is None:
        return None
    gender = _GENDER_ALIASES.get(text.upper())
    if gender is None:
        raise ValidationError(f"Invalid sex marker {value!r}; expected 'M' or 'F'")
    return gender


def parse_date(field_name: str, value: Any) -> Optional[str]:
    """Accept ``YYYY``, ``YYYY-MM-DD`` or a full ISO datetime.

    Returns the bare year, or the calendar date of the input.
    """
    text = _clean_text(value)
    if text is None:
        return None
    if _YEAR_RE.fullmatch(text):
        return text
    try:
        if _DATE_RE.fullmatch(text):
            return date.fromisoformat(text).isoformat()
        if _DATETIME_RE.fullmatch(text):
            return datetime.fromisoformat(text.replace("Z", "+00:00")).date().isoformat()
        raise ValueError(text)
    except ValueError:
        raise ValidationError(
            f"Invalid {field_name} {value!r}; expected YYYY, YYYY-MM-DD or an ISO datetime"
        ) from None


def clean_person_fields(
    fields: Mapping[str, Any], *, require_first_name: bool
) -> dict[str, Any]:
    """Validate and normalise person attributes.

    Only keys present in *fields* appear in the result, so the output doubles
    as a partial update.  Blank strings become ``None``.

    Raises:
        ValidationError: Unknown keys, a missing/blank first name, a sex
            marker other than M/F, or an unparseable date.
    """
    allowed = {"first_name", "gender", *_OPTIONAL_TEXT, *_DATE_FIELDS}
    unknown = set(fields) - allowed
    if unknown:
        raise ValidationError(f"Cannot set field(s): {', '.join(sorted(unknown))}")

    cleaned: dict[str, Any] = {}
    if "first_name" in fields or require_first_name:
        first_name = _clean_text(fields.get("first_name"))
        if first_name is None:
            raise ValidationError("first_name is required")
        cleaned["first_name"] = first_name

    for name in _OPTIONAL_TEXT:
        if name in fields:
            cleaned[name] = _clean_text(fields[name])
    if "gender" in fields:
        cleaned["gender"] = parse_gender(fields["gender"])
    for name in _DATE_FIELDS:
        if name in fields:
            cleaned[name] = parse_date(name, fields[name])
    return cleaned
