"""Coercion of form fields and imported records into profiles."""

import math
from collections.abc import Mapping
from enum import StrEnum
from typing import Any

from domain.entities.profile import (
    AVAILABILITY_MAX_LENGTH,
    BIO_MAX_LENGTH,
    DEFAULT_LEVEL,
    EMAIL_MAX_LENGTH,
    LANGUAGES,
    LEVELS,
    MAX_INTERESTS,
    NAME_MAX_LENGTH,
    Profile,
    now_ms,
    parse_record_id,
)


class ProfileSource(StrEnum):
    """Where raw profile data came from.

    Imported files are untrusted and get every string capped; form input
    is only trimmed.
    """

    FORM = "form"
    IMPORT = "import"


def _coerce(value: Any) -> str:
    # falsy non-strings (None, False, 0) read as missing
    if isinstance(value, str):
        return value
    return str(value) if value else ""


def _text(value: Any, limit: int | None = None) -> str:
    text = _coerce(value).strip()
    if limit is not None:
        text = text[:limit]
    return text


def _choice(value: Any, allowed: tuple[str, ...], default: str) -> str:
    return value if isinstance(value, str) and value in allowed else default


def split_interests(value: Any) -> list[str]:
    """Split a comma-separated string into trimmed, non-empty pieces."""
    text = _coerce(value)
    return [piece.strip() for piece in text.split(",") if piece.strip()]


def _interests(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        items = (
            "" if item is None else str(item).strip() for item in value[:MAX_INTERESTS]
        )
        return [item for item in items if item]
    return split_interests(value)[:MAX_INTERESTS]


def _timestamp(value: Any) -> int:
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or value is None:
        return now_ms()
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return now_ms()
    if isinstance(value, (int, float)) and math.isfinite(value):
        return int(value)
    return now_ms()


def normalize(raw: Any, source: ProfileSource = ProfileSource.FORM) -> Profile:
    """Coerce an arbitrary record into a canonical Profile.

    Unknown languages become "" (and will fail validation later), unknown
    levels fall back to B1, and the new-versus-existing decision is made
    here from the shape of ``id``.
    """
    record: Mapping[str, Any] = raw if isinstance(raw, Mapping) else {}
    capped = source is ProfileSource.IMPORT

    updated = record.get("updatedAt", record.get("updated_at"))

    return Profile(
        id=parse_record_id(record.get("id")),
        name=_text(record.get("name"), NAME_MAX_LENGTH if capped else None),
        email=_text(record.get("email"), EMAIL_MAX_LENGTH if capped else None),
        native=_choice(record.get("native"), LANGUAGES, ""),
        practice=_choice(record.get("practice"), LANGUAGES, ""),
        level=_choice(record.get("level"), LEVELS, DEFAULT_LEVEL),
        availability=_text(
            record.get("availability"), AVAILABILITY_MAX_LENGTH if capped else None
        ),
        interests=_interests(record.get("interests")),
        bio=_text(record.get("bio"), BIO_MAX_LENGTH if capped else None),
        updated_at=_timestamp(updated),
    )
