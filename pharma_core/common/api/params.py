from __future__ import annotations

from uuid import UUID

from rest_framework.exceptions import ValidationError


def uuid_or_none(value: str | None, field_name: str) -> UUID | None:
    if not value:
        return None
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError({field_name: ["Invalid UUID"]})


def require_uuid(value: str | None, field_name: str) -> UUID:
    parsed = uuid_or_none(value, field_name)
    if parsed is None:
        raise ValidationError({field_name: ["This field is required."]})
    return parsed


def int_or_default(value: str | None, field_name: str, default: int) -> int:
    if value in (None, ""):
        return default
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError({field_name: ["Must be an integer."]})

