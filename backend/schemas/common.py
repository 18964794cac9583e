"""Common schema utilities and base classes."""

from datetime import datetime, timezone
from typing import Any, List, Optional

from pydantic import field_serializer


def serialize_utc_datetime(dt: datetime) -> str:
    """
    Serialize a datetime as a UTC ISO-8601 string.

    Naive datetimes (SQLite drops tzinfo) are treated as UTC.

    Args:
        dt: Datetime object (naive or timezone-aware)

    Returns:
        ISO-8601 string ending in 'Z'
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def coerce_string_list(value: Any) -> List[str]:
    """Coerce null to [] and drop null items from a list field.

    Raises:
        ValueError: For anything other than null, a string, a list or a tuple
    """
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if not isinstance(value, (list, tuple)):
        raise ValueError("expected a list of strings")
    return [str(item) for item in value if item is not None]


class TimestampSerializerMixin:
    """Mixin providing timestamp serializers for Entry schemas."""

    @field_serializer("created_at")
    def serialize_created_at(self, dt: datetime, _info):
        return serialize_utc_datetime(dt)

    @field_serializer("updated_at")
    def serialize_updated_at(self, dt: datetime, _info):
        return serialize_utc_datetime(dt)

    @field_serializer("date")
    def serialize_date(self, dt: Optional[datetime], _info):
        return serialize_utc_datetime(dt) if dt else None


__all__ = [
    "TimestampSerializerMixin",
    "coerce_string_list",
    "serialize_utc_datetime",
]
