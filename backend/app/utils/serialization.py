"""Serialization utilities for converting models to API responses."""
from datetime import datetime
from typing import Any, Iterable, List, Optional
from uuid import UUID

from app.utils.clock import ensure_utc


def serialize_uuid(value: Optional[UUID]) -> Optional[str]:
    """
    Serialize UUID to string.

    Args:
        value: UUID value or None

    Returns:
        String representation or None
    """
    return str(value) if value else None


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    Serialize datetime to ISO format string in UTC.

    Args:
        value: Datetime value or None

    Returns:
        ISO format string or None
    """
    return ensure_utc(value).isoformat() if value else None


def serialize_enum(value: Any) -> Optional[str]:
    """Serialize an enum member to its value, passing None through."""
    return value.value if value is not None else None


def serialize_list(values: Optional[Iterable[Any]]) -> List[Any]:
    """Serialize an optional collection to a plain list."""
    return list(values) if values else []
