"""Database query utility functions."""
from typing import Optional, TypeVar, Type
from uuid import UUID
from sqlalchemy.orm import Session

from app.utils.exceptions import NotFoundError, ValidationError

T = TypeVar("T")


def get_by_id(
    db: Session,
    model: Type[T],
    id_value: str | UUID,
    error_message: Optional[str] = None,
) -> T:
    """
    Get a model instance by ID.

    Args:
        db: Database session
        model: SQLAlchemy model class
        id_value: ID value (UUID string or UUID object)
        error_message: Custom error message if not found

    Returns:
        Model instance

    Raises:
        NotFoundError: If model not found
        ValidationError: If the ID is not a valid UUID
    """
    if isinstance(id_value, str):
        try:
            id_value = UUID(id_value)
        except ValueError:
            raise ValidationError(f"Invalid {model.__name__} ID format")

    instance = db.get(model, id_value)
    if instance is None:
        raise NotFoundError(error_message or f"{model.__name__} not found: {id_value}")

    return instance
