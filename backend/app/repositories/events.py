"""Event store queries."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.constants import EventType
from app.models.event import Event


def find_by_id(db: Session, event_id: UUID) -> Optional[Event]:
    """Return the event with the given ID, or None."""
    return db.get(Event, event_id)


def find_all_by_session(db: Session, session_id: UUID) -> List[Event]:
    """Return all events of a session in chronological order."""
    return db.query(Event).filter(
        Event.session_id == session_id
    ).order_by(Event.timestamp.asc(), Event.created_at.asc()).all()


def find_latest_timestamp_by_session(db: Session, session_id: UUID) -> Optional[datetime]:
    """Return the timestamp of the most recent event of a session, or None."""
    return db.query(func.max(Event.timestamp)).filter(
        Event.session_id == session_id
    ).scalar()


def exists_error_event_for_session(db: Session, session_id: UUID) -> bool:
    """Check whether a session recorded at least one error event."""
    query = db.query(Event.id).filter(
        Event.session_id == session_id,
        Event.type == EventType.ERROR,
    )
    return db.query(query.exists()).scalar()


def delete_all_by_session(db: Session, session_id: UUID) -> int:
    """Delete every event of a session and return how many were removed."""
    return db.query(Event).filter(
        Event.session_id == session_id
    ).delete(synchronize_session=False)
