"""Session store queries."""
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.event import Event
from app.models.session import Session as SessionModel


def find_by_id(db: Session, session_id: UUID) -> Optional[SessionModel]:
    """Return the session with the given ID, or None."""
    return db.get(SessionModel, session_id)


def find_expired(db: Session, deadline: datetime) -> List[SessionModel]:
    """
    Find active sessions whose last activity precedes the deadline.

    Last activity is the latest event timestamp of the session, or its
    start time when it has no events.

    Args:
        db: Database session
        deadline: Sessions idle since before this instant are expired

    Returns:
        Expired sessions, oldest start first
    """
    latest_event = (
        select(func.max(Event.timestamp))
        .where(Event.session_id == SessionModel.id)
        .correlate(SessionModel)
        .scalar_subquery()
    )
    last_activity = func.coalesce(latest_event, SessionModel.start_time)

    return db.query(SessionModel).filter(
        SessionModel.is_active.is_(True),
        SessionModel.end_time.is_(None),
        last_activity < deadline,
    ).order_by(SessionModel.start_time.asc()).all()


def close(db: Session, session_id: UUID, end_time: datetime) -> bool:
    """
    Close an active session.

    The update only matches a session that is still open, so of two scans
    racing for the same session exactly one succeeds.

    Returns:
        True if this call closed the session, False if it was already closed
    """
    updated = db.query(SessionModel).filter(
        SessionModel.id == session_id,
        SessionModel.is_active.is_(True),
        SessionModel.end_time.is_(None),
    ).update(
        {SessionModel.is_active: False, SessionModel.end_time: end_time},
        synchronize_session=False,
    )
    return updated == 1
