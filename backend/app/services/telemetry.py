"""Session registration and event ingestion."""
from typing import List
from uuid import UUID

from sqlalchemy.orm import Session

from app.constants import MAX_EVENT_LOG, MAX_EVENT_NAME, MAX_EVENT_STACK_TRACE
from app.models.event import Event
from app.models.project import Project
from app.models.session import Session as SessionModel
from app.repositories import events as event_store
from app.schemas.event import EventRequest
from app.schemas.session import SessionRequest
from app.services.normalization import truncate
from app.utils.db import get_by_id
from app.utils.exceptions import ValidationError


def create_session(db: Session, request: SessionRequest) -> SessionModel:
    """Register a new active session for a project."""
    project = get_by_id(db, Project, request.projectId, f"Project not found: {request.projectId}")

    session = SessionModel(
        project_id=project.id,
        is_active=True,
        start_time=request.startTime,
        browser=request.browser,
        browser_version=request.browserVersion,
        os=request.os,
        device_type=request.deviceType.lower() if request.deviceType else None,
        screen_resolution=request.screenResolution,
        viewport_size=request.viewportSize,
        language=request.language,
        user_agent=request.userAgent,
        ip_address=request.ipAddress,
        cookies_hash=request.cookiesHash,
        plugins=request.plugins,
    )
    db.add(session)
    db.flush()
    return session


def get_session(db: Session, session_id: str | UUID) -> SessionModel:
    """Return a session or raise NotFoundError."""
    return get_by_id(db, SessionModel, session_id, f"Session not found: {session_id}")


def create_event(db: Session, request: EventRequest) -> Event:
    """
    Record an event in an open session.

    Name, log and stack trace are truncated to their size caps.

    Raises:
        NotFoundError: If the session does not exist
        ValidationError: If the session is already closed
    """
    session = get_session(db, request.sessionId)
    if not session.is_active:
        raise ValidationError(f"Session {session.id} is closed and no longer accepts events")

    metadata = request.metadata
    event = Event(
        session_id=session.id,
        type=request.type,
        name=truncate(request.name, MAX_EVENT_NAME),
        log=truncate(request.log, MAX_EVENT_LOG),
        stack_trace=truncate(request.stackTrace, MAX_EVENT_STACK_TRACE),
        url=request.url,
        element=request.element,
        timestamp=request.timestamp,
        file_name=metadata.fileName if metadata else None,
        line_number=metadata.lineNumber if metadata else None,
        status_code=metadata.statusCode if metadata else None,
    )
    db.add(event)
    db.flush()
    return event


def get_event(db: Session, event_id: str | UUID) -> Event:
    """Return an event or raise NotFoundError."""
    return get_by_id(db, Event, event_id, f"Event not found: {event_id}")


def list_session_events(db: Session, session_id: str | UUID) -> List[Event]:
    """Return the events of a session in chronological order."""
    session = get_session(db, session_id)
    return event_store.find_all_by_session(db, session.id)
