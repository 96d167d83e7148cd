"""Event ingestion endpoints."""
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.event import EventCreationResponse, EventDetailsResponse, EventRequest
from app.services import telemetry
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/api/events", tags=["events"])


@router.post("", response_model=EventCreationResponse, status_code=status.HTTP_201_CREATED)
async def create_event(
    request: EventRequest,
    db: Session = Depends(get_db),
) -> EventCreationResponse:
    """
    Record an event for an active session.

    Closed sessions reject new events with 400.

    Args:
        request: Event payload from the widget
        db: Database session

    Returns:
        ID of the created event
    """
    try:
        event = telemetry.create_event(db, request)
        db.commit()
        logger.debug(f"Event {event.id} ({event.type.value}) recorded for session {event.session_id}")
        return EventCreationResponse(message="Event created", eventId=str(event.id))
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to record event for session {request.sessionId}: {e}", exc_info=True)
        raise handle_database_error(e, "create_event")


@router.get("/session/{session_id}", response_model=List[EventDetailsResponse])
async def list_session_events(
    session_id: str,
    db: Session = Depends(get_db),
) -> List[EventDetailsResponse]:
    """List the events of a session in chronological order."""
    try:
        events = telemetry.list_session_events(db, session_id)
        return [EventDetailsResponse.from_orm(event) for event in events]
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to list events for session {session_id}: {e}", exc_info=True)
        raise handle_database_error(e, "list_session_events")


@router.get("/{event_id}", response_model=EventDetailsResponse)
async def get_event(
    event_id: str,
    db: Session = Depends(get_db),
) -> EventDetailsResponse:
    """Get event details."""
    try:
        return EventDetailsResponse.from_orm(telemetry.get_event(db, event_id))
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to get event {event_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_event")
