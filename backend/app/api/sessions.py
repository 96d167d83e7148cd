"""Session management endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.schemas.session import SessionCreationResponse, SessionDetailsResponse, SessionRequest
from app.services import telemetry
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/api/sessions", tags=["sessions"])


@router.post("", response_model=SessionCreationResponse, status_code=status.HTTP_201_CREATED)
async def create_session(
    request: SessionRequest,
    db: Session = Depends(get_db),
) -> SessionCreationResponse:
    """
    Register a new recording session.

    Args:
        request: Session metadata from the widget
        db: Database session

    Returns:
        ID of the created session
    """
    try:
        session = telemetry.create_session(db, request)
        db.commit()
        logger.info(f"Session {session.id} started for project {session.project_id}")
        return SessionCreationResponse(message="Session created", sessionId=str(session.id))
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create session for project {request.projectId}: {e}", exc_info=True)
        raise handle_database_error(e, "create_session")


@router.get("/{session_id}", response_model=SessionDetailsResponse)
async def get_session(
    session_id: str,
    db: Session = Depends(get_db),
) -> SessionDetailsResponse:
    """Get session details."""
    try:
        return SessionDetailsResponse.from_orm(telemetry.get_session(db, session_id))
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to get session {session_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_session")
