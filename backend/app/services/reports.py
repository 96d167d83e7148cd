"""Report creation, lookup and update."""
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.constants import (
    MAX_REPORT_COMMENTS,
    MAX_REPORT_TITLE,
    CriticalityLevel,
    EventType,
    ReportStatus,
)
from app.models.event import Event
from app.models.project import Project
from app.models.report import Report
from app.models.session import Session as SessionModel
from app.repositories import directory
from app.repositories import events as event_store
from app.repositories import reports as report_store
from app.schemas.report import ReportCreationRequest, ReportUpdateRequest
from app.services.normalization import normalize_tags, truncate
from app.services.report_merger import merge_report_update, present_fields
from app.utils.db import get_by_id
from app.utils.exceptions import NotFoundError, ValidationError

AUTO_REPORT_TITLE = "Automatic report: {name}"


def attach_events(report: Report, events: Iterable[Event]) -> Report:
    """Snapshot the IDs of the given events onto the report."""
    report.related_event_ids = [str(event.id) for event in events]
    return report


def create_report(db: Session, request: ReportCreationRequest) -> Report:
    """
    Create a user-submitted report.

    The report is flushed but not committed; the caller commits and only
    then enqueues classification for ``report.id``.

    Raises:
        NotFoundError: If the project or session does not exist
        ValidationError: If the session belongs to another project
    """
    project = get_by_id(db, Project, request.projectId, "Project doesn't exist")
    session = get_by_id(db, SessionModel, request.sessionId, "Session doesn't exist")
    if session.project_id != project.id:
        raise ValidationError("Session does not belong to the given project")

    report = Report(
        project=project,
        session=session,
        title=truncate(request.title, MAX_REPORT_TITLE),
        tags=normalize_tags(request.tags),
        reported_at=request.reportedAt,
        comments=truncate(request.comments, MAX_REPORT_COMMENTS),
        user_email=request.userEmail,
        screen=request.screen,
        current_url=request.currentUrl,
        user_provided=request.userProvided,
        criticality=CriticalityLevel.UNKNOWN,
        status=ReportStatus.NEW,
    )
    attach_events(report, event_store.find_all_by_session(db, session.id))
    return report_store.save(db, report)


def build_automatic_report(session: SessionModel, events: List[Event], now: datetime) -> Report:
    """
    Build the report generated for an expired session that recorded errors.

    Args:
        session: The expired session
        events: All events of the session, in chronological order
        now: Creation time

    Returns:
        Unsaved report
    """
    first_error = next((event for event in events if event.type == EventType.ERROR), None)

    report = Report(
        project_id=session.project_id,
        session_id=session.id,
        title=truncate(AUTO_REPORT_TITLE.format(name=first_error.name), MAX_REPORT_TITLE) if first_error else None,
        tags=[],
        reported_at=now,
        current_url=first_error.url if first_error else None,
        user_provided=False,
        criticality=CriticalityLevel.UNKNOWN,
        status=ReportStatus.NEW,
    )
    return attach_events(report, events)


def get_report(db: Session, report_id: str | UUID) -> Report:
    """Return a report or raise NotFoundError."""
    return get_by_id(db, Report, report_id, "Report doesn't exist")


def list_project_reports(
    db: Session,
    project_id: str | UUID,
    page: int,
    size: int,
    status: Optional[ReportStatus] = None,
) -> Tuple[List[Report], int]:
    """Page through a project's reports, newest first."""
    project = get_by_id(db, Project, project_id, "Project doesn't exist")
    return report_store.find_all_by_project(db, project.id, page, size, status=status)


def update_report(db: Session, report_id: str | UUID, raw: Any) -> Report:
    """
    Merge a dashboard update document into a report.

    Args:
        db: Database session
        report_id: Report to update
        raw: Decoded JSON body as submitted

    Returns:
        The updated (flushed, uncommitted) report

    Raises:
        ValidationError: For malformed documents or present-but-null
            non-nullable fields
        NotFoundError: If the report, project or developer does not exist
    """
    fields = present_fields(raw)
    try:
        update = ReportUpdateRequest.model_validate(raw)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid update document: {e}")

    report = get_report(db, report_id)

    project = None
    if "projectId" in fields:
        if update.projectId is None:
            raise ValidationError("projectId cannot be null")
        project = get_by_id(
            db, Project, update.projectId, f"Project with id {update.projectId} doesn't exist"
        )

    developer = None
    if "developerName" in fields and update.developerName is not None:
        developer = directory.find_developer_by_username(db, update.developerName)
        if developer is None:
            raise NotFoundError(f"Developer '{update.developerName}' doesn't exist")

    merge_report_update(report, update, fields, project=project, developer=developer)
    db.flush()
    return report


def delete_report(db: Session, report_id: str | UUID) -> Report:
    """Delete a report and return it."""
    report = get_report(db, report_id)
    report_store.delete(db, report)
    return report
