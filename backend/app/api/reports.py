"""Bug report endpoints for the widget and the dashboard."""
import math
from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.deps import get_report_notifier
from app.constants import DEFAULT_PAGE_SIZE, ReportStatus
from app.database import get_db
from app.schemas.report import ReportCard, ReportCreationRequest, ReportCreationResponse, ReportPage
from app.services import reports as report_service
from app.services.session_expiry import ReportNotifier
from app.utils.exceptions import AppException, handle_database_error
from app.utils.logger import logger

router = APIRouter(prefix="/api/reports", tags=["reports"])


def _page(reports, total: int, page: int, size: int) -> ReportPage:
    return ReportPage(
        content=[ReportCard.from_orm(report) for report in reports],
        page=page,
        size=size,
        totalElements=total,
        totalPages=math.ceil(total / size) if size else 0,
    )


@router.post("/widget", response_model=ReportCreationResponse, status_code=status.HTTP_201_CREATED)
async def create_widget_report(
    request: ReportCreationRequest,
    db: Session = Depends(get_db),
    notify: ReportNotifier = Depends(get_report_notifier),
) -> ReportCreationResponse:
    """
    Create a report submitted from the widget.

    The report is committed first; criticality analysis is queued only
    afterwards, so a failure to queue never loses the report.

    Args:
        request: Report contents
        db: Database session
        notify: Schedules criticality analysis

    Returns:
        ID of the created report
    """
    try:
        report = report_service.create_report(db, request)
        db.commit()
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to create report for session {request.sessionId}: {e}", exc_info=True)
        raise handle_database_error(e, "create_report")

    logger.info(f"Report {report.id} created for session {report.session_id}")
    if not await notify(report.id):
        logger.warning(f"Criticality analysis not queued for report {report.id}")

    return ReportCreationResponse(message="Report created", reportId=str(report.id))


@router.get("/byProject/{project_id}", response_model=ReportPage)
async def list_project_reports(
    project_id: str,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=200, description="Page size"),
    db: Session = Depends(get_db),
) -> ReportPage:
    """List a project's reports, newest first."""
    try:
        reports, total = report_service.list_project_reports(db, project_id, page, size)
        return _page(reports, total, page, size)
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to list reports for project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "list_project_reports")


@router.get("/byProject/{project_id}/solved", response_model=ReportPage)
async def list_solved_project_reports(
    project_id: str,
    page: int = Query(0, ge=0, description="Zero-based page index"),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=200, description="Page size"),
    db: Session = Depends(get_db),
) -> ReportPage:
    """List a project's reports with status DONE, newest first."""
    try:
        reports, total = report_service.list_project_reports(
            db, project_id, page, size, status=ReportStatus.DONE
        )
        return _page(reports, total, page, size)
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to list solved reports for project {project_id}: {e}", exc_info=True)
        raise handle_database_error(e, "list_solved_project_reports")


@router.get("/{report_id}", response_model=ReportCard)
async def get_report(
    report_id: str,
    db: Session = Depends(get_db),
) -> ReportCard:
    """Get a single report."""
    try:
        return ReportCard.from_orm(report_service.get_report(db, report_id))
    except (HTTPException, AppException):
        raise
    except Exception as e:
        logger.error(f"Failed to get report {report_id}: {e}", exc_info=True)
        raise handle_database_error(e, "get_report")


@router.patch("/{report_id}/dashboard", response_model=ReportCard)
async def update_report(
    report_id: str,
    document: Any = Body(...),
    db: Session = Depends(get_db),
) -> ReportCard:
    """
    Partially update a report from the dashboard.

    Only fields present in the body are changed; a field sent as null is
    cleared, except reportedAt, status and userProvided which reject null.

    Args:
        report_id: Report to update
        document: Raw JSON update document
        db: Database session

    Returns:
        The updated report
    """
    try:
        report = report_service.update_report(db, report_id, document)
        db.commit()
        db.refresh(report)
        return ReportCard.from_orm(report)
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to update report {report_id}: {e}", exc_info=True)
        raise handle_database_error(e, "update_report")


@router.post("/{report_id}/analyze", status_code=status.HTTP_202_ACCEPTED)
async def reanalyze_report(
    report_id: str,
    db: Session = Depends(get_db),
    notify: ReportNotifier = Depends(get_report_notifier),
) -> dict:
    """Queue a fresh criticality analysis for an existing report."""
    report = report_service.get_report(db, report_id)
    queued = await notify(report.id)
    if not queued:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to queue criticality analysis. Please try again.",
        )
    return {"message": "Analysis queued", "reportId": str(report.id)}


@router.delete("/delete/{report_id}", response_model=ReportCard)
async def delete_report(
    report_id: str,
    db: Session = Depends(get_db),
) -> ReportCard:
    """Delete a report and return its last state."""
    try:
        card = ReportCard.from_orm(report_service.get_report(db, report_id))
        report_service.delete_report(db, report_id)
        db.commit()
        logger.info(f"Report {report_id} deleted")
        return card
    except (HTTPException, AppException):
        db.rollback()
        raise
    except Exception as e:
        db.rollback()
        logger.error(f"Failed to delete report {report_id}: {e}", exc_info=True)
        raise handle_database_error(e, "delete_report")
