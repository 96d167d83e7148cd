"""Report store queries."""
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy.orm import Session

from app.constants import ReportStatus
from app.models.report import Report


def find_by_id(db: Session, report_id: UUID) -> Optional[Report]:
    """Return the report with the given ID, or None."""
    return db.get(Report, report_id)


def save(db: Session, report: Report) -> Report:
    """Add the report to the session and flush so its ID is assigned."""
    db.add(report)
    db.flush()
    return report


def delete(db: Session, report: Report) -> None:
    """Delete a report."""
    db.delete(report)
    db.flush()


def find_all_by_project(
    db: Session,
    project_id: UUID,
    page: int,
    size: int,
    status: Optional[ReportStatus] = None,
) -> Tuple[List[Report], int]:
    """
    Page through the reports of a project, newest first.

    Args:
        db: Database session
        project_id: Project to list reports for
        page: Zero-based page index
        size: Page size
        status: Only include reports with this status

    Returns:
        Tuple of (reports on the page, total matching reports)
    """
    query = db.query(Report).filter(Report.project_id == project_id)
    if status is not None:
        query = query.filter(Report.status == status)

    total = query.count()
    reports = query.order_by(Report.reported_at.desc()).offset(page * size).limit(size).all()
    return reports, total
