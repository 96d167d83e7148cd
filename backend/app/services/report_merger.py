"""Field-by-field merge of dashboard updates into a report."""
from typing import Any, Optional, Set

from app.constants import MAX_REPORT_COMMENTS, MAX_REPORT_TITLE
from app.models.developer import Developer
from app.models.project import Project
from app.models.report import Report
from app.schemas.report import ReportUpdateRequest
from app.services.normalization import normalize_tags, truncate
from app.utils.exceptions import ValidationError

# Fields that may be updated but never cleared
NON_NULLABLE_FIELDS = ("reportedAt", "status", "userProvided")


def present_fields(raw: Any) -> Set[str]:
    """
    Collect the field names present in a raw update document.

    Args:
        raw: The decoded JSON body

    Returns:
        Set of top-level keys

    Raises:
        ValidationError: If the document is not a JSON object
    """
    if not isinstance(raw, dict):
        raise ValidationError("Invalid JSON: update document must be an object")
    return set(raw.keys())


def merge_report_update(
    report: Report,
    update: ReportUpdateRequest,
    fields: Set[str],
    project: Optional[Project] = None,
    developer: Optional[Developer] = None,
) -> Report:
    """
    Apply the fields present in an update document to a report.

    Only names in ``fields`` are applied; everything else keeps its current
    value even if ``update`` carries a default for it. Non-nullable fields
    are checked before anything is assigned, so a rejected update leaves
    the report untouched.

    Args:
        report: Report to update in place
        update: Typed update request
        fields: Names present in the raw document
        project: Resolved project, used when ``projectId`` is present
        developer: Resolved developer (or None to unassign), used when
            ``developerName`` is present

    Returns:
        The updated report

    Raises:
        ValidationError: If a non-nullable field is present but null
    """
    for name in NON_NULLABLE_FIELDS:
        if name in fields and getattr(update, name) is None:
            raise ValidationError(f"{name} cannot be null")

    if "projectId" in fields:
        report.project = project

    if "title" in fields:
        report.title = truncate(update.title, MAX_REPORT_TITLE)

    if "tags" in fields:
        report.tags = normalize_tags(update.tags)

    if "reportedAt" in fields:
        report.reported_at = update.reportedAt

    if "comments" in fields:
        report.comments = truncate(update.comments, MAX_REPORT_COMMENTS)

    if "developerName" in fields:
        report.developer = developer

    if "level" in fields:
        report.criticality = update.level

    if "status" in fields:
        report.status = update.status

    if "userProvided" in fields:
        report.user_provided = update.userProvided

    return report
