"""Tests for partial report updates."""
import uuid
from datetime import datetime, timezone

import pytest

from app.constants import CriticalityLevel, ReportStatus
from app.models import Developer, Project, Report
from app.schemas.report import ReportUpdateRequest
from app.services.report_merger import merge_report_update, present_fields
from app.utils.exceptions import ValidationError

REPORTED_AT = datetime(2025, 1, 1, 9, 0, tzinfo=timezone.utc)


def _report():
    return Report(
        id=uuid.uuid4(),
        project_id=uuid.uuid4(),
        session_id=uuid.uuid4(),
        title="Cart broken",
        tags=["BROKEN_LINK"],
        reported_at=REPORTED_AT,
        comments="Happens on checkout",
        user_provided=True,
        criticality=CriticalityLevel.HIGH,
        status=ReportStatus.NEW,
    )


def _merge(report, raw, **resolved):
    return merge_report_update(report, ReportUpdateRequest.model_validate(raw), present_fields(raw), **resolved)


class TestMerge:
    def test_absent_fields_are_untouched(self):
        report = _merge(_report(), {"title": "New title"})

        assert report.title == "New title"
        assert report.tags == ["BROKEN_LINK"]
        assert report.comments == "Happens on checkout"
        assert report.criticality == CriticalityLevel.HIGH
        assert report.status == ReportStatus.NEW
        assert report.reported_at == REPORTED_AT

    def test_explicit_null_clears_nullable_fields(self):
        report = _merge(_report(), {"title": None, "comments": None, "tags": None, "level": None})

        assert report.title is None
        assert report.comments is None
        assert report.tags is None
        assert report.criticality is None
        assert report.status == ReportStatus.NEW

    @pytest.mark.parametrize("field", ["reportedAt", "status", "userProvided"])
    def test_null_rejected_for_non_nullable_fields(self, field):
        report = _report()
        with pytest.raises(ValidationError):
            _merge(report, {"title": "changed", field: None})
        assert report.title == "Cart broken"

    def test_values_are_normalized(self):
        report = _merge(_report(), {"title": "t" * 300, "tags": ["slow_loading", "bogus"], "status": "DONE"})

        assert len(report.title) == 255
        assert report.tags == ["SLOW_LOADING"]
        assert report.status == ReportStatus.DONE

    def test_resolved_project_and_developer_are_assigned(self):
        project = Project(id=uuid.uuid4(), name="Other")
        developer = Developer(id=uuid.uuid4(), username="bob")
        report = _merge(
            _report(),
            {"projectId": str(project.id), "developerName": "bob"},
            project=project,
            developer=developer,
        )

        assert report.project is project
        assert report.developer is developer

    def test_non_object_document_rejected(self):
        with pytest.raises(ValidationError):
            present_fields(["title"])
