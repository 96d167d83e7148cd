"""Tests for criticality analysis of reports."""
import uuid
from datetime import timedelta

import pytest

from app.constants import CriticalityLevel, EventType
from app.models import Report
from app.services.criticality import CriticalityAnalysisService
from app.utils.exceptions import InternalStateError
from conftest import NOW


class StubClassifier:
    def __init__(self, level=CriticalityLevel.HIGH, error=None):
        self.level = level
        self.error = error
        self.calls = []

    async def classify(self, events):
        self.calls.append([event.id for event in events])
        if self.error:
            raise self.error
        return self.level


@pytest.fixture
def project(seed):
    return seed.project()


def _criticality(session_factory, report_id):
    with session_factory() as db:
        return db.get(Report, report_id).criticality


class TestAnalyzeAndUpdate:
    @pytest.mark.asyncio
    async def test_stores_classifier_verdict(self, session_factory, seed, project):
        session = seed.session(project)
        first = seed.event(session, NOW - timedelta(minutes=3), type=EventType.ERROR)
        second = seed.event(session, NOW - timedelta(minutes=2))
        report = seed.report(project, session)
        classifier = StubClassifier(CriticalityLevel.CRITICAL)

        level = await CriticalityAnalysisService(session_factory, classifier).analyze_and_update(report.id)

        assert level == CriticalityLevel.CRITICAL
        assert _criticality(session_factory, report.id) == CriticalityLevel.CRITICAL
        assert classifier.calls == [[first.id, second.id]]

    @pytest.mark.asyncio
    async def test_no_events_is_low_without_calling_classifier(self, session_factory, seed, project):
        report = seed.report(project, seed.session(project))
        classifier = StubClassifier()

        level = await CriticalityAnalysisService(session_factory, classifier).analyze_and_update(report.id)

        assert level == CriticalityLevel.LOW
        assert classifier.calls == []
        assert _criticality(session_factory, report.id) == CriticalityLevel.LOW

    @pytest.mark.asyncio
    async def test_classifier_exception_is_unknown(self, session_factory, seed, project):
        session = seed.session(project)
        seed.event(session, NOW - timedelta(minutes=3), type=EventType.ERROR)
        report = seed.report(project, session, criticality=CriticalityLevel.HIGH)
        classifier = StubClassifier(error=ValueError("OpenRouter API key required"))

        level = await CriticalityAnalysisService(session_factory, classifier).analyze_and_update(report.id)

        assert level == CriticalityLevel.UNKNOWN
        assert _criticality(session_factory, report.id) == CriticalityLevel.UNKNOWN

    @pytest.mark.asyncio
    async def test_missing_report_is_internal_error(self, session_factory):
        service = CriticalityAnalysisService(session_factory, StubClassifier())
        with pytest.raises(InternalStateError):
            await service.analyze_and_update(uuid.uuid4())
