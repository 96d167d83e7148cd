"""Tests for the analysis queue and ARQ job functions."""
import uuid
from datetime import timedelta

import pytest

from app.constants import CriticalityLevel, EventType
from app.models import Report
from app.services.criticality import CriticalityAnalysisService
from app.utils.analysis_queue import queue_criticality_analysis
from app.workers import tasks
from app.workers.redis_config import parse_redis_url
from conftest import NOW


class FakePool:
    def __init__(self, error=None):
        self.error = error
        self.jobs = []
        self.closed = False

    async def enqueue_job(self, name, *args):
        if self.error:
            raise self.error
        self.jobs.append((name, args))

    async def close(self):
        self.closed = True


class TestQueue:
    @pytest.mark.asyncio
    async def test_enqueues_on_given_pool(self):
        pool = FakePool()
        report_id = uuid.uuid4()

        assert await queue_criticality_analysis(report_id, redis=pool) is True
        assert pool.jobs == [("analyze_report_criticality", (str(report_id),))]
        assert pool.closed is False

    @pytest.mark.asyncio
    async def test_failure_returns_false(self):
        pool = FakePool(error=ConnectionError("redis down"))
        assert await queue_criticality_analysis(uuid.uuid4(), redis=pool) is False


class TestRedisUrl:
    def test_parses_host_port_and_database(self):
        settings = parse_redis_url("redis://:pw@cache.internal:6380/2")
        assert settings.host == "cache.internal"
        assert settings.port == 6380
        assert settings.password == "pw"
        assert settings.database == 2

    def test_defaults(self):
        settings = parse_redis_url("redis://")
        assert settings.host == "localhost"
        assert settings.port == 6379
        assert settings.database == 0


class TestJobs:
    @pytest.mark.asyncio
    async def test_analyze_job_uses_shared_service(self, session_factory, seed):
        project = seed.project()
        session = seed.session(project)
        seed.event(session, NOW - timedelta(minutes=1), type=EventType.ERROR)
        report = seed.report(project, session)

        class Classifier:
            async def classify(self, events):
                return CriticalityLevel.LOW

        ctx = {"criticality_service": CriticalityAnalysisService(session_factory, Classifier())}
        result = await tasks.analyze_report_criticality(ctx, str(report.id))

        assert result == {"success": True, "report_id": str(report.id), "criticality": "LOW"}
        with session_factory() as db:
            assert db.get(Report, report.id).criticality == CriticalityLevel.LOW

    @pytest.mark.asyncio
    async def test_analyze_job_reports_missing_report(self, session_factory):
        class Classifier:
            async def classify(self, events):
                return CriticalityLevel.LOW

        ctx = {"criticality_service": CriticalityAnalysisService(session_factory, Classifier())}
        result = await tasks.analyze_report_criticality(ctx, str(uuid.uuid4()))

        assert result["success"] is False

    @pytest.mark.asyncio
    async def test_scan_job_enqueues_created_reports(self, session_factory, seed, monkeypatch):
        project = seed.project()
        session = seed.session(project, start_time=NOW - timedelta(hours=1))
        seed.event(session, NOW - timedelta(minutes=30), type=EventType.ERROR)
        monkeypatch.setattr(tasks, "SessionLocal", session_factory)
        pool = FakePool()

        result = await tasks.scan_expired_sessions({"redis": pool})

        assert result["success"] is True
        assert result["reports_created"] == 1
        assert [name for name, _ in pool.jobs] == ["analyze_report_criticality"]
