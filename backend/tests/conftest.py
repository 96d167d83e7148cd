import os

# Settings are read at import time; point them at throwaway values first.
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("OPENROUTER_API_KEY", "test-key")
os.environ.setdefault("REDIS_URL", "redis://127.0.0.1:6379")

import uuid
from datetime import datetime, timedelta, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker

from app.api.deps import get_report_notifier
from app.constants import CriticalityLevel, EventType, ReportStatus
from app.database import Base, get_db
from app.main import app
from app.models import Developer, Event, Project, Report, Session

NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_engine(path):
    engine = create_engine(
        f"sqlite:///{path}",
        connect_args={"check_same_thread": False},
    )

    # pysqlite needs these hooks for SAVEPOINT to behave
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")

    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def engine(tmp_path):
    engine = make_engine(tmp_path / "test.db")
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


class RecordingNotifier:
    """Stands in for the queue; records every report it is asked to analyze."""

    def __init__(self, result=True):
        self.result = result
        self.calls = []

    async def __call__(self, report_id):
        self.calls.append(report_id)
        return self.result


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def client(session_factory, notifier):
    def _get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = _get_db
    app.dependency_overrides[get_report_notifier] = lambda: notifier
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """Helpers that insert rows and commit them."""
    return Seeder(session_factory)


class Seeder:
    def __init__(self, session_factory):
        self.session_factory = session_factory

    def _add(self, obj):
        with self.session_factory() as db:
            db.add(obj)
            db.commit()
        return obj

    def project(self, name="Shop"):
        return self._add(Project(id=uuid.uuid4(), name=name))

    def developer(self, username="alice"):
        return self._add(Developer(id=uuid.uuid4(), username=username))

    def session(self, project, start_time=NOW - timedelta(hours=1), is_active=True, end_time=None):
        return self._add(Session(
            id=uuid.uuid4(),
            project_id=project.id,
            start_time=start_time,
            is_active=is_active,
            end_time=end_time,
        ))

    def event(self, session, timestamp, type=EventType.ACTION, name="click", url="https://shop.test/cart", log="log"):
        return self._add(Event(
            id=uuid.uuid4(),
            session_id=session.id,
            type=type,
            name=name,
            log=log,
            url=url,
            timestamp=timestamp,
        ))

    def report(self, project, session, reported_at=NOW, status=ReportStatus.NEW, title="Broken cart", **fields):
        return self._add(Report(
            id=uuid.uuid4(),
            project_id=project.id,
            session_id=session.id,
            title=title,
            tags=fields.pop("tags", []),
            reported_at=reported_at,
            user_provided=fields.pop("user_provided", True),
            criticality=fields.pop("criticality", CriticalityLevel.UNKNOWN),
            status=status,
            related_event_ids=[],
            **fields,
        ))
