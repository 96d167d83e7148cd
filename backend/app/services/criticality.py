"""Criticality analysis of newly created reports."""
from typing import Callable, List
from uuid import UUID

from sqlalchemy.orm import Session

from app.constants import CriticalityLevel
from app.models.event import Event
from app.repositories import events as event_store
from app.repositories import reports as report_store
from app.services.severity_classifier import SeverityClassifier
from app.utils.exceptions import InternalStateError
from app.utils.logger import logger


class CriticalityAnalysisService:
    """Loads a report's session events, classifies them and stores the result."""

    def __init__(self, session_factory: Callable[[], Session], classifier: SeverityClassifier):
        self.session_factory = session_factory
        self.classifier = classifier

    async def determine_criticality(self, events: List[Event]) -> CriticalityLevel:
        """
        Decide the criticality for a set of events.

        No events means LOW without calling the classifier; a classifier
        that raises yields UNKNOWN.
        """
        if not events:
            return CriticalityLevel.LOW

        try:
            return await self.classifier.classify(events)
        except Exception as e:
            logger.error(f"[CRITICALITY] Classifier raised, marking UNKNOWN: {e}", exc_info=True)
            return CriticalityLevel.UNKNOWN

    async def analyze_and_update(self, report_id: UUID) -> CriticalityLevel:
        """
        Classify a committed report and persist its criticality.

        Runs in a database session of its own, so it can neither roll back
        nor be rolled back by the transaction that created the report.

        Raises:
            InternalStateError: If the report does not exist
        """
        db = self.session_factory()
        try:
            report = report_store.find_by_id(db, report_id)
            if report is None:
                raise InternalStateError(f"Report not found: {report_id}")

            events = event_store.find_all_by_session(db, report.session_id)
            level = await self.determine_criticality(events)

            report.criticality = level
            report_store.save(db, report)
            db.commit()

            logger.info(f"[CRITICALITY] Report {report_id} classified as {level.value}")
            return level
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()
