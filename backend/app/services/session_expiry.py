"""Expiry of idle sessions and the automatic reports they produce."""
import asyncio
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Awaitable, Callable, List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from app.models.session import Session as SessionModel
from app.repositories import events as event_store
from app.repositories import reports as report_store
from app.repositories import sessions as session_store
from app.services.reports import build_automatic_report
from app.utils.clock import utc_now
from app.utils.logger import logger

ReportNotifier = Callable[[UUID], Awaitable[bool]]


@dataclass
class ScanResult:
    """Outcome of a single expiry scan."""
    expired: int = 0
    closed: int = 0
    skipped: int = 0
    created_report_ids: List[UUID] = field(default_factory=list)
    failed_sessions: List[UUID] = field(default_factory=list)


class SessionExpiryScanner:
    """
    Closes sessions that have been idle longer than the live timeout.

    A closed session that recorded an error gets an automatic report
    referencing all of its events; any other closed session has its
    events deleted.
    """

    def __init__(
        self,
        session_factory: Callable[[], Session],
        live_timeout: timedelta,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.session_factory = session_factory
        self.live_timeout = live_timeout
        self.clock = clock

    def run_once(self) -> ScanResult:
        """
        Run one scan in a single transaction.

        Each session is processed inside a savepoint, so a failure rolls
        back only that session and the rest of the scan still commits.
        Report IDs are returned only once the transaction has committed.
        """
        now = self.clock()
        deadline = now - self.live_timeout
        result = ScanResult()

        db = self.session_factory()
        try:
            expired = session_store.find_expired(db, deadline)
            result.expired = len(expired)

            for session in expired:
                session_id = session.id
                try:
                    with db.begin_nested():
                        report_id = self._process_session(db, session, now)
                except Exception as e:
                    logger.error(f"[EXPIRY] Failed to process session {session_id}: {e}", exc_info=True)
                    result.failed_sessions.append(session_id)
                    continue

                if report_id is False:
                    result.skipped += 1
                    continue

                result.closed += 1
                if report_id is not None:
                    result.created_report_ids.append(report_id)

            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

        if result.expired:
            logger.info(
                f"[EXPIRY] Scan finished: {result.closed} closed, {len(result.created_report_ids)} reports, "
                f"{result.skipped} skipped, {len(result.failed_sessions)} failed"
            )
        return result

    def _process_session(self, db: Session, session: SessionModel, now: datetime):
        """
        Close one expired session.

        Returns:
            The new report's ID, None when the session had no errors, or
            False when another scan closed the session first
        """
        latest = event_store.find_latest_timestamp_by_session(db, session.id)
        end_time = latest or now

        if not session_store.close(db, session.id, end_time):
            logger.debug(f"[EXPIRY] Session {session.id} already closed, skipping")
            return False

        if event_store.exists_error_event_for_session(db, session.id):
            events = event_store.find_all_by_session(db, session.id)
            report = report_store.save(db, build_automatic_report(session, events, now))
            logger.info(f"[EXPIRY] Session {session.id} closed with automatic report {report.id}")
            return report.id

        deleted = event_store.delete_all_by_session(db, session.id)
        logger.debug(f"[EXPIRY] Session {session.id} closed, {deleted} events deleted")
        return None


class ExpiryScanSchedule:
    """
    Runs the scanner repeatedly with a fixed delay between scans.

    The delay is measured from the end of one scan to the start of the
    next, so scans never overlap within one process.
    """

    def __init__(self, scanner: SessionExpiryScanner, notify: ReportNotifier, interval: timedelta):
        self.scanner = scanner
        self.notify = notify
        self.interval = interval
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def run_tick(self) -> ScanResult:
        """Run one scan, then notify every report it created."""
        result = await asyncio.to_thread(self.scanner.run_once)
        for report_id in result.created_report_ids:
            if not await self.notify(report_id):
                logger.warning(f"[EXPIRY] Criticality analysis not queued for report {report_id}")
        return result

    async def _loop(self) -> None:
        while True:
            try:
                await self.run_tick()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"[EXPIRY] Scan failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval.total_seconds())

    def start(self) -> None:
        """Start the loop on the running event loop."""
        if self.running:
            return
        logger.info(f"[EXPIRY] Starting expiry scans every {self.interval.total_seconds():.0f}s")
        self._task = asyncio.create_task(self._loop())

    async def stop(self) -> None:
        """Cancel the loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("[EXPIRY] Expiry scans stopped")
