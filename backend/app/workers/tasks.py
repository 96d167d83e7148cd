"""ARQ background tasks for report classification and session expiry."""
from typing import Any, Dict
from uuid import UUID

from sqlalchemy.orm import sessionmaker

from app.config import settings
from app.database import engine
from app.services.criticality import CriticalityAnalysisService
from app.services.session_expiry import ExpiryScanSchedule, SessionExpiryScanner
from app.services.severity_classifier import SeverityClassifier
from app.utils.analysis_queue import queue_criticality_analysis
from app.utils.logger import logger

# Reuse database engine from app.database
SessionLocal = sessionmaker(autoflush=False, expire_on_commit=False, bind=engine)


def build_scanner() -> SessionExpiryScanner:
    return SessionExpiryScanner(SessionLocal, settings.session_live_timeout)


def build_schedule(redis) -> ExpiryScanSchedule:
    """Build the expiry schedule, enqueuing analysis on the worker's own pool."""
    async def notify(report_id: UUID) -> bool:
        return await queue_criticality_analysis(report_id, redis=redis)

    return ExpiryScanSchedule(build_scanner(), notify, settings.session_check_interval)


async def analyze_report_criticality(ctx: Dict[str, Any], report_id: str) -> Dict[str, Any]:
    """
    Classify a report and store its criticality.

    Args:
        ctx: ARQ context
        report_id: The report to classify

    Returns:
        Dict with success status and details
    """
    service = ctx.get("criticality_service") or CriticalityAnalysisService(SessionLocal, SeverityClassifier())

    try:
        level = await service.analyze_and_update(UUID(report_id))
        return {"success": True, "report_id": report_id, "criticality": level.value}
    except Exception as e:
        logger.error(f"Error analyzing criticality for report {report_id}: {e}", exc_info=True)
        return {"success": False, "error": str(e)}


async def scan_expired_sessions(ctx: Dict[str, Any]) -> Dict[str, Any]:
    """
    Run a single expiry scan on demand.

    Returns:
        Dict with counts of sessions closed and reports created
    """
    schedule = build_schedule(ctx.get("redis"))
    try:
        result = await schedule.run_tick()
    except Exception as e:
        logger.error(f"Expiry scan failed: {e}", exc_info=True)
        return {"success": False, "error": str(e)}

    return {
        "success": True,
        "sessions_closed": result.closed,
        "reports_created": len(result.created_report_ids),
        "sessions_failed": len(result.failed_sessions),
    }
