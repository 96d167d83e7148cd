"""ARQ worker configuration."""
from app.services.criticality import CriticalityAnalysisService
from app.services.severity_classifier import SeverityClassifier
from app.utils.logger import logger
from app.workers.redis_config import redis_settings

# Import the actual task functions
from app.workers.tasks import (
    SessionLocal,
    analyze_report_criticality,
    build_schedule,
    scan_expired_sessions,
)


async def startup(ctx):
    """Worker startup hook: share one classifier and start the expiry loop."""
    logger.info("ARQ worker starting up...")
    ctx["criticality_service"] = CriticalityAnalysisService(SessionLocal, SeverityClassifier())
    schedule = build_schedule(ctx["redis"])
    schedule.start()
    ctx["expiry_schedule"] = schedule
    ctx["startup_complete"] = True


async def shutdown(ctx):
    """Worker shutdown hook."""
    logger.info("ARQ worker shutting down...")
    schedule = ctx.get("expiry_schedule")
    if schedule is not None:
        await schedule.stop()


class WorkerSettings:
    """ARQ worker settings."""

    # Use actual function references, not strings
    functions = [
        analyze_report_criticality,
        scan_expired_sessions,
    ]

    on_startup = startup
    on_shutdown = shutdown

    redis_settings = redis_settings

    # Job configuration
    max_jobs = 10  # Max concurrent jobs
    job_timeout = 120  # Classifier calls are bounded by their own timeout
    keep_result = 3600  # Keep results for 1 hour
    retry_jobs = False
