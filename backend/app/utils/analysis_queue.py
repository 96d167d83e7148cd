"""Criticality analysis queue utilities."""
from typing import Optional
from uuid import UUID

from arq import ArqRedis, create_pool

from app.utils.logger import logger
from app.workers.redis_config import redis_settings


async def queue_criticality_analysis(report_id: UUID | str, redis: Optional[ArqRedis] = None) -> bool:
    """
    Queue a criticality analysis job for a committed report.

    Args:
        report_id: The report to classify
        redis: Existing pool to enqueue on; a short-lived pool is opened when omitted

    Returns:
        True if job was queued successfully, False otherwise
    """
    pool = redis
    try:
        if pool is None:
            pool = await create_pool(redis_settings)
        await pool.enqueue_job("analyze_report_criticality", str(report_id))
        logger.info(f"[QUEUE] Criticality analysis queued for report {report_id}")
        return True
    except Exception as e:
        logger.error(f"[QUEUE] Failed to queue criticality analysis for report {report_id}: {e}", exc_info=True)
        return False
    finally:
        if redis is None and pool is not None:
            await pool.close()
