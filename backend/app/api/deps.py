"""Shared endpoint dependencies."""
from app.services.session_expiry import ReportNotifier
from app.utils.analysis_queue import queue_criticality_analysis


def get_report_notifier() -> ReportNotifier:
    """Return the callable that schedules criticality analysis of a committed report."""
    return queue_criticality_analysis
