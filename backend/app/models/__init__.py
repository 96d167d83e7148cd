"""Models package."""
from app.models.project import Project
from app.models.developer import Developer
from app.models.session import Session
from app.models.event import Event
from app.models.report import Report

__all__ = ["Project", "Developer", "Session", "Event", "Report"]
