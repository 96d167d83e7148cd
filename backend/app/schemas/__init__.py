"""Pydantic schemas for request/response validation."""
from app.schemas.session import SessionRequest, SessionCreationResponse, SessionDetailsResponse
from app.schemas.event import EventRequest, EventCreationResponse, EventDetailsResponse
from app.schemas.report import (
    ReportCreationRequest,
    ReportCreationResponse,
    ReportUpdateRequest,
    ReportCard,
    ReportPage,
)

__all__ = [
    "SessionRequest",
    "SessionCreationResponse",
    "SessionDetailsResponse",
    "EventRequest",
    "EventCreationResponse",
    "EventDetailsResponse",
    "ReportCreationRequest",
    "ReportCreationResponse",
    "ReportUpdateRequest",
    "ReportCard",
    "ReportPage",
]
