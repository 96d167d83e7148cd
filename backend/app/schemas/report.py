"""Schemas for bug reports."""
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from app.constants import CriticalityLevel, ReportStatus
from app.schemas.validators import UtcDatetime
from app.utils.serialization import (
    serialize_datetime,
    serialize_enum,
    serialize_list,
    serialize_uuid,
)


class ReportCreationRequest(BaseModel):
    """Request schema for POST /api/reports/widget."""
    projectId: UUID
    sessionId: UUID
    title: str = Field(..., min_length=1)
    tags: List[str] = Field(..., description="Tag names; unknown values are dropped")
    reportedAt: UtcDatetime
    comments: Optional[str] = None
    userEmail: Optional[str] = None
    screen: Optional[str] = Field(None, description="Screenshot payload (data URL or base64)")
    currentUrl: str = Field(..., min_length=1)
    userProvided: bool


class ReportCreationResponse(BaseModel):
    """Response schema for POST /api/reports/widget."""
    message: str
    reportId: str


class ReportUpdateRequest(BaseModel):
    """
    Typed view of a dashboard update document.

    Every field defaults to None, so this model alone cannot tell an omitted
    field from an explicit null. The update path pairs it with the set of
    keys present in the raw document.
    """
    model_config = ConfigDict(extra="ignore")

    projectId: Optional[UUID] = None
    title: Optional[str] = None
    tags: Optional[List[str]] = None
    reportedAt: Optional[UtcDatetime] = None
    comments: Optional[str] = None
    developerName: Optional[str] = None
    level: Optional[CriticalityLevel] = None
    status: Optional[ReportStatus] = None
    userProvided: Optional[bool] = None


class ReportCard(BaseModel):
    """Full report representation."""
    id: str
    projectId: str
    sessionId: str
    title: Optional[str] = None
    tags: List[str] = []
    reportedAt: Optional[str] = None
    comments: Optional[str] = None
    userEmail: Optional[str] = None
    screen: Optional[str] = None
    currentUrl: Optional[str] = None
    userProvided: bool
    eventIDs: List[str] = []
    level: Optional[str] = None
    status: Optional[str] = None
    developerName: Optional[str] = None

    @classmethod
    def from_orm(cls, obj) -> "ReportCard":
        """Convert SQLAlchemy model to response model."""
        return cls(
            id=serialize_uuid(obj.id),
            projectId=serialize_uuid(obj.project_id),
            sessionId=serialize_uuid(obj.session_id),
            title=obj.title,
            tags=serialize_list(obj.tags),
            reportedAt=serialize_datetime(obj.reported_at),
            comments=obj.comments,
            userEmail=obj.user_email,
            screen=obj.screen,
            currentUrl=obj.current_url,
            userProvided=obj.user_provided,
            eventIDs=serialize_list(obj.related_event_ids),
            level=serialize_enum(obj.criticality),
            status=serialize_enum(obj.status),
            developerName=obj.developer.username if obj.developer else None,
        )


class ReportPage(BaseModel):
    """One page of report cards."""
    content: List[ReportCard]
    page: int
    size: int
    totalElements: int
    totalPages: int
