"""Schemas for event ingestion."""
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.constants import EventType
from app.schemas.validators import PastOrPresentDatetime
from app.utils.serialization import serialize_datetime, serialize_enum, serialize_uuid


class EventMetadata(BaseModel):
    """Optional structured metadata attached to an event."""
    fileName: Optional[str] = None
    lineNumber: Optional[str] = Field(None, pattern=r"^[0-9]*$")
    statusCode: Optional[str] = Field(None, pattern=r"^[0-9]*$")


class EventRequest(BaseModel):
    """Request schema for POST /api/events."""
    sessionId: UUID = Field(..., description="Session the event was recorded in")
    type: EventType
    name: str = Field(..., min_length=1)
    log: str = Field(..., min_length=1)
    stackTrace: Optional[str] = None
    url: str = Field(..., min_length=1)
    element: Optional[str] = None
    timestamp: PastOrPresentDatetime
    metadata: Optional[EventMetadata] = None


class EventCreationResponse(BaseModel):
    """Response schema for POST /api/events."""
    message: str
    eventId: str


class EventDetailsResponse(BaseModel):
    """Event details."""
    eventId: str
    sessionId: str
    type: str
    name: Optional[str] = None
    log: Optional[str] = None
    stackTrace: Optional[str] = None
    url: Optional[str] = None
    element: Optional[str] = None
    timestamp: Optional[str] = None
    metadata: EventMetadata

    @classmethod
    def from_orm(cls, obj) -> "EventDetailsResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            eventId=serialize_uuid(obj.id),
            sessionId=serialize_uuid(obj.session_id),
            type=serialize_enum(obj.type),
            name=obj.name,
            log=obj.log,
            stackTrace=obj.stack_trace,
            url=obj.url,
            element=obj.element,
            timestamp=serialize_datetime(obj.timestamp),
            metadata=EventMetadata(
                fileName=obj.file_name,
                lineNumber=obj.line_number,
                statusCode=obj.status_code,
            ),
        )
