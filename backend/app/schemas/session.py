"""Schemas for session management."""
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from app.schemas.validators import PastOrPresentDatetime
from app.utils.serialization import serialize_datetime, serialize_uuid

IP_ADDRESS_PATTERN = (
    r"^\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}$"
    r"|^([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}$"
)


class SessionRequest(BaseModel):
    """Request schema for POST /api/sessions."""
    projectId: UUID = Field(..., description="Project the session belongs to")
    startTime: PastOrPresentDatetime = Field(..., description="When the recording started")
    browser: Optional[str] = None
    browserVersion: Optional[str] = None
    os: Optional[str] = None
    deviceType: Optional[str] = Field(None, pattern=r"^(?i:desktop|mobile|tablet)$")
    screenResolution: Optional[str] = Field(None, pattern=r"^\d+x\d+$")
    viewportSize: Optional[str] = Field(None, pattern=r"^\d+x\d+$")
    language: Optional[str] = None
    userAgent: Optional[str] = None
    ipAddress: Optional[str] = Field(None, pattern=IP_ADDRESS_PATTERN)
    cookiesHash: Optional[str] = None
    plugins: Optional[List[str]] = None


class SessionCreationResponse(BaseModel):
    """Response schema for POST /api/sessions."""
    message: str
    sessionId: str


class SessionDetailsResponse(BaseModel):
    """Session details."""
    sessionId: str
    projectId: str
    isActive: bool
    startTime: Optional[str] = None
    endTime: Optional[str] = None
    browser: Optional[str] = None
    browserVersion: Optional[str] = None
    os: Optional[str] = None
    deviceType: Optional[str] = None
    screenResolution: Optional[str] = None
    viewportSize: Optional[str] = None
    language: Optional[str] = None
    userAgent: Optional[str] = None
    ipAddress: Optional[str] = None
    plugins: List[str] = []

    @classmethod
    def from_orm(cls, obj) -> "SessionDetailsResponse":
        """Convert SQLAlchemy model to response model."""
        return cls(
            sessionId=serialize_uuid(obj.id),
            projectId=serialize_uuid(obj.project_id),
            isActive=obj.is_active,
            startTime=serialize_datetime(obj.start_time),
            endTime=serialize_datetime(obj.end_time),
            browser=obj.browser,
            browserVersion=obj.browser_version,
            os=obj.os,
            deviceType=obj.device_type,
            screenResolution=obj.screen_resolution,
            viewportSize=obj.viewport_size,
            language=obj.language,
            userAgent=obj.user_agent,
            ipAddress=obj.ip_address,
            plugins=obj.plugins or [],
        )
