"""Event model for telemetry recorded during a session."""
from sqlalchemy import Column, String, Text, DateTime, Enum, ForeignKey, Uuid, func, Index
from sqlalchemy.orm import relationship
import uuid
from app.database import Base
from app.constants import EventType


class Event(Base):
    """Single observation recorded during a session."""
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(Uuid, ForeignKey("sessions.id"), nullable=False, index=True)
    type = Column(Enum(EventType, native_enum=False, length=20), nullable=False)
    name = Column(String(255), nullable=True)
    log = Column(Text, nullable=True)
    stack_trace = Column(Text, nullable=True)
    url = Column(String, nullable=True)
    element = Column(String, nullable=True)  # For user actions
    timestamp = Column(DateTime(timezone=True), nullable=False)

    # Optional metadata, stored as text
    file_name = Column(String, nullable=True)
    line_number = Column(String, nullable=True)
    status_code = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    session = relationship("Session", back_populates="events")

    __table_args__ = (
        Index("idx_event_session_timestamp", "session_id", "timestamp"),
        Index("idx_event_session_type", "session_id", "type"),
    )
