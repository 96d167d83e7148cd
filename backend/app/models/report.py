"""Report model for bug reports."""
from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from app.database import Base, JSONType
from app.constants import CriticalityLevel, ReportStatus


class Report(Base):
    """Bug report, submitted by a user or generated when a session expires."""
    __tablename__ = "reports"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id"), nullable=False, index=True)
    session_id = Column(Uuid, ForeignKey("sessions.id"), nullable=False, index=True)
    title = Column(String(255), nullable=True)
    tags = Column(JSONType, nullable=True)  # Tag names, in submitted order
    reported_at = Column(DateTime(timezone=True), nullable=False)
    comments = Column(String(5000), nullable=True)
    user_email = Column(String(255), nullable=True)
    screen = Column(Text, nullable=True)  # Screenshot payload
    current_url = Column(String(2048), nullable=True)
    user_provided = Column(Boolean, default=False, nullable=False)
    related_event_ids = Column(JSONType, nullable=True)  # Snapshot taken at creation
    developer_id = Column(Uuid, ForeignKey("developers.id"), nullable=True, index=True)
    criticality = Column(Enum(CriticalityLevel, native_enum=False, length=20), nullable=True)
    status = Column(Enum(ReportStatus, native_enum=False, length=20), default=ReportStatus.NEW, nullable=False, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relationships
    project = relationship("Project", back_populates="reports")
    session = relationship("Session")
    developer = relationship("Developer")
