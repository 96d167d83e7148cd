"""Session model."""
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, Uuid, func
from sqlalchemy.orm import relationship
import uuid
from app.database import Base, JSONType


class Session(Base):
    """One recording of a user interacting with a monitored application."""
    __tablename__ = "sessions"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    project_id = Column(Uuid, ForeignKey("projects.id"), nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=True)  # Set only when the session is closed

    # Client metadata
    browser = Column(String, nullable=True)
    browser_version = Column(String, nullable=True)
    os = Column(String, nullable=True)
    device_type = Column(String(20), nullable=True)
    screen_resolution = Column(String(20), nullable=True)
    viewport_size = Column(String(20), nullable=True)
    language = Column(String(35), nullable=True)
    user_agent = Column(String, nullable=True)
    ip_address = Column(String(45), nullable=True)
    cookies_hash = Column(String, nullable=True)
    plugins = Column(JSONType, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    project = relationship("Project", back_populates="sessions")
    events = relationship("Event", back_populates="session", cascade="all, delete-orphan", order_by="Event.timestamp")
