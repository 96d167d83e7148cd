"""Developer model."""
from sqlalchemy import Column, String, DateTime, Uuid, func
import uuid
from app.database import Base


class Developer(Base):
    """Developer that reports can be assigned to."""
    __tablename__ = "developers"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    username = Column(String(255), unique=True, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
