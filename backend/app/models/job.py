"""
Job posting models
"""
from sqlalchemy import Column, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import generate_uuid, utcnow


class Job(Base):
    """Job posting owned by the recruiter who created it"""

    __tablename__ = "jobs"

    id = Column(String(36), primary_key=True, default=generate_uuid)
    title = Column(String(255), nullable=False, index=True)
    department = Column(String(255))
    location = Column(String(255))
    description = Column(Text, nullable=False)
    requirements = Column(Text)

    # Status
    status = Column(String(50), nullable=False, default="open")  # open, closed

    # Metadata
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    applications = relationship("Application", back_populates="job")
