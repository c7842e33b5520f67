"""
Candidate models
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, JSON
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import generate_uuid, utcnow


class Candidate(Base):
    """Candidate model"""

    __tablename__ = "candidates"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Personal information
    full_name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False, index=True)
    phone = Column(String(50))
    location = Column(String(255))
    linkedin_url = Column(String(500))
    resume_url = Column(String(500))

    # Profile
    skills = Column(JSON)  # List of skills
    experience_years = Column(Integer)
    source = Column(String(100))  # referral, job board, sourcing, etc.
    notes = Column(Text)

    # Metadata
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    applications = relationship("Application", back_populates="candidate")
