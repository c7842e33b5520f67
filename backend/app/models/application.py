"""
Application models linking candidates to jobs
"""
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.base import generate_uuid, utcnow


class Application(Base):
    """A candidate applying to a job"""

    __tablename__ = "applications"

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Foreign keys
    candidate_id = Column(String(36), ForeignKey("candidates.id"), nullable=False, index=True)
    job_id = Column(String(36), ForeignKey("jobs.id"), nullable=False, index=True)

    # Pipeline
    status = Column(String(50), nullable=False, default="pending")  # pending, screening, interview, offer, rejected, hired
    match_score = Column(Integer)  # 0-100
    match_reasons = Column(Text)

    # Metadata
    applied_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)

    # Relationships
    candidate = relationship("Candidate", back_populates="applications")
    job = relationship("Job", back_populates="applications")

    __table_args__ = (
        Index("idx_application_candidate_job", "candidate_id", "job_id"),
    )
