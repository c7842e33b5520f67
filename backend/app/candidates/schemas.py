"""
Candidate Pydantic schemas
"""
from typing import List, Optional, Union
from pydantic import BaseModel
from datetime import datetime

from app.pages.schemas import DialogView, EmptyStateView, NotificationView


class CandidateRow(BaseModel):
    """Candidate row as read from the store"""
    id: str
    full_name: str
    email: str
    phone: Optional[str] = None
    location: Optional[str] = None
    linkedin_url: Optional[str] = None
    resume_url: Optional[str] = None
    skills: Optional[List[str]] = None
    experience_years: Optional[int] = None
    source: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CandidateDraft(BaseModel):
    """Add-candidate form as typed by the user; numbers stay text until submit"""
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    linkedin_url: str = ""
    experience_years: Union[int, str] = ""


class CandidateCard(BaseModel):
    """One candidate in the list; only rows with a value are rendered"""
    id: str
    full_name: str
    email: str
    experience: Optional[str] = None
    phone: Optional[str] = None
    location: Optional[str] = None
    resume_url: Optional[str] = None
    created_at: datetime


class CandidatesView(BaseModel):
    """Candidates page view state"""
    search: str
    total: int
    candidates: List[CandidateCard]
    empty_state: Optional[EmptyStateView] = None
    dialog: DialogView
    notifications: List[NotificationView]
