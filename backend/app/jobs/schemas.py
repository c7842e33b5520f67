"""
Job Pydantic schemas
"""
from typing import List, Literal, Optional
from pydantic import BaseModel
from datetime import datetime

from app.pages.schemas import DialogView, EmptyStateView, NotificationView


class JobRow(BaseModel):
    """Job row as read from the store"""
    id: str
    title: str
    department: Optional[str] = None
    location: Optional[str] = None
    description: str
    requirements: Optional[str] = None
    status: str
    created_by: str
    created_at: datetime
    updated_at: Optional[datetime] = None


class JobDraft(BaseModel):
    """Create-job form as typed by the user"""
    title: str = ""
    department: str = ""
    location: str = ""
    description: str = ""
    requirements: str = ""


class JobStatusUpdate(BaseModel):
    """Job status change"""
    status: Literal["open", "closed"]


class JobCard(BaseModel):
    """One job in the list; absent optional rows are left out"""
    id: str
    title: str
    department: Optional[str] = None
    location: Optional[str] = None
    status: str
    badge_variant: str
    description: str
    created_at: datetime


class JobsView(BaseModel):
    """Jobs page view state"""
    search: str
    total: int
    jobs: List[JobCard]
    empty_state: Optional[EmptyStateView] = None
    dialog: DialogView
    notifications: List[NotificationView]
