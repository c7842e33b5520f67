"""
View-state schemas shared by the pages
"""
from typing import Dict, Optional
from pydantic import BaseModel


class EmptyStateView(BaseModel):
    """Placeholder shown when a list has nothing to display"""
    title: str
    hint: str


class DialogView(BaseModel):
    """Create dialog: visibility, submission state and the draft"""
    open: bool
    state: str
    draft: Dict[str, str]
    error: Optional[str] = None


class NotificationView(BaseModel):
    level: str
    message: str
