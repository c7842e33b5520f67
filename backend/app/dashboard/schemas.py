"""
Dashboard Pydantic schemas
"""
from typing import List, Union
from pydantic import BaseModel

from app.pages.schemas import NotificationView


class StatCard(BaseModel):
    title: str
    value: Union[int, str]


class QuickAction(BaseModel):
    title: str
    description: str
    route: str


class DashboardView(BaseModel):
    """Dashboard view state"""
    stats: List[StatCard]
    quick_actions: List[QuickAction]
    recent_activity: str
    notifications: List[NotificationView]
