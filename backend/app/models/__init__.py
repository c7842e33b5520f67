"""
Database models
"""
from app.models.user import AppRole, User, Profile, UserRole
from app.models.job import Job
from app.models.candidate import Candidate
from app.models.application import Application

__all__ = [
    "AppRole",
    "User",
    "Profile",
    "UserRole",
    "Job",
    "Candidate",
    "Application",
]
