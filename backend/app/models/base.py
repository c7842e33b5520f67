"""
Column helpers shared by the models
"""
import uuid
from datetime import datetime, timezone


def generate_uuid() -> str:
    """Primary keys are UUID strings generated by the store"""
    return str(uuid.uuid4())


def utcnow() -> datetime:
    """Microsecond timestamps keep creation order stable"""
    return datetime.now(timezone.utc)
