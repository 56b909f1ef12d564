"""SQLAlchemy ORM models for MockPrep.

All models are imported here to ensure they're registered with Base.metadata
before any database operations.
"""

# Import base first
from mockprep.config.database import Base

from .sessions import InterviewSession, SESSION_STATUSES
from .responses import Response
from .reports import Report

__all__ = [
    "Base",
    "InterviewSession",
    "SESSION_STATUSES",
    "Response",
    "Report",
]
