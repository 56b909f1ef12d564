"""Interview session model."""

from sqlalchemy import Column, Integer, String, DateTime, Float, JSON
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow

SESSION_STATUSES = ("in-progress", "completed")


class InterviewSession(BaseModel):
    """
    One interview attempt by a user in one domain.

    Status Values:
    - in-progress: Started, answers may still be submitted
    - completed: Report generated
    """

    __tablename__ = "interview_sessions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(64), nullable=False, index=True)
    domain = Column(String(50), nullable=False)

    # Immutable snapshot taken at start:
    # [{"question_id", "question_text", "category", "difficulty"}]
    questions = Column(JSON, nullable=False, default=list)

    status = Column(String(20), nullable=False, default="in-progress")

    # Timestamps
    started_at = Column(DateTime, nullable=False, default=utcnow)
    completed_at = Column(DateTime, nullable=True)

    # Mean answer score, set when the report is generated
    total_score = Column(Float, nullable=True)

    # Relationships
    responses = relationship("Response", back_populates="session", cascade="all, delete-orphan")
    report = relationship("Report", back_populates="session", uselist=False)

    def __repr__(self) -> str:
        return f"<InterviewSession(id={self.id}, domain={self.domain}, status={self.status})>"
