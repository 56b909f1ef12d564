"""Report model for session-level aggregates."""

from sqlalchemy import Column, Integer, String, DateTime, Float, Text, JSON, ForeignKey
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow


class Report(BaseModel):
    """
    Aggregate summary of a session's responses.

    Generated once per session and never rewritten afterwards.
    """

    __tablename__ = "reports"

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        Integer,
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        nullable=False,
        unique=True,
    )
    user_id = Column(String(64), nullable=False, index=True)
    domain = Column(String(50), nullable=False)

    total_questions = Column(Integer, nullable=False, default=0)
    average_score = Column(Float, nullable=False, default=0)

    strengths = Column(JSON, nullable=False, default=list)
    gaps = Column(JSON, nullable=False, default=list)
    recommendations = Column(JSON, nullable=False, default=list)
    overall_feedback = Column(Text, nullable=False, default="")

    generated_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    session = relationship("InterviewSession", back_populates="report")

    def __repr__(self) -> str:
        return f"<Report(id={self.id}, session_id={self.session_id}, average={self.average_score})>"
