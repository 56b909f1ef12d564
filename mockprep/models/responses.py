"""Response model for evaluated answers."""

from sqlalchemy import Column, Integer, String, DateTime, Float, Text, JSON, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from .base import BaseModel, utcnow


class Response(BaseModel):
    """
    One evaluated answer to one question within a session.

    At most one row exists per (session_id, question_id); resubmitting
    an answer replaces the evaluation in place.
    """

    __tablename__ = "responses"
    __table_args__ = (
        UniqueConstraint("session_id", "question_id", name="uq_responses_session_question"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    session_id = Column(
        Integer,
        ForeignKey("interview_sessions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    user_id = Column(String(64), nullable=False)

    # Denormalized for report convenience
    question_id = Column(String(100), nullable=False)
    question_text = Column(Text, nullable=False)

    user_answer = Column(Text, nullable=False)

    # Scores (0-10, one decimal)
    score = Column(Float, nullable=False, default=0)
    technical_score = Column(Float, nullable=True)
    communication_score = Column(Float, nullable=True)
    focus_score = Column(Float, nullable=True)  # supplied by the client

    # Feedback
    feedback = Column(Text, nullable=False, default="")
    ideal_answer = Column(Text, nullable=False, default="")
    strengths = Column(JSON, nullable=False, default=list)
    areas_to_improve = Column(JSON, nullable=False, default=list)
    mistakes = Column(JSON, nullable=False, default=list)
    line_by_line_correction = Column(JSON, nullable=False, default=list)  # [{"original", "corrected", "explanation"}]
    filler_analysis = Column(JSON, nullable=True)

    # Timestamps
    created_at = Column(DateTime, nullable=False, default=utcnow)
    evaluated_at = Column(DateTime, nullable=True)
    submitted_at = Column(DateTime, nullable=False, default=utcnow)

    # Relationships
    session = relationship("InterviewSession", back_populates="responses")

    def __repr__(self) -> str:
        return f"<Response(id={self.id}, session_id={self.session_id}, question_id={self.question_id})>"
