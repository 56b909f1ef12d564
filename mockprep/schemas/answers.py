"""Pydantic schemas for answer submission endpoints."""

from datetime import datetime
from typing import Any, Optional

from pydantic import Field, field_validator

from .base import CamelModel


class SubmitAnswerRequest(CamelModel):
    """Answer submitted for evaluation."""

    session_id: int
    question_id: str
    question_text: str
    user_answer: str
    focus_score: Optional[float] = Field(default=None, ge=0, le=100)

    @field_validator("question_id", mode="before")
    @classmethod
    def coerce_question_id(cls, value: Any) -> Any:
        # Clients may send numeric ids
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("question_id", "question_text", "user_answer")
    @classmethod
    def not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value


class LineCorrection(CamelModel):
    original: str = ""
    corrected: str = ""
    explanation: str = ""


class FillerCount(CamelModel):
    word: str
    count: int


class FillerAnalysis(CamelModel):
    """Filler-word statistics for one answer."""

    total_words: int
    filler_count: int
    filler_percentage: float
    found_fillers: list[FillerCount] = []
    communication_score: int
    feedback: str


class AnswerEvaluationResponse(CamelModel):
    """Merged evaluation returned from a submission."""

    response_id: int
    session_id: int
    question_id: str
    question_text: str
    user_answer: str
    score: float
    technical_score: Optional[float] = None
    communication_score: Optional[float] = None
    focus_score: Optional[float] = None
    feedback: str
    ideal_answer: str
    strengths: list[str] = []
    areas_to_improve: list[str] = []
    mistakes: list[str] = []
    line_by_line_correction: list[LineCorrection] = []
    filler_analysis: Optional[FillerAnalysis] = None
    evaluated_at: Optional[datetime] = None
    submitted_at: datetime


class SessionAnswersResponse(CamelModel):
    session_id: int
    total_answers: int
    answers: list[AnswerEvaluationResponse]
