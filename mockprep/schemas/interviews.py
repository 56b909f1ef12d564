"""Pydantic schemas for interview session endpoints."""

from datetime import datetime
from typing import Optional, Literal

from .base import CamelModel

Difficulty = Literal["Easy", "Medium", "Hard"]


class CatalogQuestion(CamelModel):
    """Question as stored in the static catalog."""

    id: str
    question: str
    category: str
    difficulty: Difficulty


class DomainListResponse(CamelModel):
    domains: list[str]


class DomainQuestionsResponse(CamelModel):
    domain: str
    total_questions: int
    questions: list[CatalogQuestion]


class StartInterviewRequest(CamelModel):
    """Request to start a new interview session."""

    domain: str


class QuestionSnapshot(CamelModel):
    """Question copied into a session at start time."""

    question_id: str
    question_text: str
    category: str
    difficulty: Difficulty


class SessionResponse(CamelModel):
    """Schema for an interview session."""

    session_id: int
    domain: str
    status: str
    total_questions: int
    questions: list[QuestionSnapshot]
    started_at: datetime
    completed_at: Optional[datetime] = None
    total_score: Optional[float] = None


class SessionListResponse(CamelModel):
    total_sessions: int
    data: list[SessionResponse]
