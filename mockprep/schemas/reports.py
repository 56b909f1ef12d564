"""Pydantic schemas for report endpoints."""

from datetime import datetime

from .base import CamelModel


class ReportResponse(CamelModel):
    """Schema for a session report."""

    id: int
    session_id: int
    domain: str
    total_questions: int
    average_score: float
    strengths: list[str]
    gaps: list[str]
    recommendations: list[str]
    overall_feedback: str
    generated_at: datetime


class ReportListResponse(CamelModel):
    total_reports: int
    data: list[ReportResponse]
