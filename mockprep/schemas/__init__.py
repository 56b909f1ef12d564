"""Pydantic schemas for API request/response validation.

All schemas use CamelCase for JSON field names (via alias_generator).
"""

from .base import CamelModel, ErrorResponse
from .interviews import (
    CatalogQuestion,
    DomainListResponse,
    DomainQuestionsResponse,
    StartInterviewRequest,
    QuestionSnapshot,
    SessionResponse,
    SessionListResponse,
)
from .answers import (
    SubmitAnswerRequest,
    LineCorrection,
    FillerAnalysis,
    AnswerEvaluationResponse,
    SessionAnswersResponse,
)
from .reports import ReportResponse, ReportListResponse

__all__ = [
    # Base
    "CamelModel",
    "ErrorResponse",
    # Interviews
    "CatalogQuestion",
    "DomainListResponse",
    "DomainQuestionsResponse",
    "StartInterviewRequest",
    "QuestionSnapshot",
    "SessionResponse",
    "SessionListResponse",
    # Answers
    "SubmitAnswerRequest",
    "LineCorrection",
    "FillerAnalysis",
    "AnswerEvaluationResponse",
    "SessionAnswersResponse",
    # Reports
    "ReportResponse",
    "ReportListResponse",
]
