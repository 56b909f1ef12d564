"""Business logic services for the MockPrep API."""

from .token import create_token, decode_token
from .auth import get_current_user, get_owned_session
from .communication import analyze_communication
from .heuristic import heuristic_evaluate
from .response_parser import parse_evaluation
from .evaluator import EvaluationProvider, FallbackEvaluator, build_evaluator, get_evaluator
from .answer_service import AnswerService
from .report_service import ReportService

__all__ = [
    "create_token",
    "decode_token",
    "get_current_user",
    "get_owned_session",
    "analyze_communication",
    "heuristic_evaluate",
    "parse_evaluation",
    "EvaluationProvider",
    "FallbackEvaluator",
    "build_evaluator",
    "get_evaluator",
    "AnswerService",
    "ReportService",
]
