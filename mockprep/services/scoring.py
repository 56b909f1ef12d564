"""Score arithmetic and the evaluation result shared by every evaluator."""

from dataclasses import dataclass, field, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List

MIN_SCORE = 1.0
MAX_SCORE = 10.0


def round_half_up(value: float, places: int = 1) -> float:
    """Round on the decimal representation, halves away from zero.

    6.25 -> 6.3 (Python's built-in round() would give 6.2).
    """
    quantum = Decimal(1).scaleb(-places)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def clamp_score(value: float, low: float = MIN_SCORE, high: float = MAX_SCORE) -> float:
    """Clamp into [low, high] and round to one decimal."""
    return round_half_up(max(low, min(high, value)))


@dataclass
class EvaluationResult:
    """Structured evaluation of one answer.

    Produced by the heuristic evaluator or parsed out of a remote
    model's reply. Scores are on a 1-10 scale with one decimal.
    """

    score: float
    feedback: str
    ideal_answer: str
    technical_score: float
    communication_score: float
    strengths: List[str] = field(default_factory=list)
    areas_to_improve: List[str] = field(default_factory=list)
    mistakes: List[str] = field(default_factory=list)
    line_by_line_correction: List[Dict[str, str]] = field(default_factory=list)
    # {"original": "...", "corrected": "...", "explanation": "..."}

    # Which backend produced the result (heuristic, claude, ollama, openai)
    provider: str = "heuristic"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
