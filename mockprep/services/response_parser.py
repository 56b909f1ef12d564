"""Best-effort extraction of an evaluation from free-form model output.

Models are asked for a single JSON object but routinely wrap it in code
fences, prose or blank lines. The candidate object is everything from the
first ``{`` to the last ``}``; text holding several unrelated objects can
therefore mis-extract, in which case the JSON decode fails and the caller
falls back to the heuristic evaluator.
"""

import json
import math
import re
from typing import Any, Optional

import structlog

from mockprep.services.scoring import EvaluationResult, clamp_score

logger = structlog.get_logger()

CODE_FENCE_RE = re.compile(r"```(?:json)?\n?")
LEADING_BLANK_LINE_RE = re.compile(r"^\s*[\r\n]", re.MULTILINE)
JSON_OBJECT_RE = re.compile(r"\{.*\}", re.DOTALL)

DEFAULT_SCORE = 5.0
DEFAULT_FEEDBACK = "Good attempt. Keep practicing."
DEFAULT_IDEAL_ANSWER = "No ideal answer provided."


def clean_response(text: str) -> str:
    """Strip code fences and blank lines."""
    cleaned = CODE_FENCE_RE.sub("", text)
    cleaned = LEADING_BLANK_LINE_RE.sub("", cleaned)
    return cleaned.strip()


def extract_json(text: str) -> Optional[str]:
    """Return the first-``{``-to-last-``}`` span, or None."""
    match = JSON_OBJECT_RE.search(text)
    return match.group(0) if match else None


def _to_number(value: Any) -> Optional[float]:
    """Numeric value of a loosely typed field; zero counts as missing."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None

    if math.isnan(number) or number == 0:
        return None
    return number


def _to_text(value: Any, default: str) -> str:
    if value is None or value == "":
        return default
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else default


def _to_string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item if isinstance(item, str) else str(item) for item in value if item not in (None, "")]


def _to_corrections(value: Any) -> list[dict[str, str]]:
    if not isinstance(value, list):
        return []
    return [
        {
            "original": _to_text(item.get("original"), ""),
            "corrected": _to_text(item.get("corrected"), ""),
            "explanation": _to_text(item.get("explanation"), ""),
        }
        for item in value
        if isinstance(item, dict)
    ]


def parse_evaluation(raw_text: Optional[str], provider: str = "remote") -> Optional[EvaluationResult]:
    """Parse a model reply into an EvaluationResult.

    Returns None when no object can be found or decoded; never raises.
    """
    if not raw_text:
        return None

    candidate = extract_json(clean_response(raw_text))
    if candidate is None:
        logger.warning("No JSON object in model response", provider=provider)
        return None

    try:
        data = json.loads(candidate)
    except (ValueError, TypeError, RecursionError) as e:
        logger.warning("Failed to decode model response", provider=provider, error=str(e))
        return None

    if not isinstance(data, dict):
        logger.warning("Model response is not an object", provider=provider)
        return None

    score = _to_number(data.get("score")) or DEFAULT_SCORE
    technical = _to_number(data.get("technicalScore")) or score
    communication = _to_number(data.get("communicationScore")) or score

    return EvaluationResult(
        score=clamp_score(score),
        technical_score=clamp_score(technical),
        communication_score=clamp_score(communication),
        feedback=_to_text(data.get("feedback"), DEFAULT_FEEDBACK),
        ideal_answer=_to_text(
            data.get("idealAnswer") or data.get("ideal_answer"), DEFAULT_IDEAL_ANSWER
        ),
        strengths=_to_string_list(data.get("strengths")),
        areas_to_improve=_to_string_list(data.get("areasToImprove")),
        mistakes=_to_string_list(data.get("mistakes")),
        line_by_line_correction=_to_corrections(data.get("lineByLineCorrection")),
        provider=provider,
    )
