"""Filler-word analysis of an answer transcript."""

import re
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from mockprep.services.scoring import round_half_up

FILLER_WORDS = ["um", "uh", "like", "you know", "basically", "actually", "literally", "so", "well"]

FILLER_PATTERNS = {
    filler: re.compile(rf"\b{re.escape(filler)}\b", re.IGNORECASE)
    for filler in FILLER_WORDS
}

# (percentage above which the penalty applies, penalty), largest first
FILLER_PENALTIES = [
    (10.0, 3),
    (5.0, 2),
    (2.0, 1),
]

FEEDBACK_THRESHOLD = 5


@dataclass
class CommunicationAnalysis:
    total_words: int
    filler_count: int
    filler_percentage: float
    communication_score: int
    feedback: str
    found_fillers: List[Dict[str, Any]] = field(default_factory=list)
    # [{"word": "um", "count": 3}]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def filler_penalty(percentage: float) -> int:
    for threshold, penalty in FILLER_PENALTIES:
        if percentage > threshold:
            return penalty
    return 0


def analyze_communication(transcript: str) -> CommunicationAnalysis:
    """Count filler words and derive a 1-10 communication score."""
    transcript = transcript or ""
    total_words = len(transcript.split())

    found_fillers = []
    filler_count = 0
    for filler, pattern in FILLER_PATTERNS.items():
        count = len(pattern.findall(transcript))
        if count:
            filler_count += count
            found_fillers.append({"word": filler, "count": count})

    percentage = (filler_count / total_words) * 100 if total_words else 0.0
    score = max(1, 10 - filler_penalty(percentage))

    if filler_count > FEEDBACK_THRESHOLD:
        words = ", ".join(f["word"] for f in found_fillers)
        feedback = f"You used {filler_count} filler words. Try to reduce usage of: {words}"
    else:
        feedback = "Good communication clarity with minimal filler words!"

    return CommunicationAnalysis(
        total_words=total_words,
        filler_count=filler_count,
        filler_percentage=round_half_up(percentage),
        communication_score=score,
        feedback=feedback,
        found_fillers=found_fillers,
    )
