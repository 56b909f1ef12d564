"""Deterministic answer scoring used when no remote model answers.

Scores come purely from input statistics: answer length, technical
keyword hits and structural markers. Same input, same output.
"""

import re

from mockprep.services.scoring import EvaluationResult, clamp_score, round_half_up

# (minimum word count, base score), highest tier first
LENGTH_TIERS = [
    (150, 8.0),
    (100, 7.0),
    (50, 6.0),
    (0, 3.0),
]

TECH_KEYWORDS = [
    "function", "variable", "class", "object", "array", "loop", "algorithm",
    "database", "api", "server", "client", "framework", "library",
    "component", "state", "props", "hook", "async", "promise",
    "performance", "optimization", "security", "scalability",
]

STRUCTURE_MARKERS = [
    "first", "second", "third", "finally", "because", "therefore",
    "however", "for example", "specifically",
]

BRIEF_ANSWER_WORDS = 50
DETAILED_ANSWER_WORDS = 100

SENTENCE_SPLIT_RE = re.compile(r"[.!?]+")


def count_words(text: str) -> int:
    return len(text.split())


def count_hits(text_lower: str, terms: list[str]) -> int:
    """Number of distinct terms occurring as substrings."""
    return sum(1 for term in terms if term in text_lower)


def base_score(word_count: int) -> float:
    for minimum, score in LENGTH_TIERS:
        if word_count >= minimum:
            return score
    return LENGTH_TIERS[-1][1]


def generate_feedback(score: float, domain: str) -> str:
    if score >= 8:
        return (
            f"Excellent answer! You demonstrated strong understanding of {domain} concepts. "
            "Your explanation was comprehensive with good technical depth. Keep up the great work!"
        )
    if score >= 6:
        return (
            "Good answer! You covered the main points well. To improve, consider adding more "
            "specific examples from your experience and diving deeper into the technical "
            "implementation details."
        )
    if score >= 4:
        return (
            "Decent attempt. Your answer shows basic understanding but could benefit from more "
            "depth. Focus on providing concrete examples, explaining the \"why\" behind concepts, "
            "and structuring your response more clearly."
        )
    return (
        "Your answer needs improvement. Try to: 1) Provide a more complete explanation, "
        "2) Include specific examples, 3) Use relevant technical terminology, "
        "4) Structure your answer with clear points."
    )


def generate_ideal_answer(question: str, domain: str) -> str:
    return f"""A strong answer to "{question}" would include:

1. **Clear Definition/Overview**: Start by directly addressing what is being asked with a concise definition or explanation.

2. **Technical Details**: Explain the core concepts, technologies, or methodologies involved in {domain}.

3. **Real Examples**: Share specific examples from your experience or well-known use cases.

4. **Best Practices**: Mention industry best practices and common patterns.

5. **Trade-offs**: Discuss any trade-offs, limitations, or considerations.

6. **Summary**: Conclude with key takeaways that demonstrate mastery of the topic."""


def heuristic_evaluate(question: str, answer: str, domain: str = "General") -> EvaluationResult:
    """Score an answer without any model.

    Args:
        question: Question text, used only for the ideal answer template
        answer: Candidate's answer; may be empty
        domain: Interview domain label used in feedback text

    Returns:
        A complete EvaluationResult with scores in [1, 10]
    """
    answer = answer or ""
    domain = domain or "General"
    answer_lower = answer.lower()

    word_count = count_words(answer)
    keyword_count = count_hits(answer_lower, TECH_KEYWORDS)
    structure_count = count_hits(answer_lower, STRUCTURE_MARKERS)

    score = base_score(word_count)
    if keyword_count >= 5:
        score = min(10.0, score + 1)
    if keyword_count >= 10:
        score = min(10.0, score + 1)
    if structure_count >= 2:
        score = min(10.0, score + 0.5)
    score = round_half_up(score)

    technical_score = clamp_score(score + (0.5 if keyword_count > 5 else -0.5))
    communication_score = clamp_score(score + (0.5 if structure_count > 2 else 0))

    strengths = []
    areas_to_improve = []

    if word_count >= DETAILED_ANSWER_WORDS:
        strengths.append("Comprehensive answer with good detail")
    else:
        areas_to_improve.append("Add more detail and examples")

    if keyword_count >= 3:
        strengths.append("Good use of technical terminology")
    else:
        areas_to_improve.append(f"Include more technical terms relevant to {domain}")

    if structure_count >= 2:
        strengths.append("Well-structured response")
    else:
        areas_to_improve.append("Structure your answer with clear points (First, Second, etc.)")

    line_by_line_correction = []
    if word_count < DETAILED_ANSWER_WORDS:
        sentences = [s.strip() for s in SENTENCE_SPLIT_RE.split(answer) if len(s.strip()) > 10]
        if sentences:
            line_by_line_correction.append({
                "original": sentences[0],
                "corrected": f"{sentences[0]}. Consider expanding with specific examples and technical details.",
                "explanation": "Adding more depth will strengthen your answer.",
            })

    mistakes = []
    if word_count < BRIEF_ANSWER_WORDS:
        mistakes = [
            "Answer is too brief - aim for at least 50 words",
            "Missing specific examples",
        ]

    return EvaluationResult(
        score=clamp_score(score),
        technical_score=technical_score,
        communication_score=communication_score,
        feedback=generate_feedback(score, domain),
        ideal_answer=generate_ideal_answer(question, domain),
        strengths=strengths or ["Made an attempt to answer"],
        areas_to_improve=areas_to_improve or ["Continue practicing"],
        mistakes=mistakes,
        line_by_line_correction=line_by_line_correction,
        provider="heuristic",
    )
