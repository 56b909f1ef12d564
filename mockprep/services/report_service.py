"""Session report aggregation.

A report is computed once per session from its stored responses and
served unchanged on every later request.
"""

from typing import Sequence

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mockprep.middleware.error_handler import NoResponsesError
from mockprep.models import InterviewSession, Report, Response
from mockprep.models.base import utcnow
from mockprep.services.answer_store import ResponseStore
from mockprep.services.scoring import round_half_up

logger = structlog.get_logger()

HIGH_SCORE = 7.0
LOW_SCORE = 4.0

# Share of high scores that earns the "fundamentals" strength
FUNDAMENTALS_SHARE = 0.6
# Share of medium scores above which answers are flagged as shallow
SHALLOW_SHARE = 0.5

GAP_QUESTION_CHARS = 50


def analyze_performance(
    responses: Sequence[Response],
    domain: str,
) -> tuple[list[str], list[str], list[str]]:
    """Derive strengths, gaps and recommendations from response scores.

    Returns:
        (strengths, gaps, recommendations); none of them is ever empty
    """
    total = len(responses)
    high = [r for r in responses if (r.score or 0) >= HIGH_SCORE]
    medium = [r for r in responses if LOW_SCORE <= (r.score or 0) < HIGH_SCORE]
    low = [r for r in responses if (r.score or 0) < LOW_SCORE]

    strengths = []
    if high:
        strengths.append(f"Strong performance in {len(high)} out of {total} questions")
        if len(high) >= total * FUNDAMENTALS_SHARE:
            strengths.append(f"Excellent grasp of {domain} fundamentals")
        if any("explain" in (r.question_text or "").lower() for r in high):
            strengths.append("Good ability to explain complex concepts")

    gaps = []
    if low:
        gaps.append(f"Needs improvement in {len(low)} areas")
        for r in low:
            if r.question_text:
                gaps.append(f"Review: {r.question_text[:GAP_QUESTION_CHARS]}...")
    if len(medium) > total * SHALLOW_SHARE:
        gaps.append("Many answers lack depth - consider adding more examples")

    recommendations = []
    if low:
        recommendations.append(f"Focus on fundamentals of {domain}")
        recommendations.append("Practice explaining concepts with real-world examples")
    if medium:
        recommendations.append("Work on providing more detailed and structured answers")
    recommendations.append(f"Take more practice interviews in {domain}")
    recommendations.append("Review the ideal answers provided for each question")

    if not strengths:
        strengths.append("Keep practicing to develop your strengths")
    if not gaps:
        gaps.append("No major gaps identified - continue improving")

    return strengths, gaps, recommendations


def generate_overall_feedback(average_score: float, domain: str) -> str:
    if average_score >= 8:
        return (
            f"Outstanding performance! You demonstrated expert-level knowledge in {domain}. "
            "Your answers were comprehensive and well-structured. You're well-prepared for "
            "technical interviews in this domain."
        )
    if average_score >= 6:
        return (
            f"Good performance! You have a solid understanding of {domain} concepts. To improve "
            "further, focus on providing more detailed examples and diving deeper into the "
            "technical aspects of your answers."
        )
    if average_score >= 4:
        return (
            f"Decent effort. Your {domain} knowledge covers the basics but needs more depth. "
            "Spend time reviewing core concepts and practice explaining them clearly with "
            "concrete examples."
        )
    return (
        f"You need significant improvement in {domain}. We recommend revisiting the fundamentals "
        "and practicing regularly. Review the ideal answers provided and try to understand the "
        "key concepts better."
    )


class ReportService:
    """Generates and caches session reports."""

    def __init__(self, db: Session):
        self.db = db
        self.store = ResponseStore(db)

    def find_by_session(self, session_id: int) -> Report | None:
        return self.db.query(Report).filter(Report.session_id == session_id).first()

    def generate(self, session: InterviewSession) -> tuple[Report, bool]:
        """Return the session's report, generating it on first request.

        Args:
            session: Interview session (ownership already checked)

        Returns:
            (report, cached) where cached is True if the report already existed

        Raises:
            NoResponsesError: If no answers have been submitted
        """
        existing = self.find_by_session(session.id)
        if existing is not None:
            logger.info("Report retrieved from cache", session_id=session.id, report_id=existing.id)
            return existing, True

        responses = self.store.find_all_by_session(session.id)
        if not responses:
            raise NoResponsesError(session.id)

        mean = sum((r.score or 0) for r in responses) / len(responses)
        average_score = round_half_up(mean)

        strengths, gaps, recommendations = analyze_performance(responses, session.domain)

        report = Report(
            session_id=session.id,
            user_id=session.user_id,
            domain=session.domain,
            total_questions=len(session.questions or []),
            average_score=average_score,
            strengths=strengths,
            gaps=gaps,
            recommendations=recommendations,
            overall_feedback=generate_overall_feedback(mean, session.domain),
            generated_at=utcnow(),
        )
        self.db.add(report)

        session.status = "completed"
        session.completed_at = utcnow()
        session.total_score = average_score

        try:
            self.db.commit()
        except IntegrityError:
            # A concurrent request stored the report first; serve that one
            self.db.rollback()
            existing = self.find_by_session(session.id)
            if existing is None:
                raise
            return existing, True

        self.db.refresh(report)

        logger.info(
            "Report generated",
            session_id=session.id,
            report_id=report.id,
            responses=len(responses),
            average_score=average_score,
        )

        return report, False
