"""Answer submission: evaluate, analyze communication, store."""

from typing import Optional

import structlog
from sqlalchemy.orm import Session

from mockprep.models import InterviewSession, Response
from mockprep.services.answer_store import ResponseStore
from mockprep.services.communication import analyze_communication
from mockprep.services.evaluator import EvaluationProvider

logger = structlog.get_logger()


class AnswerService:
    """Evaluates submitted answers and keeps one Response per question."""

    def __init__(self, db: Session, evaluator: EvaluationProvider):
        self.db = db
        self.evaluator = evaluator
        self.store = ResponseStore(db)

    async def submit(
        self,
        session: InterviewSession,
        question_id: str,
        question_text: str,
        user_answer: str,
        focus_score: Optional[float] = None,
    ) -> Response:
        """Evaluate an answer and upsert it.

        Args:
            session: Owning interview session (ownership already checked)
            question_id: Question identifier within the session
            question_text: Question text, stored for reports
            user_answer: The answer to evaluate
            focus_score: Client-computed focus score, stored as-is

        Returns:
            The stored Response
        """
        evaluation = await self.evaluator.evaluate(question_text, user_answer, session.domain)
        communication = analyze_communication(user_answer)

        record = {
            "session_id": session.id,
            "user_id": session.user_id,
            "question_id": question_id,
            "question_text": question_text,
            "user_answer": user_answer,
            "score": evaluation.score,
            "technical_score": evaluation.technical_score or evaluation.score,
            "communication_score": evaluation.communication_score or communication.communication_score,
            "focus_score": focus_score,
            "feedback": evaluation.feedback,
            "ideal_answer": evaluation.ideal_answer,
            "strengths": evaluation.strengths,
            "areas_to_improve": evaluation.areas_to_improve,
            "mistakes": evaluation.mistakes,
            "line_by_line_correction": evaluation.line_by_line_correction,
            "filler_analysis": communication.to_dict(),
        }

        response = self.store.upsert(record)

        logger.info(
            "Answer evaluated",
            session_id=session.id,
            question_id=question_id,
            score=evaluation.score,
            provider=evaluation.provider,
            filler_count=communication.filler_count,
        )

        return response
