"""Answer submission endpoints."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mockprep.config.database import get_db
from mockprep.models import Response
from mockprep.schemas.answers import (
    AnswerEvaluationResponse,
    SessionAnswersResponse,
    SubmitAnswerRequest,
)
from mockprep.services.answer_service import AnswerService
from mockprep.services.answer_store import ResponseStore
from mockprep.services.auth import get_current_user, get_owned_session
from mockprep.services.evaluator import EvaluationProvider, get_evaluator

logger = structlog.get_logger()
router = APIRouter()


def to_answer_response(response: Response) -> AnswerEvaluationResponse:
    return AnswerEvaluationResponse(
        response_id=response.id,
        session_id=response.session_id,
        question_id=response.question_id,
        question_text=response.question_text,
        user_answer=response.user_answer,
        score=response.score,
        technical_score=response.technical_score,
        communication_score=response.communication_score,
        focus_score=response.focus_score,
        feedback=response.feedback,
        ideal_answer=response.ideal_answer,
        strengths=response.strengths or [],
        areas_to_improve=response.areas_to_improve or [],
        mistakes=response.mistakes or [],
        line_by_line_correction=response.line_by_line_correction or [],
        filler_analysis=response.filler_analysis,
        evaluated_at=response.evaluated_at,
        submitted_at=response.submitted_at,
    )


@router.post("/submit", response_model=AnswerEvaluationResponse, status_code=201)
async def submit_answer(
    data: SubmitAnswerRequest,
    db: Session = Depends(get_db),
    evaluator: EvaluationProvider = Depends(get_evaluator),
    user: dict = Depends(get_current_user),
):
    """Submit an answer for evaluation; resubmitting replaces the previous evaluation."""
    session = get_owned_session(
        db, data.session_id, user, "Not authorized to submit answers for this interview"
    )

    logger.info("Evaluating answer", session_id=session.id, question_id=data.question_id)

    response = await AnswerService(db, evaluator).submit(
        session=session,
        question_id=data.question_id,
        question_text=data.question_text,
        user_answer=data.user_answer,
        focus_score=data.focus_score,
    )

    return to_answer_response(response)


@router.get("/{session_id}", response_model=SessionAnswersResponse)
async def get_session_answers(
    session_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Get all answers of a session, oldest submission first."""
    get_owned_session(db, session_id, user, "Not authorized to view answers for this interview")

    responses = ResponseStore(db).find_all_by_session(session_id)

    return SessionAnswersResponse(
        session_id=session_id,
        total_answers=len(responses),
        answers=[to_answer_response(r) for r in responses],
    )
