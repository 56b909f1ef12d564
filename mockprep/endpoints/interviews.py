"""Interview session endpoints: question catalog and session start."""

from typing import Optional

import structlog
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from mockprep.config.database import get_db
from mockprep.middleware.error_handler import APIError, NotFoundError
from mockprep.models import InterviewSession
from mockprep.models.base import utcnow
from mockprep.schemas.interviews import (
    DomainListResponse,
    DomainQuestionsResponse,
    SessionListResponse,
    SessionResponse,
    StartInterviewRequest,
)
from mockprep.services.auth import get_current_user, get_owned_session, user_id_of
from mockprep.services.question_catalog import QuestionCatalog, get_question_catalog

logger = structlog.get_logger()
router = APIRouter()


def to_session_response(session: InterviewSession) -> SessionResponse:
    questions = session.questions or []
    return SessionResponse(
        session_id=session.id,
        domain=session.domain,
        status=session.status,
        total_questions=len(questions),
        questions=questions,
        started_at=session.started_at,
        completed_at=session.completed_at,
        total_score=session.total_score,
    )


def _domain_questions(catalog: QuestionCatalog, domain: str) -> list[dict]:
    questions = catalog.questions_for(domain)
    if questions is None:
        raise NotFoundError(
            "Domain",
            domain,
            details={"available_domains": catalog.domains()},
        )
    return questions


@router.get("/domains", response_model=DomainListResponse)
async def list_domains(
    catalog: QuestionCatalog = Depends(get_question_catalog),
):
    """List interview domains."""
    return DomainListResponse(domains=catalog.domains())


@router.get("", response_model=DomainQuestionsResponse)
async def get_domain_questions(
    domain: Optional[str] = Query(None),
    catalog: QuestionCatalog = Depends(get_question_catalog),
):
    """Get the questions of a domain."""
    if not domain:
        raise APIError("Please provide a domain parameter", code="BAD_REQUEST", status_code=400)

    questions = _domain_questions(catalog, domain)
    return DomainQuestionsResponse(
        domain=domain,
        total_questions=len(questions),
        questions=questions,
    )


@router.post("/start", response_model=SessionResponse, status_code=201)
async def start_interview(
    data: StartInterviewRequest,
    db: Session = Depends(get_db),
    catalog: QuestionCatalog = Depends(get_question_catalog),
    user: dict = Depends(get_current_user),
):
    """Start a new interview session with a snapshot of the domain's questions."""
    questions = _domain_questions(catalog, data.domain)

    session = InterviewSession(
        user_id=user_id_of(user),
        domain=data.domain,
        status="in-progress",
        questions=[
            {
                "question_id": q["id"],
                "question_text": q["question"],
                "category": q["category"],
                "difficulty": q["difficulty"],
            }
            for q in questions
        ],
        started_at=utcnow(),
    )
    db.add(session)
    db.commit()
    db.refresh(session)

    logger.info(
        "Interview started",
        session_id=session.id,
        domain=session.domain,
        questions=len(questions),
    )

    return to_session_response(session)


@router.get("/user/all", response_model=SessionListResponse)
async def list_my_sessions(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """List the caller's sessions, newest first."""
    sessions = (
        db.query(InterviewSession)
        .filter(InterviewSession.user_id == user_id_of(user))
        .order_by(InterviewSession.started_at.desc(), InterviewSession.id.desc())
        .all()
    )
    return SessionListResponse(
        total_sessions=len(sessions),
        data=[to_session_response(s) for s in sessions],
    )


@router.get("/{session_id}", response_model=SessionResponse)
async def get_session(
    session_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Get an interview session by ID."""
    session = get_owned_session(db, session_id, user, "Not authorized to view this interview")
    return to_session_response(session)
