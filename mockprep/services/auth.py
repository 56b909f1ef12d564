"""Current-user dependency and ownership checks."""

from typing import Any

import structlog
from fastapi import HTTPException, Request
from sqlalchemy.orm import Session

from mockprep.middleware.error_handler import ForbiddenError, NotFoundError
from mockprep.models import InterviewSession

logger = structlog.get_logger()


def get_current_user(request: Request) -> dict[str, Any]:
    """
    Get current user claims from request state.

    Usage:
        @router.get("/me")
        def get_me(user: dict = Depends(get_current_user)):
            return user
    """
    if not hasattr(request.state, "user"):
        raise HTTPException(status_code=401, detail="Not authenticated")
    return request.state.user


def user_id_of(user: dict[str, Any]) -> str:
    return str(user["sub"])


def ensure_owner(owner_id: str, user: dict[str, Any], message: str) -> None:
    """Raise ForbiddenError unless the record belongs to the user."""
    if owner_id != user_id_of(user):
        logger.warning("Ownership check failed", user=user_id_of(user), owner=owner_id)
        raise ForbiddenError(message)


def get_owned_session(
    db: Session,
    session_id: int,
    user: dict[str, Any],
    message: str = "Not authorized to access this interview",
) -> InterviewSession:
    """Load a session and verify the caller owns it."""
    session = db.query(InterviewSession).filter(InterviewSession.id == session_id).first()
    if session is None:
        raise NotFoundError("Interview", session_id)
    ensure_owner(session.user_id, user, message)
    return session
