"""Keyed persistence of evaluated answers, one row per (session, question)."""

from typing import Any, Optional

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from mockprep.models import Response
from mockprep.models.base import utcnow

logger = structlog.get_logger()

# Fields replaced on resubmission; id, user_id, question_text and
# created_at keep their first-submission values.
REPLACEABLE_FIELDS = (
    "user_answer",
    "score",
    "technical_score",
    "communication_score",
    "focus_score",
    "feedback",
    "ideal_answer",
    "strengths",
    "areas_to_improve",
    "mistakes",
    "line_by_line_correction",
    "filler_analysis",
)


class ResponseStore:
    """Create-or-replace storage for Response rows.

    Last write wins for concurrent submissions to the same key.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_one(self, session_id: int, question_id: str) -> Optional[Response]:
        return (
            self.db.query(Response)
            .filter(Response.session_id == session_id, Response.question_id == question_id)
            .first()
        )

    def find_all_by_session(self, session_id: int) -> list[Response]:
        """All responses of a session, oldest submission first."""
        return (
            self.db.query(Response)
            .filter(Response.session_id == session_id)
            .order_by(Response.submitted_at, Response.id)
            .all()
        )

    def upsert(self, record: dict[str, Any]) -> Response:
        """Insert a response, or replace the evaluated fields of the existing one.

        Args:
            record: Column values; must contain session_id and question_id

        Returns:
            The stored Response
        """
        existing = self.find_one(record["session_id"], record["question_id"])
        if existing is not None:
            return self._replace(existing, record)

        now = utcnow()
        response = Response(
            **record,
            created_at=now,
            evaluated_at=now,
            submitted_at=now,
        )
        self.db.add(response)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request inserted the same key first; overwrite it
            self.db.rollback()
            existing = self.find_one(record["session_id"], record["question_id"])
            if existing is None:
                raise
            return self._replace(existing, record)

        self.db.refresh(response)
        logger.debug("Response created", response_id=response.id, session_id=response.session_id)
        return response

    def _replace(self, response: Response, record: dict[str, Any]) -> Response:
        now = utcnow()
        for field in REPLACEABLE_FIELDS:
            if field in record:
                setattr(response, field, record[field])
        response.evaluated_at = now
        response.submitted_at = now

        self.db.commit()
        self.db.refresh(response)
        logger.debug("Response replaced", response_id=response.id, session_id=response.session_id)
        return response
