"""Session report endpoints."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from mockprep.config.database import get_db
from mockprep.middleware.error_handler import NotFoundError
from mockprep.models import Report
from mockprep.schemas.reports import ReportListResponse, ReportResponse
from mockprep.services.auth import ensure_owner, get_current_user, get_owned_session, user_id_of
from mockprep.services.report_service import ReportService

logger = structlog.get_logger()
router = APIRouter()


@router.get("/generate/{session_id}", response_model=ReportResponse)
async def generate_report(
    session_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Generate the session report, or return it if it already exists."""
    session = get_owned_session(db, session_id, user, "Not authorized to view this report")
    report, _ = ReportService(db).generate(session)
    return ReportResponse.model_validate(report)


@router.get("/user/all", response_model=ReportListResponse)
async def list_my_reports(
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """List the caller's reports, newest first."""
    reports = (
        db.query(Report)
        .filter(Report.user_id == user_id_of(user))
        .order_by(Report.generated_at.desc(), Report.id.desc())
        .all()
    )
    return ReportListResponse(
        total_reports=len(reports),
        data=[ReportResponse.model_validate(r) for r in reports],
    )


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: int,
    db: Session = Depends(get_db),
    user: dict = Depends(get_current_user),
):
    """Get a report by ID."""
    report = db.query(Report).filter(Report.id == report_id).first()
    if not report:
        raise NotFoundError("Report", report_id)

    ensure_owner(report.user_id, user, "Not authorized to view this report")
    return ReportResponse.model_validate(report)
