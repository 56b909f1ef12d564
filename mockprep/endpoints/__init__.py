"""API endpoints for MockPrep."""

from fastapi import APIRouter

from .health import router as health_router
from .interviews import router as interviews_router
from .answers import router as answers_router
from .reports import router as reports_router

# Create main API router
api_router = APIRouter()

# Include all routers
api_router.include_router(health_router, prefix="/health", tags=["Health"])
api_router.include_router(interviews_router, prefix="/interview", tags=["Interviews"])
api_router.include_router(answers_router, prefix="/answer", tags=["Answers"])
api_router.include_router(reports_router, prefix="/report", tags=["Reports"])

__all__ = ["api_router"]
