"""
MockPrep API - FastAPI Application

Main entry point for the API server.
Run with: uvicorn mockprep.main:app --reload
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from mockprep.config.settings import settings
from mockprep.config.database import init_db
from mockprep.endpoints import api_router
from mockprep.middleware.auth import AuthMiddleware
from mockprep.middleware.error_handler import setup_exception_handlers
from mockprep.middleware.logging import LoggingMiddleware, configure_logging
from mockprep.services.evaluator import build_evaluator

# Configure structured logging
configure_logging()
logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info(
        "Starting MockPrep API",
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        provider=settings.AI_PROVIDER,
    )

    init_db()

    if getattr(app.state, "evaluator", None) is None:
        app.state.evaluator = build_evaluator(settings)

    yield

    logger.info("Shutting down MockPrep API")


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Mock interview practice with AI answer evaluation",
    docs_url="/api/docs" if settings.DEBUG else None,
    redoc_url="/api/redoc" if settings.DEBUG else None,
    openapi_url="/api/openapi.json" if settings.DEBUG else None,
    lifespan=lifespan,
)

# Setup exception handlers
setup_exception_handlers(app)

# Add authentication middleware (innermost)
app.add_middleware(AuthMiddleware)

# Add logging middleware (wraps auth)
app.add_middleware(LoggingMiddleware)

# Add CORS middleware (outermost)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix="/api/v1")


# Root health endpoint (for load balancers)
@app.get("/health")
async def root_health():
    """Simple health check for load balancer."""
    return {"status": "ok", "version": settings.APP_VERSION}


@app.get("/")
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/api/docs" if settings.DEBUG else None,
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "mockprep.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )
