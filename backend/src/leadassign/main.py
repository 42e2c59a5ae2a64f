"""FastAPI application entry point for the lead assignment service."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from leadassign import __version__
from leadassign.api import register_exception_handlers
from leadassign.api.admin import router as admin_router
from leadassign.api.intake import router as intake_router
from leadassign.api.middleware import RateLimitMiddleware, RequestLoggingMiddleware
from leadassign.api.staff import router as staff_router
from leadassign.assignment.directory import get_staff_directory
from leadassign.config import get_settings
from leadassign.db import close_all_connections, get_db_session
from leadassign.logging import get_logger, setup_logging

setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup and shutdown events."""
    settings = get_settings()
    logger.info(
        "Starting lead assignment API",
        extra={
            "environment": settings.environment,
            "debug": settings.api_debug,
        },
    )

    # Fail fast on a malformed directory file
    directory = get_staff_directory()
    logger.info(f"Staff directory ready with {len(directory)} members")

    yield

    logger.info("Shutting down lead assignment API")
    await close_all_connections()


settings = get_settings()

app = FastAPI(
    title="Lead Assignment API",
    description="Routes agency leads to the staff members best placed to handle them",
    version=__version__,
    docs_url="/docs" if settings.is_development else None,
    redoc_url="/redoc" if settings.is_development else None,
    openapi_url="/openapi.json" if settings.is_development else None,
    lifespan=lifespan,
)

app.add_middleware(RateLimitMiddleware)
app.add_middleware(RequestLoggingMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# =========================
# Health Check Endpoints
# =========================


@app.get("/health", tags=["Health"])
async def health_check():
    """Basic health check endpoint."""
    return {"status": "healthy", "service": "leadassign-api"}


@app.get("/health/ready", tags=["Health"])
async def readiness_check():
    """Readiness check that verifies database connectivity."""
    checks = {"postgres": "unknown"}

    try:
        async with get_db_session() as session:
            await session.execute(text("SELECT 1"))
            checks["postgres"] = "healthy"
    except Exception as e:
        checks["postgres"] = f"unhealthy: {e}"

    all_healthy = all(v == "healthy" for v in checks.values())
    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content={
            "status": "ready" if all_healthy else "not_ready",
            "checks": checks,
        },
    )


@app.get("/health/live", tags=["Health"])
async def liveness_check():
    """Liveness check - just confirms the service is running."""
    return {"status": "alive"}


# =========================
# API Routers
# =========================

app.include_router(intake_router, prefix="/api/v1")
app.include_router(admin_router, prefix="/api/v1")
app.include_router(staff_router, prefix="/api/v1")


@app.get("/", tags=["Root"])
async def root():
    """API root endpoint."""
    return {
        "name": "Lead Assignment API",
        "version": __version__,
        "docs": "/docs" if settings.is_development else None,
    }
