"""
FastAPI Application Entry Point

Aroma Restaurant Site - multilingual restaurant website and admin API.
Supports both Mock services (development) and Real APIs (production).

Endpoints:
    - /{locale}, /{locale}/menu, /{locale}/gallery, /{locale}/find-us: public pages
    - /api/menu-sections: menu listing, search and editing
    - /api/reservations: public booking, admin management
    - /api/testimonials (+ /events SSE feed)
    - /api/restaurant-story, /api/menu-copy, /api/static-images, /api/settings
    - /api/uploads: image uploads
    - /api/auth: admin session
    - GET /health: System health check
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.database import Database
from pymongo.errors import PyMongoError

from aroma.core.config import get_settings, setup_logging
from aroma.core.errors import AromaError, AuthenticationError, ValidationFailure
from aroma.database import close_db, get_db, init_db
from aroma.routes import api_routers, pages
from aroma.schemas import ErrorResponse, HealthResponse
from aroma.services.notifications import BaseNotificationService, get_notification_service
from aroma.services.storage import BaseStorageService, get_storage_service

# Initialize configuration and logging
settings = get_settings()
setup_logging()
logger = logging.getLogger(__name__)


# =============================================================================
# APPLICATION LIFECYCLE
# =============================================================================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application startup and shutdown events.
    """
    # Startup
    logger.info("=" * 60)
    logger.info(f"🚀 Starting {settings.app_name}")
    logger.info(f"   Version: {settings.app_version}")
    logger.info(f"   Environment: {settings.env_mode.value}")
    logger.info(f"   Debug: {settings.debug}")
    logger.info("=" * 60)

    # Initialize database
    init_db(get_db())

    # Log service configuration
    logger.info(f"✅ Email Service: {get_notification_service().provider_name}")
    logger.info(f"✅ Storage Service: {get_storage_service().provider_name}")

    # Validate production config
    if settings.use_real_services:
        missing = settings.validate_production_config()
        if missing:
            logger.warning(f"⚠️ Missing production config: {missing}")

    logger.info("=" * 60)
    logger.info("✅ Application ready!")
    logger.info("=" * 60)

    yield  # Application runs

    # Shutdown
    logger.info("Shutting down...")
    close_db()
    logger.info("✅ Cleanup complete")


# =============================================================================
# APPLICATION INSTANCE
# =============================================================================

app = FastAPI(
    title=settings.app_name,
    description=(
        "Multilingual restaurant website with an admin back-office for menu, "
        "testimonials, images, content, locations and reservations."
    ),
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# HEALTH ENDPOINT
# =============================================================================

@app.get(
    "/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="System Health Check",
)
async def health_check(
    db: Database = Depends(get_db),
    notifications: BaseNotificationService = Depends(get_notification_service),
    storage: BaseStorageService = Depends(get_storage_service),
) -> HealthResponse:
    """Verify all system components are operational."""

    # Check database
    db_status = "healthy"
    try:
        db.command("ping")
    except PyMongoError as e:
        db_status = f"unhealthy: {str(e)}"
        logger.error(f"Database health check failed: {e}")

    email_status = "healthy" if await notifications.health_check() else "unhealthy"
    storage_status = "healthy" if await storage.health_check() else "unhealthy"

    overall = "operational" if all(
        s == "healthy" for s in [db_status, email_status, storage_status]
    ) else "degraded"

    return HealthResponse(
        status=overall,
        database=db_status,
        email_service=email_status,
        storage_service=storage_status,
        timestamp=datetime.now(timezone.utc),
    )


# =============================================================================
# ROUTERS
# =============================================================================

for router in api_routers:
    app.include_router(router)

# Last: `/{locale}` would otherwise shadow the routes above
app.include_router(pages.router)


# =============================================================================
# ERROR HANDLERS
# =============================================================================

@app.exception_handler(AromaError)
async def domain_exception_handler(request: Request, exc: AromaError) -> JSONResponse:
    """Map domain errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")

    if isinstance(exc, ValidationFailure):
        body = ErrorResponse(error=exc.message, errors=exc.errors)
    else:
        body = ErrorResponse(error=exc.message, detail=exc.detail)

    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthenticationError) else None
    return JSONResponse(
        status_code=exc.status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Field-level messages for rejected request bodies and query parameters."""
    errors = [
        {
            "field": ".".join(str(part) for part in err["loc"] if part != "body"),
            "message": err["msg"],
        }
        for err in exc.errors()
    ]
    body = ErrorResponse(error="Validation failed", errors=errors)
    return JSONResponse(status_code=422, content=body.model_dump(exclude_none=True))


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all exception handler."""
    logger.exception(f"Unhandled exception: {exc}")

    body = ErrorResponse(
        error="Internal Server Error",
        detail=str(exc) if settings.debug else "An unexpected error occurred",
    )
    return JSONResponse(status_code=500, content=body.model_dump(exclude_none=True))
