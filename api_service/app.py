"""
FastAPI list service for the TalentHub marketplace.

Serves every paginated listing (jobs, applications, users, talents,
notifications, messages) with one response envelope:

    {"status": "success", "data": {"<resource>": [...], "pagination": {...}}}

Errors are rendered as {"status": "error", "message": ..., "code": ...}.
"""

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.common.error_handling import AppError, DatabaseUnavailableError
from src.common.repositories import JOBS, RepositoryConfig, configure_repositories, get_repository
from version import __version__

from .config import validate_config_on_startup
from .models import DatabaseStatus, ErrorResponse, HealthResponse
from .routes import (
    admin_router,
    jobs_router,
    messages_router,
    notifications_router,
    recruiters_router,
    talents_router,
    users_router,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S"
)
logger = logging.getLogger(__name__)

# Validate configuration at startup
settings = validate_config_on_startup()

configure_repositories(
    RepositoryConfig(
        mongodb_uri=settings.mongodb_uri,
        database=settings.mongo_db_name,
    )
)

app = FastAPI(title="TalentHub List API", version=__version__)

if settings.cors_origins_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid pagination, filter or identifier"},
    404: {"model": ErrorResponse, "description": "Referenced document not found"},
    503: {"model": ErrorResponse, "description": "Database unavailable"},
}

for router in (
    jobs_router,
    recruiters_router,
    talents_router,
    users_router,
    messages_router,
    admin_router,
    notifications_router,
):
    app.include_router(router, responses=ERROR_RESPONSES)


# =============================================================================
# Error handlers
# =============================================================================


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    else:
        logger.info(f"{request.method} {request.url.path} rejected: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ())[1:])
        errors.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=400,
        content={
            "status": "error",
            "message": "Validation failed",
            "code": "VALIDATION_ERROR",
            "errors": errors,
        },
    )


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"status": "error", "message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(PyMongoError)
async def database_error_handler(request: Request, exc: PyMongoError) -> JSONResponse:
    logger.error(f"Database error on {request.url.path}: {exc}")
    error = DatabaseUnavailableError()
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": "Internal server error"},
    )


# =============================================================================
# Health
# =============================================================================


@app.get("/health", response_model=HealthResponse)
def health_check() -> HealthResponse:
    """
    Health check endpoint for container orchestration.

    Reports degraded (still 200) when MongoDB cannot be reached.
    """
    try:
        get_repository(JOBS).ping()
        database = DatabaseStatus(connected=True, status="ok")
    except (PyMongoError, ValueError) as e:
        logger.warning(f"Health check: database unreachable: {e}")
        database = DatabaseStatus(connected=False, status="unreachable")

    return HealthResponse(
        status="healthy" if database.connected else "degraded",
        message="TalentHub List API is running",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
        version=__version__,
        database=database,
    )
