from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from loguru import logger

from gymapi.api.assignments import router as assignments_router
from gymapi.api.equipment import router as equipment_router
from gymapi.api.members import router as members_router
from gymapi.api.schedule import router as schedule_router
from gymapi.api.trainers import router as trainers_router
from gymapi.config.settings import settings
from gymapi.core.logger import setup_logger
from gymapi.core.problems import problem_response, validation_problem
from gymapi.db.errors import DuplicateEntityError, EntityNotFoundError
from gymapi.db.session import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Create database tables on startup."""
    init_db()
    yield
    logger.info("GymAPI shutting down")


def create_app(*, create_tables: bool = True) -> FastAPI:
    """Build the FastAPI application.

    Args:
        create_tables: Run table creation on startup; tests pass False and
            manage their own engine.
    """
    app = FastAPI(title="GymAPI", version="1.0.0", lifespan=lifespan if create_tables else None)

    app.include_router(schedule_router)
    app.include_router(members_router)
    app.include_router(trainers_router)
    app.include_router(equipment_router)
    app.include_router(assignments_router)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError):
        logger.info(
            "Validation failed for {method} {path}",
            method=request.method,
            path=request.url.path,
            error_count=len(exc.errors()),
        )
        return validation_problem(exc)

    @app.exception_handler(EntityNotFoundError)
    async def handle_not_found(_request: Request, exc: EntityNotFoundError):
        return problem_response(status.HTTP_404_NOT_FOUND, "Not Found", str(exc))

    @app.exception_handler(DuplicateEntityError)
    async def handle_duplicate(_request: Request, exc: DuplicateEntityError):
        return problem_response(status.HTTP_400_BAD_REQUEST, "Bad Request", exc.message)

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.opt(exception=exc).error(f"Unhandled error for {request.method} {request.url.path}")
        return problem_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal Server Error",
            "An unexpected error occurred while processing your request",
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log all HTTP requests."""
        logger.debug(f"Request: {request.method} {request.url.path}")
        response = await call_next(request)
        logger.debug(f"Response: {response.status_code} for {request.method} {request.url.path}")
        return response

    @app.get("/health")
    def health():
        return {"status": "ok"}

    logger.info("FastAPI application initialized")
    return app


setup_logger(level=settings.log_level, log_file=settings.log_file, json_logs=settings.log_json)
app = create_app()
