from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from loguru import logger
from sqlalchemy.exc import IntegrityError

from sfpulse.config import settings
from sfpulse.database import init_db
from sfpulse.errors import AppError, DuplicateRecordError
from sfpulse.schemas import ErrorResponse
from sfpulse.api.v1 import health, weekly_news, trends, timeline, votes, qa


# Lifespan context manager for startup and shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    logger.info("Starting SF Pulse API...")
    logger.info(f"Initializing database at {settings.DATABASE_URL}")
    init_db()
    logger.info("Database initialized successfully")

    from sfpulse.scheduler import scheduler_service
    if settings.SCHEDULER_ENABLED:
        logger.info("Initializing scheduler...")
        scheduler_service.initialize()
        scheduler_service.start()
    else:
        logger.info("Scheduler disabled (SCHEDULER_ENABLED=false)")

    yield

    # Shutdown
    logger.info("Shutting down SF Pulse API...")
    scheduler_service.shutdown()


# Create FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Weekly San Francisco news digests and social narrative timeline",
    lifespan=lifespan
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _error_response(status_code: int, error: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=error.model_dump(exclude_none=True))


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.code} {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc.code} {exc.message}")
    return _error_response(
        exc.status_code,
        ErrorResponse(error=exc.message, code=exc.code, details=exc.details or None),
    )


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(error.get("loc", ())), "msg": error.get("msg", "")}
        for error in exc.errors()
    ]
    return _error_response(
        400,
        ErrorResponse(error="Invalid input data", code="VALIDATION_FAILED", details={"errors": errors}),
    )


@app.exception_handler(IntegrityError)
async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.error(f"Integrity error on {request.url.path}: {exc.orig}")
    error = DuplicateRecordError("Record already exists or violates a constraint")
    return _error_response(error.status_code, ErrorResponse(error=error.message, code=error.code))


# Include routers
app.include_router(health.router, prefix="/api/v1")
app.include_router(weekly_news.router, prefix="/api/v1")
app.include_router(trends.router, prefix="/api/v1")
app.include_router(timeline.router, prefix="/api/v1")
app.include_router(votes.router, prefix="/api/v1")
app.include_router(qa.router, prefix="/api/v1")


@app.get("/")
async def root():
    """Root endpoint"""
    return {
        "name": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "status": "running",
        "docs": "/docs",
        "health": "/api/v1/health"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "sfpulse.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG
    )
