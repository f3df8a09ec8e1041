from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from datetime import datetime
from loguru import logger

from sfpulse.database import get_db
from sfpulse.models import WeeklyNews, TimelineEvent
from sfpulse.schemas import HealthCheckResponse
from sfpulse.services import llm_service

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthCheckResponse)
async def health_check(db: Session = Depends(get_db)):
    """Health check endpoint"""
    # Check database
    try:
        db.execute(text("SELECT 1"))
        db_status = "healthy"
        weeks_stored = db.query(WeeklyNews).count()
        events_stored = db.query(TimelineEvent).count()
    except SQLAlchemyError as e:
        logger.error(f"Database health check failed: {e}")
        db_status = "error"
        weeks_stored = events_stored = 0

    # Check LLM provider
    llm_status = "healthy" if await llm_service.check_health() else "unavailable"

    overall_status = "healthy" if db_status == "healthy" and llm_status == "healthy" else "degraded"

    return HealthCheckResponse(
        status=overall_status,
        timestamp=datetime.utcnow().isoformat(),
        database=db_status,
        llm=llm_status,
        weeks_stored=weeks_stored,
        events_stored=events_stored,
    )
