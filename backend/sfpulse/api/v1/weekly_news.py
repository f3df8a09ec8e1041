from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional
from loguru import logger

from sfpulse.aggregation.weekly import WeeklyNewsAggregator
from sfpulse.api.deps import verify_cron_secret
from sfpulse.database import get_db
from sfpulse.errors import NotFoundError, ValidationFailedError
from sfpulse.repositories import get_by_week, get_latest, list_weeks, to_response
from sfpulse.schemas import APIResponse, WeekListItem
from sfpulse.utils.dates import normalize_week

router = APIRouter(prefix="/weekly-news", tags=["weekly-news"])


def get_weekly_aggregator(db: Session = Depends(get_db)) -> WeeklyNewsAggregator:
    return WeeklyNewsAggregator(db)


def _parse_week(week_of: str):
    try:
        return normalize_week(week_of)
    except ValueError as e:
        raise ValidationFailedError(f"Invalid weekOf date: {week_of}") from e


@router.get("", response_model=APIResponse, response_model_exclude_none=True)
async def get_weekly_news(
    week_of: Optional[str] = Query(None, alias="weekOf"),
    db: Session = Depends(get_db)
):
    """
    Get the weekly digest

    Query Parameters:
    - weekOf: ISO date of the week (optional, defaults to the latest week)
    """
    if week_of:
        row = get_by_week(db, _parse_week(week_of))
    else:
        row = get_latest(db)

    if not row:
        raise NotFoundError("No weekly news found")

    return APIResponse(success=True, data=to_response(row))


@router.get("/weeks", response_model=APIResponse, response_model_exclude_none=True)
async def get_available_weeks(db: Session = Depends(get_db)):
    """List all stored weeks, newest first"""
    weeks = [WeekListItem(week_of=week) for week in list_weeks(db)]
    return APIResponse(success=True, data=weeks)


@router.post(
    "/aggregate",
    response_model=APIResponse,
    response_model_exclude_none=True,
    dependencies=[Depends(verify_cron_secret)],
)
async def aggregate_weekly_news(
    week_of: Optional[str] = Query(None, alias="weekOf"),
    aggregator: WeeklyNewsAggregator = Depends(get_weekly_aggregator)
):
    """
    Fetch, summarize and store one week of news

    Requires ``Authorization: Bearer <CRON_SECRET>``. Responds 502 when no
    category produced any article.
    """
    target_week = _parse_week(week_of) if week_of else None

    logger.info("Starting weekly news aggregation...")
    report = await aggregator.run(target_week)

    return APIResponse(
        success=True,
        data=report,
        message=f"Weekly news aggregated for week of {report.week_of.date()}",
    )
