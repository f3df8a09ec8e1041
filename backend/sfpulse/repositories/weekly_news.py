from datetime import datetime
from typing import Dict, List, Optional
from loguru import logger
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sfpulse.errors import DuplicateRecordError
from sfpulse.models import WeeklyNews
from sfpulse.schemas.news import CATEGORIES, Category, CategoryNews, NewsArticle, WeeklyNewsResponse
from sfpulse.utils.dates import monday_of_week

MAX_SOURCES = 10


def _column_prefix(category: Category) -> str:
    return "sf_local" if category == "sf-local" else category


def _category_columns(news: CategoryNews) -> Dict[str, object]:
    prefix = _column_prefix(news.category)
    return {
        f"{prefix}_summary": news.summary_short,
        f"{prefix}_detailed": news.summary_detailed,
        f"{prefix}_bullets": list(news.bullets),
        f"{prefix}_sources": [source.model_dump() for source in news.sources[:MAX_SOURCES]],
        f"{prefix}_keywords": list(news.keywords),
    }


def _category_from_row(row: WeeklyNews, category: Category) -> CategoryNews:
    prefix = _column_prefix(category)
    return CategoryNews(
        category=category,
        summary_short=getattr(row, f"{prefix}_summary"),
        summary_detailed=getattr(row, f"{prefix}_detailed"),
        bullets=getattr(row, f"{prefix}_bullets") or [],
        sources=[NewsArticle(**source) for source in getattr(row, f"{prefix}_sources") or []],
        keywords=getattr(row, f"{prefix}_keywords") or [],
    )


def to_response(row: WeeklyNews) -> WeeklyNewsResponse:
    """Regroup the parallel category columns into ``CategoryNews`` objects"""
    return WeeklyNewsResponse(
        id=row.id,
        week_of=row.week_of,
        tech=_category_from_row(row, "tech"),
        politics=_category_from_row(row, "politics"),
        economy=_category_from_row(row, "economy"),
        sf_local=_category_from_row(row, "sf-local"),
        weekly_keywords=row.weekly_keywords or [],
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def upsert_weekly_news(
    db: Session,
    week_of: datetime,
    categories: Dict[Category, CategoryNews],
) -> WeeklyNews:
    """
    Create or replace the digest for ``week_of``

    ``weekly_keywords`` is the concatenation of the category keywords in
    category order.

    Raises:
        DuplicateRecordError: A concurrent writer inserted the same week first
    """
    values: Dict[str, object] = {}
    weekly_keywords: List[str] = []
    for category in CATEGORIES:
        values.update(_category_columns(categories[category]))
        weekly_keywords.extend(categories[category].keywords)
    values["weekly_keywords"] = weekly_keywords

    row = db.query(WeeklyNews).filter(WeeklyNews.week_of == week_of).first()
    if row:
        for key, value in values.items():
            setattr(row, key, value)
        row.updated_at = datetime.utcnow()
    else:
        row = WeeklyNews(week_of=week_of, **values)
        db.add(row)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateRecordError(f"Weekly news for {week_of.date()} already exists") from e

    db.refresh(row)
    logger.info(f"Saved weekly news for {week_of.date()} (ID: {row.id})")
    return row


def get_latest(db: Session) -> Optional[WeeklyNews]:
    return db.query(WeeklyNews).order_by(desc(WeeklyNews.week_of)).first()


def get_by_week(db: Session, week_of: datetime) -> Optional[WeeklyNews]:
    return db.query(WeeklyNews).filter(WeeklyNews.week_of == week_of).first()


def list_weeks(db: Session) -> List[datetime]:
    """All stored weeks, newest first"""
    rows = db.query(WeeklyNews.week_of).order_by(desc(WeeklyNews.week_of)).all()
    return [row.week_of for row in rows]


def cleanup_duplicate_weeks(db: Session) -> int:
    """
    Remove digests that fall in the same calendar week

    Rows are grouped by the Monday of their ``week_of``. The earliest created
    row of each group is kept.

    Returns:
        Number of rows deleted
    """
    rows = db.query(WeeklyNews).order_by(WeeklyNews.created_at, WeeklyNews.id).all()

    seen = set()
    deleted = 0
    for row in rows:
        monday = monday_of_week(row.week_of)
        if monday in seen:
            logger.info(f"Deleting duplicate weekly news {row.id} (week_of {row.week_of.date()}, week of {monday})")
            db.delete(row)
            deleted += 1
        else:
            seen.add(monday)

    db.commit()
    logger.info(f"Cleanup complete: {deleted} duplicate weeks removed")
    return deleted
