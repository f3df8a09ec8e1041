from loguru import logger

from sfpulse.aggregation.weekly import WeeklyNewsAggregator
from sfpulse.database import SessionLocal
from sfpulse.errors import AppError
from sfpulse.repositories import cleanup_duplicate_weeks


async def weekly_news_job():
    """
    Job to aggregate the digest for the most recent Sunday
    """
    logger.info("Starting scheduled weekly news aggregation")

    db = SessionLocal()
    try:
        report = await WeeklyNewsAggregator(db).run()
        logger.info(
            f"Scheduled aggregation stored week {report.week_of.date()} "
            f"(ID: {report.id}, outcomes: {report.outcomes})"
        )
    except AppError as e:
        logger.error(f"Scheduled weekly news aggregation failed: {e.code} {e}")
        db.rollback()
    finally:
        db.close()


async def cleanup_duplicate_weeks_job():
    """
    Job to remove digests stored twice for the same calendar week
    """
    logger.info("Starting duplicate week cleanup job")

    db = SessionLocal()
    try:
        deleted = cleanup_duplicate_weeks(db)
        if not deleted:
            logger.info("No duplicate weeks to clean up")
    finally:
        db.close()
