from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger
from loguru import logger
from typing import Optional

from sfpulse.config import settings
from sfpulse.scheduler.jobs import weekly_news_job, cleanup_duplicate_weeks_job

WEEKLY_NEWS_JOB_ID = 'weekly_news'
CLEANUP_JOB_ID = 'cleanup_duplicate_weeks'


def weekly_news_trigger(expression: Optional[str] = None) -> CronTrigger:
    """
    UTC cron trigger for the weekly digest

    Weekday numbers follow APScheduler (0 is Monday), so prefer names like "sun".
    """
    return CronTrigger.from_crontab(expression or settings.WEEKLY_NEWS_CRON, timezone='UTC')


class SchedulerService:
    """Service for managing the APScheduler instance and jobs"""

    def __init__(self):
        self.scheduler: Optional[AsyncIOScheduler] = None
        self.is_running = False

    def initialize(self):
        """Initialize the scheduler"""
        if self.scheduler:
            logger.warning("Scheduler already initialized")
            return

        logger.info("Initializing APScheduler...")

        # Job defaults
        job_defaults = {
            'coalesce': True,  # Combine multiple pending executions into one
            'max_instances': 1,  # Only one instance of a job at a time
            'misfire_grace_time': 3600
        }

        self.scheduler = AsyncIOScheduler(job_defaults=job_defaults, timezone='UTC')

        logger.info("Scheduler initialized successfully")

    def start(self):
        """Start the scheduler"""
        if not self.scheduler:
            raise RuntimeError("Scheduler not initialized. Call initialize() first.")

        if self.is_running:
            logger.warning("Scheduler already running")
            return

        logger.info("Starting scheduler...")
        self._add_jobs()
        self.scheduler.start()
        self.is_running = True
        logger.info("Scheduler started successfully")

    def shutdown(self):
        """Shutdown the scheduler"""
        if not self.scheduler or not self.is_running:
            return

        logger.info("Shutting down scheduler...")
        self.scheduler.shutdown(wait=False)
        self.is_running = False
        logger.info("Scheduler shut down successfully")

    def _add_jobs(self):
        """Register the weekly digest and the maintenance job"""
        self.scheduler.add_job(
            weekly_news_job,
            trigger=weekly_news_trigger(),
            id=WEEKLY_NEWS_JOB_ID,
            name='Aggregate Weekly News',
            replace_existing=True
        )

        # Daily duplicate cleanup at 3 AM UTC
        self.scheduler.add_job(
            cleanup_duplicate_weeks_job,
            trigger=CronTrigger(hour=3, minute=0, timezone='UTC'),
            id=CLEANUP_JOB_ID,
            name='Cleanup Duplicate Weeks',
            replace_existing=True
        )

        logger.info(f"Jobs added (weekly news cron: {settings.WEEKLY_NEWS_CRON})")


# Singleton instance
scheduler_service = SchedulerService()
