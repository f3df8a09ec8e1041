from datetime import datetime, timezone

from sfpulse.config import settings
from sfpulse.scheduler.scheduler_service import weekly_news_trigger


def test_default_weekly_trigger_fires_on_sunday_morning():
    # 2026-10-14 is a Wednesday
    now = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)

    fire_time = weekly_news_trigger().get_next_fire_time(None, now)

    assert settings.WEEKLY_NEWS_CRON == "0 6 * * sun"
    assert fire_time.weekday() == 6
    assert (fire_time.year, fire_time.month, fire_time.day, fire_time.hour) == (2026, 10, 18, 6)


def test_numeric_weekday_zero_means_monday():
    now = datetime(2026, 10, 14, 12, 0, tzinfo=timezone.utc)

    fire_time = weekly_news_trigger("0 6 * * 0").get_next_fire_time(None, now)

    assert fire_time.weekday() == 0
