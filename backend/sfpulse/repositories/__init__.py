from sfpulse.repositories.weekly_news import (
    upsert_weekly_news,
    get_latest,
    get_by_week,
    list_weeks,
    to_response,
    cleanup_duplicate_weeks,
)
from sfpulse.repositories.timeline import upsert_event, list_events, get_event
from sfpulse.repositories.votes import record_vote, recompute_sentiment, validate_split

__all__ = [
    "upsert_weekly_news",
    "get_latest",
    "get_by_week",
    "list_weeks",
    "to_response",
    "cleanup_duplicate_weeks",
    "upsert_event",
    "list_events",
    "get_event",
    "record_vote",
    "recompute_sentiment",
    "validate_split",
]
