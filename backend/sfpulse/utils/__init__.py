from sfpulse.utils.dates import parse_datetime, start_of_day, most_recent_sunday, normalize_week
from sfpulse.utils.outcome import Outcome, live, fallback, empty
from sfpulse.utils.retry import retry_async

__all__ = [
    "parse_datetime",
    "start_of_day",
    "most_recent_sunday",
    "normalize_week",
    "Outcome",
    "live",
    "fallback",
    "empty",
    "retry_async",
]
