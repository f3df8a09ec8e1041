from sfpulse.models.weekly_news import WeeklyNews
from sfpulse.models.timeline_event import TimelineEvent
from sfpulse.models.user_vote import UserVote

__all__ = [
    "WeeklyNews",
    "TimelineEvent",
    "UserVote",
]
