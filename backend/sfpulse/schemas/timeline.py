from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from sfpulse.schemas.social import StructuredTweet


class CommunitySentiment(BaseModel):
    hype: int = 50
    backlash: int = 50
    totalVotes: int = 0


class TimelineEventResponse(BaseModel):
    """Schema for timeline event response"""
    id: int
    headline: str
    week_of: datetime
    hype_summary: str
    backlash_summary: str
    weekly_pulse: str
    hype_tweets: Optional[list[StructuredTweet]] = None
    backlash_tweets: Optional[list[StructuredTweet]] = None
    community_sentiment: Optional[CommunitySentiment] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class VoteRequest(BaseModel):
    """Schema for recording a vote; range and sum are checked by the vote service"""
    event_id: int = Field(alias="eventId")
    hype_percentage: float = Field(alias="hypePercentage")
    backlash_percentage: float = Field(alias="backlashPercentage")

    class Config:
        populate_by_name = True


class VoteResponse(BaseModel):
    vote_id: int
    community_sentiment: CommunitySentiment
    total_votes: int


class TrendProcessingReport(BaseModel):
    """Partial-success report of one social trends run"""
    processed: int
    failed: int
    results: list[dict] = Field(default_factory=list)
    errors: list[dict] = Field(default_factory=list)
