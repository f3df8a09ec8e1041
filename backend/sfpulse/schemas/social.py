from pydantic import BaseModel, Field
from typing import Literal

Sentiment = Literal['hype', 'backlash']


class StructuredTweet(BaseModel):
    """A social post with its sentiment bucket assigned at fetch time"""
    id: str
    text: str
    author: str
    username: str
    timestamp: str
    likes: int = 0
    retweets: int = 0
    sentiment: Sentiment


class NarrativeAnalysis(BaseModel):
    """Schema the LLM must answer with for a narrative analysis"""
    hype_summary: str = Field(alias="hypeSummary", min_length=1)
    backlash_summary: str = Field(alias="backlashSummary", min_length=1)
    weekly_pulse: str = Field(alias="weeklyPulse", min_length=1)

    class Config:
        populate_by_name = True


class SentimentPosts(BaseModel):
    hype_tweets: list[StructuredTweet]
    backlash_tweets: list[StructuredTweet]
