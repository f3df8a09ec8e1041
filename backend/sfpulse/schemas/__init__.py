from sfpulse.schemas.common import APIResponse, ErrorResponse, HealthCheckResponse
from sfpulse.schemas.news import (
    Category,
    CATEGORIES,
    NewsArticle,
    NewsSummary,
    CategoryNews,
    WeeklyNewsResponse,
    WeekListItem,
    AggregationReport,
)
from sfpulse.schemas.social import (
    Sentiment,
    StructuredTweet,
    NarrativeAnalysis,
    SentimentPosts,
)
from sfpulse.schemas.timeline import (
    CommunitySentiment,
    TimelineEventResponse,
    VoteRequest,
    VoteResponse,
    TrendProcessingReport,
)
from sfpulse.schemas.chat import (
    ChatMessage,
    NewsQARequest,
    EventChatContext,
    ChatbotRequest,
)

__all__ = [
    # Common
    "APIResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    # News
    "Category",
    "CATEGORIES",
    "NewsArticle",
    "NewsSummary",
    "CategoryNews",
    "WeeklyNewsResponse",
    "WeekListItem",
    "AggregationReport",
    # Social
    "Sentiment",
    "StructuredTweet",
    "NarrativeAnalysis",
    "SentimentPosts",
    # Timeline
    "CommunitySentiment",
    "TimelineEventResponse",
    "VoteRequest",
    "VoteResponse",
    "TrendProcessingReport",
    # Chat
    "ChatMessage",
    "NewsQARequest",
    "EventChatContext",
    "ChatbotRequest",
]
