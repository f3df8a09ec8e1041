from sfpulse.services.llm import ChatCompletionService, llm_service
from sfpulse.services.news_api import NewsAPIService
from sfpulse.services.rss import RSSService
from sfpulse.services.news_sources import NewsSourceService
from sfpulse.services.summarizer import NarrativeService
from sfpulse.services.social import SocialService
from sfpulse.services.cache import Cache, MemoryCache, FileCache

__all__ = [
    "ChatCompletionService",
    "llm_service",
    "NewsAPIService",
    "RSSService",
    "NewsSourceService",
    "NarrativeService",
    "SocialService",
    "Cache",
    "MemoryCache",
    "FileCache",
]
