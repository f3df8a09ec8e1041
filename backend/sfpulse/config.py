from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "SF Pulse API"
    APP_VERSION: str = "1.0.0"
    DEBUG: bool = False

    # Database
    DATABASE_URL: str = "sqlite:///./data/sfpulse.db"

    # NewsAPI (keyed search)
    NEWSAPI_KEY: Optional[str] = None
    NEWSAPI_BASE_URL: str = "https://newsapi.org/v2/everything"
    NEWS_PAGE_SIZE: int = 10
    NEWS_MINIMUM_DATE: Optional[str] = None  # YYYY-MM-DD, never fetch before this

    # Google News RSS (unauthenticated fallback)
    GOOGLE_NEWS_RSS_URL: str = "https://news.google.com/rss/search"
    HTTP_TIMEOUT: float = 20.0  # seconds

    # LLM (OpenAI-compatible chat completions)
    LLM_API_KEY: Optional[str] = None
    LLM_BASE_URL: str = "https://api.novita.ai/v3/openai"
    LLM_MODEL: str = "deepseek/deepseek-v3.2-exp"
    LLM_CHAT_MODEL: str = "deepseek/deepseek-r1-0528-qwen3-8b"
    LLM_TIMEOUT: float = 60.0  # seconds
    LLM_SUMMARY_TIMEOUT: float = 30.0  # seconds, category summaries only
    LLM_MAX_RETRIES: int = 3
    LLM_RETRY_DELAY: float = 2.0  # seconds, doubled on every attempt
    LLM_PACING_SECONDS: float = 2.0  # pause between sequential LLM calls

    # X (social search)
    X_BEARER_TOKEN: Optional[str] = None
    X_API_BASE_URL: str = "https://api.twitter.com/2/tweets/search/recent"

    # Cache
    CACHE_DIR: str = "./.cache/x-api"
    CACHE_TTL_SECONDS: int = 7 * 24 * 60 * 60

    # Cron / scheduler
    CRON_SECRET: Optional[str] = None
    SCHEDULER_ENABLED: bool = False
    WEEKLY_NEWS_CRON: str = "0 6 * * sun"  # Sundays 06:00 UTC

    # Social topics, one per week
    WEEKLY_TOPICS: list = [
        {"week_of": "2025-09-01", "topic": "#LaborDayWeekend"},
        {"week_of": "2025-09-08", "topic": "#SuperFlexArtFest"},
        {"week_of": "2025-09-15", "topic": "#SupervisorRecall"},
        {"week_of": "2025-09-22", "topic": "#FolsomStreetFair"},
        {"week_of": "2025-09-29", "topic": "#OpenStudios"},
        {"week_of": "2025-10-06", "topic": "#FleetWeek"},
        {"week_of": "2025-10-13", "topic": "#Dreamforce"},
        {"week_of": "2025-10-20", "topic": "#TrumpSFSurge"},
        {"week_of": "2025-10-27", "topic": "#HalloweenSF"},
    ]

    # CORS (for local development)
    CORS_ORIGINS: list = ["http://localhost:3000", "http://localhost:5173"]

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
