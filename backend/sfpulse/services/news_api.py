"""
NewsAPI.org client.

Keyed search over ``/v2/everything`` with real publish dates. Every failure is
logged and reported as "no results" so the caller can fall back to RSS.
"""
import httpx
from datetime import date, datetime
from typing import Optional
from loguru import logger
from pydantic import BaseModel, ValidationError

from sfpulse.config import settings
from sfpulse.constants import NEWSAPI_CATEGORY_QUERIES
from sfpulse.schemas.news import Category, NewsArticle
from sfpulse.utils.dates import DateLike, parse_datetime


class _Source(BaseModel):
    id: Optional[str] = None
    name: str


class _NewsAPIArticle(BaseModel):
    source: _Source
    author: Optional[str] = None
    title: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    urlToImage: Optional[str] = None
    publishedAt: str
    content: Optional[str] = None


class _NewsAPIResponse(BaseModel):
    status: str
    totalResults: int
    articles: list[_NewsAPIArticle]


def _as_query_date(value: Optional[DateLike]) -> str:
    if value is None:
        return datetime.utcnow().date().isoformat()
    if isinstance(value, (date, datetime)):
        return value.strftime("%Y-%m-%d")
    parsed = parse_datetime(value)
    return parsed.date().isoformat() if parsed else str(value)


class NewsAPIService:
    """Service for the keyed news search API"""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        page_size: Optional[int] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.NEWSAPI_KEY
        self.base_url = base_url or settings.NEWSAPI_BASE_URL
        self.page_size = page_size or settings.NEWS_PAGE_SIZE
        self.timeout = settings.HTTP_TIMEOUT
        self.transport = transport

    def build_params(self, category: Category, from_date: DateLike, to_date: Optional[DateLike] = None) -> dict:
        config = NEWSAPI_CATEGORY_QUERIES[category]
        return {
            "q": config["q"],
            "from": _as_query_date(from_date),
            "to": _as_query_date(to_date),
            "language": "en",
            "sortBy": "publishedAt",
            "pageSize": str(self.page_size),
            "domains": config["domains"],
            "apiKey": self.api_key,
        }

    async def fetch_articles(
        self,
        category: Category,
        from_date: DateLike,
        to_date: Optional[DateLike] = None,
    ) -> list[NewsArticle]:
        """
        Fetch SF news for a category and date range

        Args:
            category: News category
            from_date: Start date
            to_date: End date (default: today)

        Returns:
            Articles mapped to ``NewsArticle``; empty list on any failure
        """
        if not self.api_key:
            logger.warning("NEWSAPI_KEY not configured, skipping NewsAPI fetch")
            return []

        params = self.build_params(category, from_date, to_date)
        logger.info(f"Fetching {category} news from NewsAPI ({params['from']} to {params['to']})...")

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.base_url, params=params)

            if response.status_code != 200:
                logger.error(f"NewsAPI error: {response.status_code} - {response.text[:500]}")
                return []

            data = _NewsAPIResponse.model_validate(response.json())
            if data.status != "ok":
                logger.error(f"NewsAPI returned status: {data.status}")
                return []

        except ValidationError as e:
            logger.error(f"NewsAPI validation error for {category}: {e}")
            return []
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching from NewsAPI for {category}: {e}")
            return []

        articles = [
            NewsArticle(
                title=item.title,
                url=item.url,
                snippet=item.description or (item.content or "")[:200] or item.title,
                published_date=item.publishedAt,
                source=item.source.name,
            )
            for item in data.articles
            if item.title and item.url and item.title != "[Removed]"
        ]

        logger.info(f"Fetched {len(articles)} articles from NewsAPI for {category}")
        return articles
