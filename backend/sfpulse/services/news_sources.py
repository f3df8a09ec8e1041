from typing import Optional
from loguru import logger

from sfpulse.aggregation.filters import filter_sf_relevant
from sfpulse.schemas.news import Category, NewsArticle
from sfpulse.services.news_api import NewsAPIService
from sfpulse.services.rss import RSSService
from sfpulse.utils.dates import DateLike, parse_datetime


class NewsSourceService:
    """Keyed news API first, Google News RSS as fallback, SF relevance enforced"""

    def __init__(
        self,
        news_api: Optional[NewsAPIService] = None,
        rss: Optional[RSSService] = None,
    ):
        self.news_api = news_api or NewsAPIService()
        self.rss = rss or RSSService()

    async def fetch_with_fallback(self, category: Category, from_date: DateLike) -> list[NewsArticle]:
        """
        Fetch SF-relevant articles published since ``from_date``

        Args:
            category: News category
            from_date: Start date (articles before this instant are dropped)

        Returns:
            Articles that passed the date check and the geography check
        """
        articles = await self.news_api.fetch_articles(category, from_date)

        if not articles:
            logger.info(f"NewsAPI returned no results for {category}, trying Google RSS...")
            articles = await self.rss.fetch_category(category)

        cutoff = parse_datetime(from_date)
        recent = []
        for article in articles:
            published = parse_datetime(article.published_date)
            if published is not None and cutoff is not None and published >= cutoff:
                recent.append(article)

        relevant = filter_sf_relevant(recent)

        logger.info(f"Total {len(relevant)} SF-relevant articles for {category} from {from_date}")
        return relevant
