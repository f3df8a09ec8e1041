"""
Weekly digest orchestration.

One run fetches four categories of SF news concurrently, keeps only articles
published since the start of the week, summarizes each category with the LLM
(sequentially, pausing between calls to respect provider rate limits) and
upserts a single ``WeeklyNews`` row for the week.
"""
import asyncio
from datetime import datetime
from typing import Dict, List, Optional
from loguru import logger
from sqlalchemy.orm import Session

from sfpulse.aggregation.filters import filter_by_start_date
from sfpulse.config import settings
from sfpulse.errors import NoArticlesFoundError
from sfpulse.repositories.weekly_news import MAX_SOURCES, upsert_weekly_news
from sfpulse.schemas.news import CATEGORIES, AggregationReport, Category, CategoryNews, NewsArticle
from sfpulse.services.news_sources import NewsSourceService
from sfpulse.services.summarizer import NarrativeService
from sfpulse.utils.dates import DateLike, normalize_week, most_recent_sunday, parse_datetime

SAMPLE_SIZE = 3


class WeeklyNewsAggregator:
    """Fetch, filter, summarize and persist one week of news"""

    def __init__(
        self,
        db: Session,
        sources: Optional[NewsSourceService] = None,
        narrative: Optional[NarrativeService] = None,
        pacing_seconds: Optional[float] = None,
        minimum_date: Optional[DateLike] = None,
    ):
        self.db = db
        self.sources = sources or NewsSourceService()
        self.narrative = narrative or NarrativeService()
        self.pacing_seconds = settings.LLM_PACING_SECONDS if pacing_seconds is None else pacing_seconds
        self.minimum_date = minimum_date if minimum_date is not None else settings.NEWS_MINIMUM_DATE

    def resolve_week(self, target_week: Optional[DateLike] = None) -> datetime:
        """Target week at midnight, or the most recent Sunday"""
        if target_week is None:
            return most_recent_sunday()
        return normalize_week(target_week)

    def fetch_start(self, week_of: datetime) -> datetime:
        """Start of the fetch window; never earlier than the configured minimum date"""
        start = parse_datetime(week_of)
        minimum = parse_datetime(self.minimum_date) if self.minimum_date else None
        if minimum is not None and minimum > start:
            logger.info(f"Week {week_of.date()} starts before minimum date {self.minimum_date}, clamping")
            return minimum
        return start

    async def fetch_all(self, from_date: datetime) -> Dict[Category, List[NewsArticle]]:
        """All four categories concurrently, strict start-date filter applied"""
        results = await asyncio.gather(
            *(self.sources.fetch_with_fallback(category, from_date) for category in CATEGORIES)
        )
        return {
            category: filter_by_start_date(articles, from_date)
            for category, articles in zip(CATEGORIES, results)
        }

    async def run(self, target_week: Optional[DateLike] = None) -> AggregationReport:
        """
        Build and store the digest for one week

        Args:
            target_week: Any instant in the week's first day; defaults to the most recent Sunday

        Returns:
            Report with per-category counts, outcome kinds and sample titles

        Raises:
            NoArticlesFoundError: No category produced a single article; nothing is stored
        """
        week_of = self.resolve_week(target_week)
        from_date = self.fetch_start(week_of)
        logger.info(f"Aggregating weekly news for week of {week_of.date()} (from {from_date.isoformat()})")

        articles_by_category = await self.fetch_all(from_date)
        stats = {category: len(articles) for category, articles in articles_by_category.items()}
        logger.info(f"Fetched articles per category: {stats}")

        if not any(stats.values()):
            raise NoArticlesFoundError(
                "No articles found for any category. Check that NEWSAPI_KEY is set and valid, "
                "or that Google News RSS is reachable.",
                details={"week_of": week_of.isoformat(), "from_date": from_date.isoformat()},
            )

        categories: Dict[Category, CategoryNews] = {}
        outcomes: Dict[str, str] = {}
        llm_called = False
        for category in CATEGORIES:
            articles = articles_by_category[category]

            # pace between LLM calls only; empty categories make none
            if articles and llm_called and self.pacing_seconds > 0:
                await asyncio.sleep(self.pacing_seconds)

            outcome = await self.narrative.generate_category_summary(category, articles[:MAX_SOURCES])
            llm_called = llm_called or bool(articles)
            outcomes[category] = outcome.kind
            if outcome.kind == "fallback":
                logger.warning(f"Category {category} used fallback summary: {outcome.reason}")

            summary = outcome.value
            categories[category] = CategoryNews(
                category=category,
                summary_short=summary.summary_short,
                summary_detailed=summary.summary_detailed,
                bullets=summary.bullets,
                sources=articles[:MAX_SOURCES],
                keywords=summary.keywords,
            )

        row = upsert_weekly_news(self.db, week_of, categories)

        return AggregationReport(
            week_of=week_of,
            id=row.id,
            stats=stats,
            outcomes=outcomes,
            sample={
                category: [{"title": a.title, "source": a.source} for a in articles[:SAMPLE_SIZE]]
                for category, articles in articles_by_category.items()
            },
        )
