"""
Date and geography filters for fetched articles.

Two date filters exist on purpose:

* ``filter_by_start_date`` is strict: an article whose date cannot be parsed
  is dropped. The weekly digest uses it.
* ``filter_by_date_range`` is lenient: an unparseable date keeps the article.
  The generic ``aggregate_articles`` helper uses it.
"""
from datetime import datetime, timedelta, timezone
from typing import Iterable, Optional
from loguru import logger

from sfpulse.constants import SF_PLACE_TOKENS
from sfpulse.schemas.news import NewsArticle
from sfpulse.utils.dates import DateLike, parse_datetime, start_of_day


def filter_by_start_date(articles: Iterable[NewsArticle], cutoff: DateLike) -> list[NewsArticle]:
    """
    Keep articles published on or after the start of the cutoff day

    Args:
        articles: Articles to filter
        cutoff: Minimum date; the time of day is ignored

    Returns:
        Articles with a parseable ``published_date`` >= midnight UTC of ``cutoff``
    """
    cutoff_date = start_of_day(cutoff)

    kept = []
    for article in articles:
        published = parse_datetime(article.published_date)
        if published is None:
            logger.warning(f"Failed to parse date: {article.published_date!r} for article: {article.title}")
            continue
        if published >= cutoff_date:
            kept.append(article)
    return kept


def filter_by_date_range(
    articles: Iterable[NewsArticle],
    days: int = 7,
    now: Optional[datetime] = None,
) -> list[NewsArticle]:
    """Keep articles from the last ``days`` days; unparseable dates are kept"""
    now = parse_datetime(now) if now else datetime.now(timezone.utc)
    cutoff_date = now - timedelta(days=days)

    kept = []
    for article in articles:
        published = parse_datetime(article.published_date)
        if published is None or published >= cutoff_date:
            kept.append(article)
    return kept


def is_sf_relevant(article: NewsArticle) -> bool:
    """True if the title or snippet names a San Francisco area place"""
    search_text = f"{article.title} {article.snippet}".lower()
    return any(token in search_text for token in SF_PLACE_TOKENS)


def filter_sf_relevant(articles: Iterable[NewsArticle]) -> list[NewsArticle]:
    return [article for article in articles if is_sf_relevant(article)]
