from typing import Iterable, Mapping

from sfpulse.aggregation.dedup import deduplicate_articles, rank_articles
from sfpulse.aggregation.filters import filter_by_date_range
from sfpulse.aggregation.keywords import extract_keywords
from sfpulse.schemas.news import NewsArticle


def aggregate_articles(
    articles: Iterable[NewsArticle],
    deduplicate: bool = True,
    filter_days: int = 7,
    rank: bool = True,
    max_articles: int = 10,
) -> list[NewsArticle]:
    """
    Generic cleanup for one category

    Lenient date filter (unparseable dates kept), then optional dedup, then
    optional ranking, then truncation.
    """
    processed = filter_by_date_range(list(articles), days=filter_days)

    if deduplicate:
        processed = deduplicate_articles(processed)

    if rank:
        processed = rank_articles(processed)

    return processed[:max_articles]


def aggregate_all_news(news_by_category: Mapping[str, Iterable[NewsArticle]]) -> dict:
    """
    Run ``aggregate_articles`` for every category and mine combined keywords

    Returns:
        ``{"categories": {category: [articles]}, "keywords": [...]}``
    """
    categories = {
        category: aggregate_articles(articles)
        for category, articles in news_by_category.items()
    }
    all_articles = [article for articles in categories.values() for article in articles]

    return {
        "categories": categories,
        "keywords": extract_keywords(all_articles, max_keywords=10),
    }
