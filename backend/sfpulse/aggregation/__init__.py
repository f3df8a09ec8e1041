from sfpulse.aggregation.filters import (
    filter_by_start_date,
    filter_by_date_range,
    is_sf_relevant,
    filter_sf_relevant,
)
from sfpulse.aggregation.dedup import title_similarity, deduplicate_articles, rank_articles
from sfpulse.aggregation.keywords import extract_keywords
from sfpulse.aggregation.pipeline import aggregate_articles, aggregate_all_news

__all__ = [
    "filter_by_start_date",
    "filter_by_date_range",
    "is_sf_relevant",
    "filter_sf_relevant",
    "title_similarity",
    "deduplicate_articles",
    "rank_articles",
    "extract_keywords",
    "aggregate_articles",
    "aggregate_all_news",
]
