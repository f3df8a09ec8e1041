"""
Near-duplicate removal and a simple relevance ranking.
"""
from typing import Iterable

from sfpulse.schemas.news import NewsArticle


def _significant_words(text: str) -> set[str]:
    return {word for word in text.lower().split() if len(word) > 3}


def title_similarity(first: str, second: str) -> float:
    """Jaccard index over case-folded words longer than 3 characters"""
    words_a = _significant_words(first)
    words_b = _significant_words(second)

    union = words_a | words_b
    if not union:
        return 0.0
    return len(words_a & words_b) / len(union)


def deduplicate_articles(
    articles: Iterable[NewsArticle],
    similarity_threshold: float = 0.6,
) -> list[NewsArticle]:
    """
    Drop reposts of the same story

    Single greedy pass in input order. An article is discarded when its title
    is at least ``similarity_threshold`` similar to an already accepted title,
    or when its URL was already accepted.

    Args:
        articles: Articles in priority order
        similarity_threshold: Jaccard similarity at which titles count as duplicates

    Returns:
        Accepted articles, in input order
    """
    accepted: list[NewsArticle] = []
    seen_urls: set[str] = set()

    for article in articles:
        is_duplicate = any(
            title_similarity(article.title, existing.title) >= similarity_threshold
            for existing in accepted
        )
        if is_duplicate or article.url in seen_urls:
            continue

        accepted.append(article)
        seen_urls.add(article.url)

    return accepted


def rank_articles(articles: Iterable[NewsArticle]) -> list[NewsArticle]:
    """Longer title + snippet first; ties keep their input order"""
    return sorted(articles, key=lambda a: len(a.title) + len(a.snippet), reverse=True)
