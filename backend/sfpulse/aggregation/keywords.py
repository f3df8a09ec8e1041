import re
from typing import Iterable

from sfpulse.constants import STOP_WORDS
from sfpulse.schemas.news import NewsArticle

_NON_WORD = re.compile(r"[^\w\s]")

TITLE_WEIGHT = 2
SNIPPET_WEIGHT = 1


def _tokenize(text: str) -> list[str]:
    words = _NON_WORD.sub("", text.lower()).split()
    return [word for word in words if len(word) > 3 and word not in STOP_WORDS]


def extract_keywords(articles: Iterable[NewsArticle], max_keywords: int = 5) -> list[str]:
    """
    Most frequent meaningful words across titles and snippets

    Title words count twice, snippet words once. Equal counts keep the order
    in which the words were first seen. Results are capitalized.
    """
    frequency: dict[str, int] = {}

    for article in articles:
        for word in _tokenize(article.title):
            frequency[word] = frequency.get(word, 0) + TITLE_WEIGHT
        for word in _tokenize(article.snippet):
            frequency[word] = frequency.get(word, 0) + SNIPPET_WEIGHT

    # sorted() is stable, so ties stay in first-occurrence order
    ranked = sorted(frequency.items(), key=lambda item: item[1], reverse=True)
    return [word[:1].upper() + word[1:] for word, _ in ranked[:max_keywords]]
