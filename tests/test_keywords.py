from sfpulse.aggregation.keywords import extract_keywords
from sfpulse.aggregation.pipeline import aggregate_all_news
from conftest import make_article


def test_title_words_outweigh_snippet_words():
    articles = [
        make_article("Housing approval", snippet="Transit transit mention."),
    ]

    keywords = extract_keywords(articles, max_keywords=3)

    # housing/approval: 2 each from the title; transit: 2 from the snippet
    assert keywords[:2] == ["Housing", "Approval"]
    assert "Transit" in keywords


def test_stop_words_and_short_words_are_excluded():
    articles = [make_article("The bay and the sea", snippet="With that from this")]

    assert extract_keywords(articles) == []


def test_ties_keep_first_seen_order_and_results_are_stable():
    articles = [
        make_article("Zoning reform", snippet=""),
        make_article("Budget vote", snippet=""),
    ]

    first = extract_keywords(articles, max_keywords=4)
    second = extract_keywords(articles, max_keywords=4)

    assert first == ["Zoning", "Reform", "Budget", "Vote"]
    assert first == second


def test_aggregate_all_news_returns_categories_and_keywords():
    result = aggregate_all_news({
        "tech": [make_article("Robotaxi expansion approved", published_date="undated")],
        "politics": [make_article("Robotaxi hearing scheduled", published_date="undated")],
    })

    assert set(result["categories"]) == {"tech", "politics"}
    assert result["keywords"][0] == "Robotaxi"
