from sfpulse.aggregation.dedup import deduplicate_articles, rank_articles, title_similarity
from sfpulse.aggregation.pipeline import aggregate_articles
from conftest import make_article


def test_title_similarity_ignores_short_words_and_case():
    assert title_similarity("Muni fare hike approved", "MUNI FARE HIKE APPROVED by us") == 1.0
    assert title_similarity("a b c", "d e f") == 0.0


def test_near_duplicate_titles_are_collapsed():
    articles = [
        make_article("Mayor announces new housing plan for downtown", url="https://a.com/1"),
        make_article("Mayor announces new housing plan for downtown area", url="https://b.com/2"),
        make_article("Giants lose season finale", url="https://c.com/3"),
    ]

    result = deduplicate_articles(articles)

    assert [a.url for a in result] == ["https://a.com/1", "https://c.com/3"]


def test_same_url_is_dropped_even_with_different_titles():
    articles = [
        make_article("Budget deficit widens", url="https://same.com/x"),
        make_article("Transit agency warns riders", url="https://same.com/x"),
    ]

    result = deduplicate_articles(articles)

    assert len(result) == 1
    assert result[0].title == "Budget deficit widens"


def test_dedup_output_is_a_pairwise_distinct_subsequence():
    articles = [
        make_article("Golden Gate Park concert draws crowds", url="https://x.com/1"),
        make_article("Crowds flock to Golden Gate Park concert", url="https://x.com/2"),
        make_article("City budget talks stall again", url="https://x.com/3"),
        make_article("City budget talks stall again today", url="https://x.com/4"),
        make_article("New ferry route to Alameda", url="https://x.com/1"),
    ]

    result = deduplicate_articles(articles)

    positions = [articles.index(a) for a in result]
    assert positions == sorted(positions)
    for i, first in enumerate(result):
        for second in result[i + 1:]:
            assert title_similarity(first.title, second.title) < 0.6
            assert first.url != second.url


def test_rank_is_stable_and_does_not_mutate_input():
    articles = [
        make_article("Tie1", snippet="bb"),
        make_article("Much longer headline here", snippet="with a longer snippet"),
        make_article("Tie2", snippet="cc"),
    ]
    original = list(articles)

    ranked = rank_articles(articles)

    assert [a.title for a in ranked] == ["Much longer headline here", "Tie1", "Tie2"]
    assert articles == original


def test_aggregate_articles_truncates_after_ranking():
    articles = [
        make_article(f"Story number {i} about {'x' * i}", url=f"https://x.com/{i}", published_date="undated")
        for i in range(15)
    ]

    result = aggregate_articles(articles, deduplicate=False, max_articles=10)

    assert len(result) == 10
    assert result[0].url == "https://x.com/14"
