from datetime import datetime, timezone

from sfpulse.aggregation.filters import (
    filter_by_date_range,
    filter_by_start_date,
    filter_sf_relevant,
    is_sf_relevant,
)
from conftest import make_article


class TestFilterByStartDate:
    def test_keeps_articles_from_cutoff_day_onwards(self):
        articles = [
            make_article("Early", published_date="2025-10-19T23:59:59Z"),
            make_article("Midnight", published_date="2025-10-20T00:00:00Z"),
            make_article("Later", published_date="2025-10-22T08:30:00Z"),
        ]

        kept = filter_by_start_date(articles, "2025-10-20T15:00:00Z")

        assert [a.title for a in kept] == ["Midnight", "Later"]

    def test_unparseable_dates_are_dropped(self):
        articles = [
            make_article("Garbage", published_date="not a date"),
            make_article("Empty", published_date=""),
            make_article("Good", published_date="2025-10-21T10:00:00Z"),
        ]

        kept = filter_by_start_date(articles, "2025-10-20")

        assert [a.title for a in kept] == ["Good"]

    def test_rfc2822_dates_are_understood(self):
        articles = [
            make_article("RSS new", published_date="Tue, 21 Oct 2025 14:03:00 GMT"),
            make_article("RSS old", published_date="Fri, 10 Oct 2025 09:00:00 GMT"),
        ]

        kept = filter_by_start_date(articles, datetime(2025, 10, 20))

        assert [a.title for a in kept] == ["RSS new"]

    def test_every_kept_article_is_after_cutoff(self):
        dates = ["2025-10-01", "2025-10-25T01:00:00+02:00", "2025-10-30T12:00:00Z", "bogus"]
        articles = [make_article(f"A{i}", published_date=d) for i, d in enumerate(dates)]

        kept = filter_by_start_date(articles, "2025-10-25")

        assert [a.title for a in kept] == ["A2"]


class TestFilterByDateRange:
    def test_unparseable_dates_are_kept(self):
        now = datetime(2025, 10, 27, tzinfo=timezone.utc)
        articles = [
            make_article("Recent", published_date="2025-10-25T00:00:00Z"),
            make_article("Old", published_date="2025-10-01T00:00:00Z"),
            make_article("Unknown", published_date="sometime"),
        ]

        kept = filter_by_date_range(articles, days=7, now=now)

        assert [a.title for a in kept] == ["Recent", "Unknown"]


class TestRelevance:
    def test_place_names_match_case_insensitively(self):
        assert is_sf_relevant(make_article("BART fares rise", snippet="Riders react."))
        assert is_sf_relevant(make_article("Startup raises money", snippet="Based in SoMa, the company..."))

    def test_unrelated_articles_are_dropped(self):
        articles = [
            make_article("Chicago transit budget", snippet="The CTA board voted on Monday."),
            make_article("Oakland council vote", snippet="Members met downtown."),
        ]

        assert [a.title for a in filter_sf_relevant(articles)] == ["Oakland council vote"]
