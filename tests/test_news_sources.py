import httpx

from sfpulse.services.news_api import NewsAPIService
from sfpulse.services.news_sources import NewsSourceService
from sfpulse.services.rss import RSSService

RSS_FEED = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"><channel><title>Google News</title>
<item>
  <title><![CDATA[Muni expands late-night service in San Francisco - SF Standard]]></title>
  <link>https://news.google.com/articles/muni</link>
  <pubDate>Tue, 21 Oct 2025 14:03:00 GMT</pubDate>
  <description><![CDATA[<a href="x">Muni</a> will run more owl buses]]></description>
  <source url="https://sfstandard.com">SF Standard</source>
</item>
<item>
  <title>Old story about the Bay Area</title>
  <link>https://news.google.com/articles/old</link>
  <pubDate>Mon, 01 Sep 2025 10:00:00 GMT</pubDate>
  <description>Something from September</description>
</item>
<item>
  <title>Chicago approves budget</title>
  <link>https://news.google.com/articles/chicago</link>
  <pubDate>Tue, 21 Oct 2025 10:00:00 GMT</pubDate>
  <description>The city council in Illinois voted.</description>
</item>
</channel></rss>"""


def newsapi_payload(*articles):
    return {"status": "ok", "totalResults": len(articles), "articles": list(articles)}


def newsapi_article(title, published_at="2025-10-21T09:00:00Z", description="San Francisco story", url=None):
    return {
        "source": {"id": None, "name": "SF Chronicle"},
        "author": "Staff",
        "title": title,
        "description": description,
        "url": url or f"https://sfchronicle.com/{title.replace(' ', '-').lower()}",
        "urlToImage": None,
        "publishedAt": published_at,
        "content": None,
    }


def build_service(newsapi_handler, rss_handler, api_key="key"):
    rss_calls = []

    def tracking_rss(request):
        rss_calls.append(request)
        return rss_handler(request)

    service = NewsSourceService(
        news_api=NewsAPIService(api_key=api_key, transport=httpx.MockTransport(newsapi_handler)),
        rss=RSSService(transport=httpx.MockTransport(tracking_rss)),
    )
    return service, rss_calls


async def test_keyed_api_results_skip_rss():
    def newsapi(request):
        assert request.url.params["from"] == "2025-10-20"
        assert request.url.params["sortBy"] == "publishedAt"
        return httpx.Response(200, json=newsapi_payload(
            newsapi_article("Mayor unveils budget"),
            newsapi_article("[Removed]"),
            newsapi_article("Supervisors debate housing", published_at="2025-10-10T09:00:00Z"),
        ))

    service, rss_calls = build_service(newsapi, lambda r: httpx.Response(500))

    articles = await service.fetch_with_fallback("politics", "2025-10-20")

    assert [a.title for a in articles] == ["Mayor unveils budget"]
    assert rss_calls == []


async def test_falls_back_to_rss_when_keyed_api_fails():
    service, rss_calls = build_service(
        lambda r: httpx.Response(401, json={"status": "error"}),
        lambda r: httpx.Response(200, text=RSS_FEED),
    )

    articles = await service.fetch_with_fallback("sf-local", "2025-10-20")

    assert len(rss_calls) == 1
    assert rss_calls[0].url.params["gl"] == "US"
    assert [a.title for a in articles] == ["Muni expands late-night service in San Francisco - SF Standard"]
    assert articles[0].source == "SF Standard"
    assert articles[0].snippet == "Muni will run more owl buses"


async def test_missing_key_goes_straight_to_rss():
    def newsapi(request):
        raise AssertionError("keyed API must not be called without a key")

    service, rss_calls = build_service(newsapi, lambda r: httpx.Response(200, text=RSS_FEED), api_key="")

    articles = await service.fetch_with_fallback("tech", "2025-10-20")

    assert len(rss_calls) == 1
    assert len(articles) == 1


async def test_both_sources_down_yields_empty_list():
    def broken(request):
        raise httpx.ConnectError("unreachable")

    service, _ = build_service(broken, broken)

    assert await service.fetch_with_fallback("economy", "2025-10-20") == []


async def test_malformed_keyed_api_body_is_treated_as_no_results():
    service, rss_calls = build_service(
        lambda r: httpx.Response(200, json={"unexpected": True}),
        lambda r: httpx.Response(200, text="<rss><channel></channel></rss>"),
    )

    assert await service.fetch_with_fallback("tech", "2025-10-20") == []
    assert len(rss_calls) == 1
