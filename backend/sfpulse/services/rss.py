"""
RSS feed fetching and parsing service.

Google News search feeds need no API key, which makes them the fallback when
the keyed news API is unavailable or returns nothing.

Feed:
    https://news.google.com/rss/search?q=<query>&hl=en-US&gl=US&ceid=US:en
"""

import re
import httpx
import feedparser
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from loguru import logger

from sfpulse.config import settings
from sfpulse.constants import RSS_CATEGORY_QUERIES
from sfpulse.schemas.news import Category, NewsArticle
from sfpulse.utils.dates import parse_datetime

MAX_RSS_ITEMS = 10
SNIPPET_LENGTH = 200

_TAG = re.compile(r"<[^>]*>")


def parse_feed_items(content: str, limit: int = MAX_RSS_ITEMS) -> List[Dict[str, Any]]:
    """
    Parse RSS XML into plain entry dicts

    Each entry has: title, url, summary, published, source. Items without a
    title or link are skipped. CDATA-wrapped and bare text are both accepted.
    """
    feed = feedparser.parse(content)

    if feed.bozo and not feed.entries:
        logger.error(f"RSS feed parse error: {feed.bozo_exception}")
        return []

    entries = []
    for entry in feed.entries[:limit]:
        title = (entry.get("title") or "").strip()
        url = (entry.get("link") or "").strip()
        if not title or not url:
            continue

        source = entry.get("source") or {}
        entries.append({
            "title": title,
            "url": url,
            "summary": _TAG.sub("", entry.get("summary") or "").strip(),
            "published": (entry.get("published") or "").strip(),
            "source": (source.get("title") or "").strip(),
        })

    return entries


def entry_to_article(entry: Dict[str, Any]) -> NewsArticle:
    published = parse_datetime(entry["published"]) if entry["published"] else datetime.now(timezone.utc)
    return NewsArticle(
        title=entry["title"],
        url=entry["url"],
        snippet=(entry["summary"] or entry["title"])[:SNIPPET_LENGTH],
        # Unparseable dates are passed through untouched; the strict date filter drops them
        published_date=published.isoformat() if published else entry["published"],
        source=entry["source"] or "Google News",
    )


class RSSService:
    """Service for fetching and parsing RSS feeds."""

    def __init__(
        self,
        feed_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.feed_url = feed_url or settings.GOOGLE_NEWS_RSS_URL
        self.timeout = settings.HTTP_TIMEOUT
        self.transport = transport

    async def fetch_feed(self, params: Dict[str, str]) -> Dict[str, Any]:
        """
        Fetch and parse an RSS feed.

        Args:
            params: Query string parameters for the feed URL

        Returns:
            Dictionary with status and entries list.
        """
        try:
            logger.info(f"Fetching RSS feed: {self.feed_url} q={params.get('q', '')}")

            headers = {
                "User-Agent": "Mozilla/5.0 (compatible; SFPulseBot/1.0)",
                "Accept": "application/rss+xml, application/xml, text/xml, */*",
            }
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(self.feed_url, params=params, headers=headers)

            if response.status_code != 200:
                logger.error(f"RSS feed returned HTTP {response.status_code}: {self.feed_url}")
                return {
                    "status": "error",
                    "error": f"HTTP {response.status_code}",
                    "entries": [],
                }

            entries = parse_feed_items(response.text)
            logger.info(f"RSS feed parsed: {len(entries)} entries from {self.feed_url}")

            return {
                "status": "success",
                "entries": entries,
            }

        except httpx.HTTPError as e:
            logger.error(f"RSS feed network error: {e}")
            return {"status": "error", "error": str(e), "entries": []}

    async def fetch_category(self, category: Category) -> List[NewsArticle]:
        """
        Fetch up to 10 SF articles for a category from Google News

        Returns:
            Articles mapped to ``NewsArticle``; empty list on any failure
        """
        logger.info(f"Fetching {category} news from Google News RSS...")
        result = await self.fetch_feed({
            "q": RSS_CATEGORY_QUERIES[category],
            "hl": "en-US",
            "gl": "US",
            "ceid": "US:en",
        })

        articles = [entry_to_article(entry) for entry in result["entries"]]
        logger.info(f"Fetched {len(articles)} articles from Google News RSS for {category}")
        return articles
