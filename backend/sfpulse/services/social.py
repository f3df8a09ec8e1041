"""
Social evidence posts from the X recent-search API.

Two fetch modes are offered because the API quota is the binding constraint:

* ``fetch_sentiment_posts`` spends one call per (topic, sentiment), and the
  query itself filters for sentiment keywords, so every post is on-side.
* ``fetch_posts_efficient`` spends one call per topic and sorts posts into
  sides client-side, so fewer posts are guaranteed to carry a clear sentiment.

Both cache live results and fall back to deterministic mock posts, so callers
always get a non-empty list.
"""
import re
import httpx
from datetime import datetime, timezone
from typing import Optional, List, Dict, Any
from loguru import logger
from pydantic import BaseModel, ValidationError

from sfpulse.config import settings
from sfpulse.constants import (
    HYPE_KEYWORDS,
    BACKLASH_KEYWORDS,
    HYPE_CLASSIFIER_KEYWORDS,
    BACKLASH_CLASSIFIER_KEYWORDS,
)
from sfpulse.schemas.social import Sentiment, SentimentPosts, StructuredTweet
from sfpulse.services.cache import Cache, FileCache
from sfpulse.utils.outcome import Outcome, fallback, live

MIN_API_RESULTS = 10
MAX_API_RESULTS = 100
EFFICIENT_FETCH_SIZE = 20
EVIDENCE_HYPE_COUNT = 3
EVIDENCE_BACKLASH_COUNT = 2


class _PublicMetrics(BaseModel):
    like_count: Optional[int] = None
    retweet_count: Optional[int] = None


class _RawPost(BaseModel):
    id: str
    text: str
    author_id: Optional[str] = None
    created_at: Optional[str] = None
    public_metrics: Optional[_PublicMetrics] = None


class _User(BaseModel):
    id: str
    username: str
    name: str


class _Includes(BaseModel):
    users: Optional[List[_User]] = None


class _SearchResponse(BaseModel):
    data: Optional[List[_RawPost]] = None
    includes: Optional[_Includes] = None


MOCK_TEMPLATES: Dict[str, List[Dict[str, Any]]] = {
    "hype": [
        {
            "text": "{topic} is absolutely incredible! The energy in SF is electric. This is what makes our city special.",
            "author": "Sarah Chen", "username": "sarahchen_tech", "likes": 1247, "retweets": 89,
        },
        {
            "text": "Just experienced {topic} and wow! The city feels alive with possibility. This is why SF is the heart of innovation.",
            "author": "Mike Rodriguez", "username": "mike_rodriguez", "likes": 892, "retweets": 156,
        },
        {
            "text": "{topic} really showcases the best of SF. Amazing community energy and innovation on display!",
            "author": "Alex Kim", "username": "alexkim_sf", "likes": 654, "retweets": 78,
        },
    ],
    "backlash": [
        {
            "text": "{topic} has completely taken over SF. Can't even walk down the street without being overwhelmed. The city doesn't feel like ours anymore.",
            "author": "Maria Santos", "username": "maria_sf_local", "likes": 2156, "retweets": 423,
        },
        {
            "text": "The disruption from {topic} is pricing out regular people. Hotel prices through the roof, streets impassable. This isn't sustainable.",
            "author": "David Park", "username": "davidpark_sf", "likes": 1876, "retweets": 312,
        },
        {
            "text": "Tired of {topic} taking priority over actual residents. SF needs to remember who lives here year-round.",
            "author": "Jamie Lee", "username": "jamielee_local", "likes": 1432, "retweets": 267,
        },
    ],
}


def mock_posts(topic: str, sentiment: Sentiment, count: Optional[int] = None) -> List[StructuredTweet]:
    """Deterministic placeholder posts for a topic; ids are stable per topic"""
    topic_slug = re.sub(r"[^a-zA-Z0-9]", "", topic).lower()
    timestamp = datetime.now(timezone.utc).isoformat()
    templates = MOCK_TEMPLATES[sentiment][:count]

    return [
        StructuredTweet(
            id=f"{topic_slug}_{sentiment}_{i}",
            text=template["text"].format(topic=topic),
            author=template["author"],
            username=template["username"],
            timestamp=timestamp,
            likes=template["likes"],
            retweets=template["retweets"],
            sentiment=sentiment,
        )
        for i, template in enumerate(templates, start=1)
    ]


def build_sentiment_query(topic: str, sentiment: Sentiment) -> str:
    keywords = HYPE_KEYWORDS if sentiment == "hype" else BACKLASH_KEYWORDS
    keyword_clause = " OR ".join(f'"{keyword}"' for keyword in keywords)
    return f"{topic} ({keyword_clause}) -is:retweet lang:en"


def classify_sentiment(text: str) -> Optional[Sentiment]:
    """Keyword vote; posts matching both sides or neither are unclassified"""
    lowered = text.lower()
    has_hype = any(keyword in lowered for keyword in HYPE_CLASSIFIER_KEYWORDS)
    has_backlash = any(keyword in lowered for keyword in BACKLASH_CLASSIFIER_KEYWORDS)

    if has_hype and not has_backlash:
        return "hype"
    if has_backlash and not has_hype:
        return "backlash"
    return None


def _engagement(post: StructuredTweet) -> int:
    return post.likes + post.retweets


def _format_reset(reset: Optional[str]) -> str:
    """ISO time from an epoch-seconds rate-limit header, or the raw header"""
    try:
        return datetime.fromtimestamp(int(reset), tz=timezone.utc).isoformat()
    except (TypeError, ValueError, OverflowError, OSError):
        return reset or "unknown"


class SocialService:
    """Service for fetching sentiment evidence posts"""

    def __init__(
        self,
        cache: Optional[Cache] = None,
        bearer_token: Optional[str] = None,
        base_url: Optional[str] = None,
        cache_ttl: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.cache = cache if cache is not None else FileCache(settings.CACHE_DIR, settings.CACHE_TTL_SECONDS)
        self.bearer_token = bearer_token if bearer_token is not None else settings.X_BEARER_TOKEN
        self.base_url = base_url or settings.X_API_BASE_URL
        self.cache_ttl = cache_ttl or settings.CACHE_TTL_SECONDS
        self.timeout = settings.HTTP_TIMEOUT
        self.transport = transport

    def _read_cache(self, key: str, parse):
        """Parsed cache entry, or None when missing or no longer valid"""
        value = self.cache.get(key)
        if not value:
            return None
        try:
            return parse(value)
        except (ValidationError, TypeError) as e:
            logger.warning(f"Ignoring unreadable cache entry {key}: {e}")
            return None

    async def _search(self, query: str, max_results: int) -> List[Dict[str, Any]]:
        """
        Run one recent-search call and return posts as plain dicts (no sentiment)

        Raises:
            RuntimeError: Non-2xx or malformed response
            httpx.HTTPError: Transport failure
        """
        params = {
            "query": query,
            "max_results": str(max(MIN_API_RESULTS, min(max_results, MAX_API_RESULTS))),
            "tweet.fields": "created_at,public_metrics,author_id",
            "expansions": "author_id",
            "user.fields": "username,name",
            "sort_order": "relevancy",
        }
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.get(
                self.base_url,
                params=params,
                headers={"Authorization": f"Bearer {self.bearer_token}"},
            )

        remaining = response.headers.get("x-rate-limit-remaining")
        if remaining:
            logger.info(f"X API rate limit remaining: {remaining}")

        if response.status_code != 200:
            reset = response.headers.get("x-rate-limit-reset")
            if response.status_code == 429:
                logger.warning(f"X API rate limit exceeded, resets at {_format_reset(reset)}")
            raise RuntimeError(f"X API request failed: {response.status_code} - {response.text[:300]}")

        try:
            data = _SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise RuntimeError(f"Invalid X API response: {e}") from e

        users = {user.id: user for user in (data.includes.users or [])} if data.includes else {}
        posts = []
        for post in data.data or []:
            user = users.get(post.author_id or "")
            metrics = post.public_metrics or _PublicMetrics()
            posts.append({
                "id": post.id,
                "text": post.text,
                "author": user.name if user else "Unknown",
                "username": user.username if user else "unknown",
                "timestamp": post.created_at or datetime.now(timezone.utc).isoformat(),
                "likes": metrics.like_count or 0,
                "retweets": metrics.retweet_count or 0,
            })
        return posts

    async def fetch_sentiment_posts(
        self,
        topic: str,
        sentiment: Sentiment,
        max_results: int = 20,
    ) -> Outcome[List[StructuredTweet]]:
        """
        Fetch posts for one side of a topic's debate

        Args:
            topic: Topic or hashtag
            sentiment: 'hype' or 'backlash'; every returned post is tagged with it
            max_results: Posts to return (the API is asked for at least 10)

        Returns:
            ``live`` with fetched posts, or ``fallback`` with mock posts
        """
        cache_key = f"{topic}_{sentiment}_tweets"
        cached = self._read_cache(cache_key, lambda value: [StructuredTweet.model_validate(post) for post in value])
        if cached:
            return live(cached)

        if not self.bearer_token:
            logger.warning("X_BEARER_TOKEN is not configured, returning mock data")
            return fallback(mock_posts(topic, sentiment), reason="X_BEARER_TOKEN not configured")

        query = build_sentiment_query(topic, sentiment)
        logger.info(f"Calling X API for {sentiment} tweets: {topic} (max: {max_results})...")

        try:
            raw_posts = await self._search(query, max_results)
        except (httpx.HTTPError, RuntimeError, ValueError) as e:
            logger.warning(f"Error fetching {sentiment} tweets for {topic}, using mock data: {e}")
            return fallback(mock_posts(topic, sentiment), reason=str(e))

        if not raw_posts:
            logger.warning(f"No tweets found for {sentiment} sentiment, using mock data")
            return fallback(mock_posts(topic, sentiment), reason="no posts found")

        posts = [StructuredTweet(**post, sentiment=sentiment) for post in raw_posts][:max_results]

        self.cache.set(cache_key, [post.model_dump() for post in posts], self.cache_ttl)
        logger.info(f"Fetched and cached {len(posts)} {sentiment} tweets for {topic}")
        return live(posts)

    async def fetch_posts_efficient(self, topic: str) -> Outcome[SentimentPosts]:
        """
        One API call for both sides, classified by keywords

        Keeps the top 3 hype and top 2 backlash posts by engagement. A side with
        fewer than 2 classified posts is filled with mock posts instead.
        """
        cache_key = f"{topic}_all_tweets"
        cached = self._read_cache(cache_key, SentimentPosts.model_validate)
        if cached:
            return live(cached)

        def all_mock(reason: str) -> Outcome[SentimentPosts]:
            return fallback(
                SentimentPosts(
                    hype_tweets=mock_posts(topic, "hype", EVIDENCE_HYPE_COUNT),
                    backlash_tweets=mock_posts(topic, "backlash", EVIDENCE_BACKLASH_COUNT),
                ),
                reason=reason,
            )

        if not self.bearer_token:
            logger.warning("X_BEARER_TOKEN is not configured, returning mock data")
            return all_mock("X_BEARER_TOKEN not configured")

        logger.info(f"Calling X API once for {topic} (efficient mode)...")
        try:
            raw_posts = await self._search(f"{topic} -is:retweet lang:en", EFFICIENT_FETCH_SIZE)
        except (httpx.HTTPError, RuntimeError, ValueError) as e:
            logger.warning(f"Error fetching tweets for {topic}, using mock data: {e}")
            return all_mock(str(e))

        if not raw_posts:
            logger.warning("No tweets found, using mock data")
            return all_mock("no posts found")

        hype: List[StructuredTweet] = []
        backlash: List[StructuredTweet] = []
        for post in raw_posts:
            sentiment = classify_sentiment(post["text"])
            if sentiment == "hype":
                hype.append(StructuredTweet(**post, sentiment="hype"))
            elif sentiment == "backlash":
                backlash.append(StructuredTweet(**post, sentiment="backlash"))

        top_hype = sorted(hype, key=_engagement, reverse=True)[:EVIDENCE_HYPE_COUNT]
        top_backlash = sorted(backlash, key=_engagement, reverse=True)[:EVIDENCE_BACKLASH_COUNT]

        result = SentimentPosts(
            hype_tweets=top_hype if len(top_hype) >= 2 else mock_posts(topic, "hype", EVIDENCE_HYPE_COUNT),
            backlash_tweets=top_backlash if len(top_backlash) >= 2 else mock_posts(topic, "backlash", EVIDENCE_BACKLASH_COUNT),
        )

        self.cache.set(cache_key, result.model_dump(), self.cache_ttl)
        logger.info(f"Fetched and cached tweets for {topic} ({len(top_hype)} hype, {len(top_backlash)} backlash)")

        if len(top_hype) < 2 or len(top_backlash) < 2:
            return fallback(result, reason="too few classified posts, padded with mock posts")
        return live(result)
