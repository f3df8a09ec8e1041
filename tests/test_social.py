import httpx

from sfpulse.services.social import SocialService, build_sentiment_query, classify_sentiment, mock_posts


def search_payload(*posts, users=None):
    return {
        "data": list(posts),
        "includes": {"users": users or [{"id": "u1", "username": "sfresident", "name": "SF Resident"}]},
    }


def post(post_id, text, likes=0, retweets=0, author_id="u1"):
    return {
        "id": post_id,
        "text": text,
        "author_id": author_id,
        "created_at": "2025-10-14T18:00:00Z",
        "public_metrics": {"like_count": likes, "retweet_count": retweets},
    }


def social_service(cache, handler, token="token"):
    calls = []

    def tracking(request):
        calls.append(request)
        return handler(request)

    service = SocialService(cache=cache, bearer_token=token, transport=httpx.MockTransport(tracking))
    return service, calls


def test_query_embeds_sentiment_keywords():
    query = build_sentiment_query("#FleetWeek", "backlash")

    assert query.startswith('#FleetWeek ("terrible" OR "hate"')
    assert query.endswith(") -is:retweet lang:en")


def test_mock_posts_are_deterministic_per_topic():
    posts = mock_posts("#Fleet Week!", "hype")

    assert [p.id for p in posts] == ["fleetweek_hype_1", "fleetweek_hype_2", "fleetweek_hype_3"]
    assert all(p.sentiment == "hype" for p in posts)
    assert "#Fleet Week!" in posts[0].text
    assert posts[0].author == "Sarah Chen"


def test_classifier_drops_mixed_posts():
    assert classify_sentiment("Best parade ever") == "hype"
    assert classify_sentiment("Worst traffic ever") == "backlash"
    assert classify_sentiment("Great show but terrible parking") is None
    assert classify_sentiment("Ships arrived") is None


async def test_live_posts_are_mapped_tagged_and_cached(cache):
    def handler(request):
        assert request.headers["authorization"] == "Bearer token"
        assert request.url.params["max_results"] == "10"
        return httpx.Response(200, json=search_payload(
            post("1", "I love Fleet Week", likes=5),
            post("2", "Amazing Blue Angels", author_id="missing"),
            post("3", "Great ships"),
            post("4", "Fantastic weekend"),
        ))

    service, calls = social_service(cache, handler)

    outcome = await service.fetch_sentiment_posts("#FleetWeek", "hype", max_results=3)

    assert outcome.kind == "live"
    assert [p.id for p in outcome.value] == ["1", "2", "3"]
    assert all(p.sentiment == "hype" for p in outcome.value)
    assert outcome.value[0].author == "SF Resident"
    assert (outcome.value[1].author, outcome.value[1].username) == ("Unknown", "unknown")

    again = await service.fetch_sentiment_posts("#FleetWeek", "hype", max_results=3)

    assert len(calls) == 1
    assert [p.id for p in again.value] == ["1", "2", "3"]
    assert cache.get("#FleetWeek_hype_tweets") is not None


async def test_api_error_falls_back_to_uncached_mock_posts(cache):
    service, calls = social_service(cache, lambda r: httpx.Response(429, headers={"x-rate-limit-reset": "1760000000"}))

    outcome = await service.fetch_sentiment_posts("#Dreamforce", "backlash")

    assert outcome.kind == "fallback"
    assert [p.id for p in outcome.value] == ["dreamforce_backlash_1", "dreamforce_backlash_2", "dreamforce_backlash_3"]
    assert cache.get("#Dreamforce_backlash_tweets") is None


async def test_missing_token_never_calls_api(cache):
    service, calls = social_service(cache, lambda r: httpx.Response(200, json={}), token="")

    outcome = await service.fetch_sentiment_posts("#HalloweenSF", "hype")

    assert outcome.kind == "fallback"
    assert len(outcome.value) == 3
    assert calls == []


async def test_empty_result_falls_back(cache):
    service, _ = social_service(cache, lambda r: httpx.Response(200, json={"meta": {"result_count": 0}}))

    outcome = await service.fetch_sentiment_posts("#OpenStudios", "hype")

    assert outcome.kind == "fallback"
    assert outcome.reason == "no posts found"


async def test_efficient_mode_keeps_top_posts_by_engagement(cache):
    payload = search_payload(
        post("h1", "Amazing show", likes=10),
        post("h2", "Love it", likes=50),
        post("h3", "Best day", likes=30, retweets=30),
        post("h4", "Beautiful ships", likes=1),
        post("b1", "Terrible traffic", likes=5),
        post("b2", "Worst noise", likes=40),
        post("b3", "Bad parking", likes=20),
        post("m1", "Great view but awful crowds", likes=999),
        post("n1", "Ships docked", likes=500),
    )
    service, calls = social_service(cache, lambda r: httpx.Response(200, json=payload))

    outcome = await service.fetch_posts_efficient("#FleetWeek")

    assert outcome.kind == "live"
    assert [p.id for p in outcome.value.hype_tweets] == ["h3", "h2", "h1"]
    assert [p.id for p in outcome.value.backlash_tweets] == ["b2", "b3"]
    assert calls[0].url.params["query"] == "#FleetWeek -is:retweet lang:en"
    assert cache.get("#FleetWeek_all_tweets") is not None


async def test_efficient_mode_pads_thin_side_with_mock_posts(cache):
    payload = search_payload(
        post("h1", "Amazing show"),
        post("h2", "Love it"),
        post("b1", "Terrible traffic"),
    )
    service, _ = social_service(cache, lambda r: httpx.Response(200, json=payload))

    outcome = await service.fetch_posts_efficient("#FleetWeek")

    assert outcome.kind == "fallback"
    assert [p.id for p in outcome.value.hype_tweets] == ["h1", "h2"]
    assert [p.id for p in outcome.value.backlash_tweets] == ["fleetweek_backlash_1", "fleetweek_backlash_2"]


async def test_unparseable_rate_limit_reset_still_falls_back(cache):
    service, calls = social_service(cache, lambda r: httpx.Response(429, headers={"x-rate-limit-reset": "soon"}))

    outcome = await service.fetch_sentiment_posts("#FleetWeek", "hype")

    assert outcome.kind == "fallback"
    assert len(outcome.value) == 3
    assert len(calls) == 1


async def test_corrupt_cache_entry_is_refetched(cache):
    cache.set("#FleetWeek_hype_tweets", [{"id": "stale"}], 60)
    payload = search_payload(post("1", "Amazing ships"))
    service, calls = social_service(cache, lambda r: httpx.Response(200, json=payload))

    outcome = await service.fetch_sentiment_posts("#FleetWeek", "hype")

    assert outcome.kind == "live"
    assert [p.id for p in outcome.value] == ["1"]
    assert len(calls) == 1


async def test_efficient_mode_ignores_corrupt_cache_entry(cache):
    cache.set("#FleetWeek_all_tweets", {"hype_tweets": "nope"}, 60)
    service, calls = social_service(cache, lambda r: httpx.Response(500, text="down"))

    outcome = await service.fetch_posts_efficient("#FleetWeek")

    assert outcome.kind == "fallback"
    assert len(outcome.value.hype_tweets) == 3
    assert len(outcome.value.backlash_tweets) == 2
    assert len(calls) == 1
