from datetime import datetime

import httpx

from sfpulse.aggregation.trends import TrendProcessor
from sfpulse.models import TimelineEvent
from sfpulse.services.social import SocialService
from sfpulse.services.summarizer import NarrativeService
from conftest import NARRATIVE_JSON, llm_reply, llm_with_responses

TOPICS = [
    {"week_of": "2025-10-06", "topic": "#FleetWeek"},
    {"week_of": "2025-10-13", "topic": "#Dreamforce"},
]


def processor(db, cache, llm):
    return TrendProcessor(
        db,
        social=SocialService(cache=cache, bearer_token=""),
        narrative=NarrativeService(llm=llm, max_attempts=2, retry_delay=0),
        pacing_seconds=0,
    )


async def test_each_topic_becomes_a_timeline_event(db, cache):
    llm = llm_with_responses(llm_reply(NARRATIVE_JSON))

    report = await processor(db, cache, llm).run(TOPICS)

    assert (report.processed, report.failed) == (2, 0)
    event = db.query(TimelineEvent).filter(TimelineEvent.week_of == datetime(2025, 10, 6)).one()
    assert event.headline == "#FleetWeek"
    assert event.hype_summary == "Fans loved it."
    assert event.community_sentiment == {"hype": 50, "backlash": 50, "totalVotes": 0}
    assert len(event.hype_tweets) == 3
    assert len(event.backlash_tweets) == 3
    assert event.hype_tweets[0]["id"] == "fleetweek_hype_1"

    prompt = llm.requests[0].content.decode()
    assert "Tweet 1:" in prompt and "Tweet 6:" in prompt


async def test_failing_topic_does_not_stop_the_run(db, cache):
    llm = llm_with_responses(
        httpx.Response(500, text="down"),
        httpx.Response(500, text="down"),
        llm_reply(NARRATIVE_JSON),
    )

    report = await processor(db, cache, llm).run(TOPICS)

    assert (report.processed, report.failed) == (1, 1)
    assert report.errors[0]["topic"] == "#FleetWeek"
    assert report.results[0]["topic"] == "#Dreamforce"
    assert db.query(TimelineEvent).count() == 1


async def test_reprocessing_resets_community_sentiment(db, cache):
    llm = llm_with_responses(llm_reply(NARRATIVE_JSON))
    trends = processor(db, cache, llm)

    await trends.run(TOPICS[:1])
    event = db.query(TimelineEvent).one()
    event.community_sentiment = {"hype": 80, "backlash": 20, "totalVotes": 4}
    db.commit()

    await trends.run(TOPICS[:1])

    db.refresh(event)
    assert db.query(TimelineEvent).count() == 1
    assert event.community_sentiment == {"hype": 50, "backlash": 50, "totalVotes": 0}
