from datetime import datetime
from typing import List, Optional, Sequence
from loguru import logger
from sqlalchemy import desc
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from sfpulse.errors import DuplicateRecordError
from sfpulse.models import TimelineEvent
from sfpulse.schemas.social import NarrativeAnalysis, StructuredTweet
from sfpulse.schemas.timeline import CommunitySentiment


def upsert_event(
    db: Session,
    week_of: datetime,
    headline: str,
    analysis: NarrativeAnalysis,
    hype_posts: Sequence[StructuredTweet],
    backlash_posts: Sequence[StructuredTweet],
) -> TimelineEvent:
    """
    Create or refresh the timeline event for ``week_of``

    Community sentiment is reset to the neutral 50/50 starting point.
    """
    values = {
        "headline": headline,
        "hype_summary": analysis.hype_summary,
        "backlash_summary": analysis.backlash_summary,
        "weekly_pulse": analysis.weekly_pulse,
        "hype_tweets": [post.model_dump() for post in hype_posts],
        "backlash_tweets": [post.model_dump() for post in backlash_posts],
        "community_sentiment": CommunitySentiment().model_dump(),
    }

    event = db.query(TimelineEvent).filter(TimelineEvent.week_of == week_of).first()
    if event:
        for key, value in values.items():
            setattr(event, key, value)
        event.updated_at = datetime.utcnow()
    else:
        event = TimelineEvent(week_of=week_of, **values)
        db.add(event)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateRecordError(f"Timeline event for {week_of.date()} already exists") from e

    db.refresh(event)
    logger.info(f"Saved timeline event for {headline} (ID: {event.id})")
    return event


def list_events(db: Session) -> List[TimelineEvent]:
    return db.query(TimelineEvent).order_by(desc(TimelineEvent.week_of)).all()


def get_event(db: Session, event_id: int) -> Optional[TimelineEvent]:
    return db.query(TimelineEvent).filter(TimelineEvent.id == event_id).first()
