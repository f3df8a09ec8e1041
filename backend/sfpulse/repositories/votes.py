import math
from typing import Optional, Tuple
from loguru import logger
from sqlalchemy.orm import Session

from sfpulse.errors import NotFoundError, ValidationFailedError
from sfpulse.models import TimelineEvent, UserVote
from sfpulse.schemas.timeline import CommunitySentiment

MAX_IP_LENGTH = 50
MAX_USER_AGENT_LENGTH = 500
SUM_TOLERANCE = 1


def round_half_up(value: float) -> int:
    # round() would give banker's rounding, 62.5 -> 62
    return int(math.floor(value + 0.5))


def validate_split(hype_percentage: float, backlash_percentage: float) -> Tuple[int, int]:
    """
    Rounded (hype, backlash) pair as it will be stored

    The sum check runs on the rounded values so every stored vote sums to
    100 +/-1.

    Raises:
        ValidationFailedError: A value outside 0-100, or the rounded pair not summing to 100 (+/-1)
    """
    for value in (hype_percentage, backlash_percentage):
        if value < 0 or value > 100:
            raise ValidationFailedError("Percentages must be between 0 and 100")

    hype, backlash = round_half_up(hype_percentage), round_half_up(backlash_percentage)
    if abs(hype + backlash - 100) > SUM_TOLERANCE:
        raise ValidationFailedError("Hype and backlash percentages must sum to 100")
    return hype, backlash


def recompute_sentiment(db: Session, event: TimelineEvent) -> CommunitySentiment:
    """Rounded mean over every vote on the event, written back to the event"""
    votes = db.query(UserVote.hype_percentage, UserVote.backlash_percentage).filter(
        UserVote.event_id == event.id
    ).all()

    if votes:
        sentiment = CommunitySentiment(
            hype=round_half_up(sum(v.hype_percentage for v in votes) / len(votes)),
            backlash=round_half_up(sum(v.backlash_percentage for v in votes) / len(votes)),
            totalVotes=len(votes),
        )
    else:
        sentiment = CommunitySentiment()

    event.community_sentiment = sentiment.model_dump()
    return sentiment


def record_vote(
    db: Session,
    event_id: int,
    hype_percentage: float,
    backlash_percentage: float,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> Tuple[UserVote, CommunitySentiment]:
    """
    Store one vote and refresh the event's community sentiment

    Read-modify-write without locking: two concurrent votes can each compute
    the aggregate without seeing the other, and the later write wins.

    Raises:
        ValidationFailedError: Bad split
        NotFoundError: Unknown event
    """
    hype, backlash = validate_split(hype_percentage, backlash_percentage)

    event = db.query(TimelineEvent).filter(TimelineEvent.id == event_id).first()
    if not event:
        raise NotFoundError(f"Timeline event {event_id} not found")

    vote = UserVote(
        event_id=event_id,
        hype_percentage=hype,
        backlash_percentage=backlash,
        ip_address=(ip_address or "unknown")[:MAX_IP_LENGTH],
        user_agent=(user_agent or "unknown")[:MAX_USER_AGENT_LENGTH],
    )
    db.add(vote)
    db.flush()

    sentiment = recompute_sentiment(db, event)
    db.commit()
    db.refresh(vote)

    logger.info(
        f"Vote {vote.id} recorded for event {event_id}: "
        f"community {sentiment.hype}/{sentiment.backlash} over {sentiment.totalVotes} votes"
    )
    return vote, sentiment
