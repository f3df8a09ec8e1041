from fastapi import APIRouter, Depends, Request
from sqlalchemy.orm import Session

from sfpulse.database import get_db
from sfpulse.repositories import record_vote
from sfpulse.schemas import APIResponse, VoteRequest, VoteResponse

router = APIRouter(tags=["votes"])


def client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for") or request.headers.get("x-real-ip")
    if forwarded:
        return forwarded
    return request.client.host if request.client else "unknown"


@router.post("/vote", response_model=APIResponse, response_model_exclude_none=True)
async def submit_vote(
    vote: VoteRequest,
    request: Request,
    db: Session = Depends(get_db)
):
    """
    Record a community vote on a timeline event

    ``hype_percentage`` and ``backlash_percentage`` must each be within 0-100
    and sum to 100 (+/-1). Responds 404 for an unknown event.
    """
    user_vote, sentiment = record_vote(
        db,
        event_id=vote.event_id,
        hype_percentage=vote.hype_percentage,
        backlash_percentage=vote.backlash_percentage,
        ip_address=client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    return APIResponse(
        success=True,
        data=VoteResponse(
            vote_id=user_vote.id,
            community_sentiment=sentiment,
            total_votes=sentiment.totalVotes,
        ),
        message="Vote recorded successfully",
    )
