from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from sfpulse.database import get_db
from sfpulse.errors import NotFoundError
from sfpulse.repositories import get_event, list_events
from sfpulse.schemas import APIResponse, TimelineEventResponse

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_model=APIResponse, response_model_exclude_none=True)
async def get_timeline(db: Session = Depends(get_db)):
    """All timeline events, newest week first"""
    events = [TimelineEventResponse.model_validate(event) for event in list_events(db)]
    return APIResponse(success=True, data=events)


@router.get("/{event_id}", response_model=APIResponse, response_model_exclude_none=True)
async def get_timeline_event(event_id: int, db: Session = Depends(get_db)):
    """Get a specific timeline event by ID"""
    event = get_event(db, event_id)

    if not event:
        raise NotFoundError(f"Timeline event {event_id} not found")

    return APIResponse(success=True, data=TimelineEventResponse.model_validate(event))
