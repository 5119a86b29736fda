"""Nomination endpoints."""

from typing import Any, List, Optional
from uuid import UUID
from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aura.api.deps import get_db
from aura.api.errors import (
    error_response,
    missing_parameters,
    store_error_response,
    workflow_error_response,
)
from aura.api.schemas.common import MessageResponse
from aura.core.workflow import NominationService, QuorumEvaluator
from aura.core.workflow.errors import RosterUnavailable, WorkflowError
from aura.db.models import Event, EventHistory

router = APIRouter(tags=["events"])


# Schemas
class AddEventRequest(BaseModel):
    name: Optional[str] = None
    aura_points: Any = Field(None, alias="auraPoints")
    description: Optional[str] = None
    group_name: Optional[str] = Field(None, alias="groupName")
    
    class Config:
        populate_by_name = True


class EventResponse(BaseModel):
    event_id: UUID
    name: str
    user_id: str
    aura_points: int
    description: Optional[str]
    group_name: str
    is_approved: bool
    created_at: Optional[datetime]
    approved_at: Optional[datetime]
    
    @classmethod
    def from_event(cls, event: Event) -> "EventResponse":
        return cls(
            event_id=event.id,
            name=event.nominee_name,
            user_id=event.nominee_id,
            aura_points=event.points,
            description=event.description,
            group_name=event.group_id,
            is_approved=event.is_approved,
            created_at=event.created_at,
            approved_at=event.approved_at,
        )


class EventDetailResponse(EventResponse):
    ballot_count: int
    reviewed_count: int
    approval_percentage: Optional[float]


class EventHistoryResponse(BaseModel):
    id: UUID
    from_status: str
    to_status: str
    transition: str
    approval_percentage: Optional[float]
    created_at: datetime
    
    class Config:
        from_attributes = True


# Endpoints
@router.post("/add-event", status_code=status.HTTP_201_CREATED, response_model=MessageResponse)
async def add_event(
    payload: AddEventRequest,
    db: Session = Depends(get_db),
):
    """Nominate a group member for points and open the review."""
    if not payload.name or not payload.group_name:
        return missing_parameters()
    
    service = NominationService(db)
    try:
        service.submit_nomination(
            payload.name,
            payload.group_name,
            payload.aura_points,
            payload.description,
        )
        db.commit()
    except WorkflowError as e:
        db.rollback()
        return workflow_error_response(e)
    except SQLAlchemyError as e:
        db.rollback()
        return store_error_response(e)
    
    return MessageResponse(message="Event and pending reviews created successfully.")


@router.get("/events/{event_id}", response_model=EventDetailResponse)
async def get_event(
    event_id: UUID,
    db: Session = Depends(get_db),
):
    """Get an event with its current review progress."""
    event = db.get(Event, event_id)
    if not event:
        return error_response("Event not found", status.HTTP_404_NOT_FOUND)
    
    try:
        _, _, percentage = QuorumEvaluator(db).measure(event.id, event.group_id)
    except RosterUnavailable:
        percentage = None
    
    base = EventResponse.from_event(event)
    return EventDetailResponse(
        **base.model_dump(),
        ballot_count=len(event.ballots),
        reviewed_count=sum(1 for b in event.ballots if b.reviewed),
        approval_percentage=percentage,
    )


@router.get("/events/{event_id}/history", response_model=List[EventHistoryResponse])
async def get_event_history(
    event_id: UUID,
    db: Session = Depends(get_db),
):
    """Get the status transition history for an event."""
    event = db.get(Event, event_id)
    if not event:
        return error_response("Event not found", status.HTTP_404_NOT_FOUND)
    
    history = db.query(EventHistory).filter(
        EventHistory.event_id == event_id
    ).order_by(EventHistory.created_at.asc()).all()
    
    return [EventHistoryResponse.model_validate(h) for h in history]
