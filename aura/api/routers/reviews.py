"""Review queue and decision endpoints."""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aura.api.deps import get_db
from aura.api.errors import missing_parameters, store_error_response, workflow_error_response
from aura.api.routers.events import EventResponse
from aura.core.workflow import ReviewLedger
from aura.core.workflow.errors import WorkflowError
from aura.db.models import Ballot

router = APIRouter(tags=["reviews"])


# Schemas
class BallotResponse(BaseModel):
    pending_id: UUID
    event_id: UUID
    reviewed: bool
    approved: bool
    name_of_nominee: str
    user_id_of_nominee: str
    name_of_reviewer: str
    user_id_of_reviewer: str
    
    @classmethod
    def from_ballot(cls, ballot: Ballot, **extra) -> "BallotResponse":
        return cls(
            pending_id=ballot.id,
            event_id=ballot.event_id,
            reviewed=ballot.reviewed,
            approved=ballot.approved,
            name_of_nominee=ballot.nominee_name,
            user_id_of_nominee=ballot.nominee_id,
            name_of_reviewer=ballot.reviewer_name,
            user_id_of_reviewer=ballot.reviewer_id,
            **extra,
        )


class PendingReviewResponse(BallotResponse):
    events: EventResponse


class ReviewEventRequest(BaseModel):
    pending_id: Optional[UUID] = Field(None, alias="pendingId")
    event_id: Optional[UUID] = Field(None, alias="eventId")
    is_approved: Optional[bool] = Field(None, alias="isApproved")
    group_id: Optional[str] = Field(None, alias="groupId")
    
    class Config:
        populate_by_name = True


class ReviewEventResponse(BaseModel):
    message: str
    approvalPercentage: float
    wasApproved: bool


# Endpoints
@router.get("/pending-reviews", response_model=List[PendingReviewResponse])
async def list_pending_reviews(
    group_id: Optional[str] = None,
    user_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """List a reviewer's unreviewed ballots for events in a group."""
    if not group_id or not user_id:
        return missing_parameters()
    
    ledger = ReviewLedger(db)
    try:
        pending = ledger.list_pending_ballots_for_reviewer(group_id, user_id)
    except SQLAlchemyError as e:
        return store_error_response(e)
    
    return [
        PendingReviewResponse.from_ballot(ballot, events=EventResponse.from_event(event))
        for ballot, event in pending
    ]


@router.post("/review-event", response_model=ReviewEventResponse)
async def review_event(
    payload: ReviewEventRequest,
    db: Session = Depends(get_db),
):
    """Record a reviewer's decision and report the event's approval state."""
    if (
        payload.pending_id is None
        or payload.event_id is None
        or payload.is_approved is None
        or not payload.group_id
    ):
        return missing_parameters()
    
    ledger = ReviewLedger(db)
    try:
        result = ledger.record_decision(
            payload.pending_id,
            payload.is_approved,
            event_id=payload.event_id,
            group_id=payload.group_id,
        )
        db.commit()
    except WorkflowError as e:
        db.rollback()
        return workflow_error_response(e)
    except SQLAlchemyError as e:
        db.rollback()
        return store_error_response(e)
    
    return ReviewEventResponse(
        message="Review processed successfully",
        **result.quorum.to_dict(),
    )
