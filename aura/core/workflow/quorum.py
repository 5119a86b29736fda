"""Quorum evaluation.

After every ballot decision the approval ratio of the event is recomputed
from scratch: the roster is re-read and the approving ballots re-counted.
No running counter is kept, so concurrent reviewers cannot make the count
drift; each evaluation reflects everything durably recorded before it.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, Optional, Tuple
from uuid import UUID

from sqlalchemy import func, update
from sqlalchemy.orm import Session

from aura.core.config import get_settings
from aura.db.models import Ballot, Event, EventHistory
from .directory import MembershipDirectory
from .errors import EventNotFound
from .machine import EventStateMachine, TransitionRecord
from .states import EventStatus, EventTransition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QuorumResult:
    """Outcome of one quorum evaluation."""
    event_id: UUID
    approved_count: int
    total_members: int
    approval_percentage: float
    was_approved: bool
    status: EventStatus
    
    def to_dict(self) -> Dict[str, Any]:
        return {
            "approvalPercentage": self.approval_percentage,
            "wasApproved": self.was_approved,
        }


def approval_percentage(approved_count: int, total_members: int) -> float:
    """Percentage of the roster that approved."""
    return approved_count / total_members * 100


class QuorumEvaluator:
    """Recomputes an event's approval ratio and finalizes it at quorum."""
    
    def __init__(
        self,
        db: Session,
        *,
        threshold: Optional[float] = None,
        on_approved: Iterable[Callable[[TransitionRecord], None]] = (),
    ):
        self.db = db
        self.directory = MembershipDirectory(db)
        self.threshold = get_settings().quorum_threshold_percent if threshold is None else threshold
        self.on_approved = list(on_approved)
    
    def count_approvals(self, event_id: UUID) -> int:
        return self.db.query(func.count(Ballot.id)).filter(
            Ballot.event_id == event_id,
            Ballot.approved.is_(True),
        ).scalar()
    
    def measure(self, event_id: UUID, group_id: str) -> Tuple[int, int, float]:
        """
        Approving ballots, roster size and approval percentage, read fresh.
        
        Raises:
            RosterUnavailable: If the group or its roster is missing
        """
        total_members = len(self.directory.get_roster(group_id))
        approved_count = self.count_approvals(event_id)
        return approved_count, total_members, approval_percentage(approved_count, total_members)
    
    def evaluate(self, event_id: UUID, group_id: str) -> QuorumResult:
        """
        Evaluate quorum for an event.
        
        ``was_approved`` reports whether this evaluation meets the threshold,
        whether or not an earlier evaluation already approved the event.
        Evaluating an approved event again is a no-op.
        
        Raises:
            RosterUnavailable: If the group or its roster is missing
            EventNotFound: If the event does not exist
        """
        approved_count, total_members, percentage = self.measure(event_id, group_id)
        
        logger.info(
            f"Approval stats: approvedCount={approved_count} totalMembers={total_members} "
            f"approvalPercentage={percentage} eventId={event_id}"
        )
        
        event = self.db.get(Event, event_id)
        if event is None:
            raise EventNotFound(event_id)
        
        reached = percentage >= self.threshold
        if reached and not event.is_approved:
            self._approve(event, percentage)
        
        return QuorumResult(
            event_id=event_id,
            approved_count=approved_count,
            total_members=total_members,
            approval_percentage=percentage,
            was_approved=reached,
            status=EventStatus.from_flag(event.is_approved),
        )
    
    def _approve(self, event: Event, percentage: float) -> None:
        machine = EventStateMachine(event.id, EventStatus.from_flag(event.is_approved))
        for callback in self.on_approved:
            machine.register_callback(EventTransition.APPROVE, callback)
        
        # Guarded flip: only the evaluation that actually changes the row
        # records history and fires callbacks.
        result = self.db.execute(
            update(Event)
            .where(Event.id == event.id, Event.is_approved.is_(False))
            .values(is_approved=True, approved_at=datetime.utcnow())
        )
        if result.rowcount != 1:
            logger.info(f"Event {event.id} was approved concurrently, nothing to do")
            self.db.refresh(event)
            return
        
        record = machine.transition(EventTransition.APPROVE, approval_percentage=percentage)
        self.db.add(EventHistory(
            id=record.id,
            event_id=record.event_id,
            from_status=record.from_state.value,
            to_status=record.to_state.value,
            transition=record.transition.value,
            approval_percentage=record.approval_percentage,
            created_at=record.timestamp,
        ))
        self.db.flush()
        self.db.refresh(event)
        
        logger.info(f"Event {event.id} approved with {percentage}% approval")
