"""Review ledger.

Records each reviewer's decision on a ballot exactly once and hands the
event over to the quorum evaluator after every successful write.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.orm import Session

from aura.db.models import Ballot, Event
from .errors import AlreadyReviewed, BallotNotFound, DecisionMismatch, EventNotFound
from .quorum import QuorumEvaluator, QuorumResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DecisionResult:
    ballot: Ballot
    quorum: QuorumResult


class ReviewLedger:
    """
    Ballot decisions and reviewer queues.
    
    A decision is a compare-and-swap on the ``reviewed`` flag: the first
    decision wins and any later one fails with ``AlreadyReviewed``.
    """
    
    def __init__(self, db: Session, *, evaluator: Optional[QuorumEvaluator] = None):
        self.db = db
        self.evaluator = evaluator or QuorumEvaluator(db)
    
    def record_decision(
        self,
        ballot_id: UUID,
        approved: bool,
        *,
        event_id: Optional[UUID] = None,
        group_id: Optional[str] = None,
    ) -> DecisionResult:
        """
        Record a reviewer's decision and re-evaluate quorum.
        
        Args:
            ballot_id: Ballot being decided
            approved: The reviewer's vote
            event_id: Event the caller believes the ballot belongs to
            group_id: Group whose roster is the quorum denominator
                (defaults to the event's group)
            
        Raises:
            BallotNotFound: If the ballot does not exist
            DecisionMismatch: If event_id or group_id disagree with the ballot
            AlreadyReviewed: If the ballot was already decided
        """
        ballot = self.db.get(Ballot, ballot_id)
        if ballot is None:
            raise BallotNotFound(ballot_id)
        
        if event_id is not None and event_id != ballot.event_id:
            raise DecisionMismatch(
                f"Ballot {ballot_id} does not belong to event {event_id}",
                {"ballot_event_id": str(ballot.event_id), "event_id": str(event_id)},
            )
        
        event = self.db.get(Event, ballot.event_id)
        if event is None:
            raise EventNotFound(ballot.event_id)
        
        if group_id is None:
            group_id = event.group_id
        elif group_id != event.group_id:
            raise DecisionMismatch(
                f"Event {event.id} was not nominated in group {group_id!r}",
                {"event_group_id": event.group_id, "group_id": group_id},
            )
        
        if ballot.reviewed:
            raise AlreadyReviewed(ballot_id)
        
        result = self.db.execute(
            update(Ballot)
            .where(Ballot.id == ballot_id, Ballot.reviewed.is_(False))
            .values(reviewed=True, approved=bool(approved), reviewed_at=datetime.utcnow())
        )
        if result.rowcount != 1:
            raise AlreadyReviewed(ballot_id)
        self.db.flush()
        self.db.refresh(ballot)
        
        logger.info(
            f"Reviewer {ballot.reviewer_id} {'approved' if ballot.approved else 'declined'} "
            f"event {event.id} (ballot {ballot.id})"
        )
        
        quorum = self.evaluator.evaluate(event.id, group_id)
        return DecisionResult(ballot=ballot, quorum=quorum)
    
    def list_pending_ballots_for_reviewer(
        self,
        group_id: str,
        reviewer_id: str,
    ) -> List[Tuple[Ballot, Event]]:
        """
        Unreviewed ballots of a reviewer, joined to their events in ``group_id``.
        
        Ballots whose event is missing or belongs to another group are
        dropped rather than failing the query.
        """
        ballots = self.db.query(Ballot).filter(
            Ballot.reviewer_id == reviewer_id,
            Ballot.reviewed.is_(False),
        ).order_by(Ballot.created_at.asc()).all()
        
        if not ballots:
            return []
        
        event_ids = {b.event_id for b in ballots}
        events = {
            e.id: e
            for e in self.db.query(Event).filter(
                Event.id.in_(event_ids),
                Event.group_id == group_id,
            ).all()
        }
        
        combined = []
        for ballot in ballots:
            event = events.get(ballot.event_id)
            if event is None:
                continue
            combined.append((ballot, event))
        
        logger.debug(f"Reviewer {reviewer_id} has {len(combined)} pending ballots in {group_id!r}")
        return combined
