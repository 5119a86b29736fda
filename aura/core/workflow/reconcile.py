"""Repair of orphaned events.

An orphaned event is a pending event without any ballots. Intake writes an
event and its ballots in one transaction, so orphans only appear when rows
are written out of band (imports, manual fixes, older clients). Repair fans
out ballots from the group's current roster.
"""

import logging
from typing import Any, Dict, List, Optional
from uuid import UUID

from sqlalchemy import exists
from sqlalchemy.orm import Session

from aura.core.config import get_settings
from aura.db.models import Ballot, Event
from .directory import MembershipDirectory
from .errors import EventNotFound, WorkflowError
from .intake import fan_out_ballots

logger = logging.getLogger(__name__)


class EventReconciler:
    """Finds and repairs pending events that never received ballots."""
    
    def __init__(self, db: Session, *, exclude_self_review: Optional[bool] = None):
        self.db = db
        self.directory = MembershipDirectory(db)
        if exclude_self_review is None:
            exclude_self_review = get_settings().exclude_self_review
        self.exclude_self_review = exclude_self_review
    
    def find_orphaned_events(self, group_id: Optional[str] = None) -> List[Event]:
        """Pending events with zero ballots, oldest first."""
        query = self.db.query(Event).filter(
            Event.is_approved.is_(False),
            ~exists().where(Ballot.event_id == Event.id),
        )
        if group_id is not None:
            query = query.filter(Event.group_id == group_id)
        return query.order_by(Event.created_at.asc()).all()
    
    def repair(self, event_id: UUID) -> int:
        """
        Fan out ballots for an orphaned event.
        
        Returns:
            Number of ballots created (0 if the event already had ballots)
            
        Raises:
            EventNotFound: If the event does not exist
            RosterUnavailable: If the event's group has no roster
            NoEligibleReviewers: If only the nominee is on the roster and self
                review is excluded
        """
        event = self.db.get(Event, event_id)
        if event is None:
            raise EventNotFound(event_id)
        
        has_ballots = self.db.query(exists().where(Ballot.event_id == event_id)).scalar()
        if has_ballots:
            return 0
        
        roster = self.directory.get_roster(event.group_id)
        ballots = fan_out_ballots(
            self.db, event, roster, exclude_nominee=self.exclude_self_review
        )
        logger.info(f"Repaired orphaned event {event.id}: created {len(ballots)} ballots")
        return len(ballots)
    
    def repair_all(self, group_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Repair every orphaned event.
        
        Returns:
            Ids of the events that received ballots, and of those that could
            not be repaired with the reason
        """
        results = {"repaired": [], "failed": []}
        
        for event in self.find_orphaned_events(group_id):
            try:
                created = self.repair(event.id)
            except WorkflowError as e:
                logger.warning(f"Could not repair event {event.id}: {e}")
                results["failed"].append({
                    "id": str(event.id),
                    "error": str(e),
                })
                continue
            if created:
                results["repaired"].append(str(event.id))
        
        return results
