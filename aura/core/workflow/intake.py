"""Nomination intake.

Validates a nomination against the membership directory, creates the
pending event and fans out one ballot per roster entry of the group.
"""

import logging
import math
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from aura.core.config import get_settings
from aura.db.models import Event, Ballot
from .directory import MembershipDirectory
from .errors import InvalidPoints, MemberNotFound, NoEligibleReviewers, NomineeNotFound, NotAGroupMember

logger = logging.getLogger(__name__)


def coerce_points(value: Any) -> int:
    """
    Coerce a submitted point value to a signed integer.
    
    Integers pass through, finite floats and numeric strings are truncated
    towards zero. Booleans, blanks and anything non-numeric are rejected.
    
    Raises:
        InvalidPoints: If the value is not numeric
    """
    if isinstance(value, bool) or value is None:
        raise InvalidPoints(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidPoints(value)
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise InvalidPoints(value) from None
        if not math.isfinite(number):
            raise InvalidPoints(value)
        return int(number)
    raise InvalidPoints(value)


def fan_out_ballots(
    db: Session,
    event: Event,
    roster: Dict[str, str],
    *,
    exclude_nominee: bool = False,
) -> List[Ballot]:
    """
    Create one unreviewed ballot per roster entry for ``event``.
    
    Args:
        db: Database session
        event: The (flushed) event the ballots refer to
        roster: Reviewer id -> reviewer name
        exclude_nominee: Skip the roster entry belonging to the nominee
        
    Returns:
        The ballots added to the session
        
    Raises:
        NoEligibleReviewers: If no roster entry is left to review the event
    """
    ballots = []
    for reviewer_id, reviewer_name in roster.items():
        if exclude_nominee and reviewer_id == event.nominee_id:
            continue
        ballots.append(Ballot(
            event_id=event.id,
            reviewed=False,
            approved=False,
            nominee_id=event.nominee_id,
            nominee_name=event.nominee_name,
            reviewer_id=reviewer_id,
            reviewer_name=reviewer_name,
        ))
    if not ballots:
        raise NoEligibleReviewers(event.group_id)
    
    db.add_all(ballots)
    db.flush()
    return ballots


class NominationService:
    """
    Accepts nominations and prepares them for review.
    
    The event and its ballots are written in the caller's transaction. If
    anything fails after the event is flushed, rolling the session back
    removes the event too, so no orphaned event is left behind.
    """
    
    def __init__(self, db: Session, *, exclude_self_review: Optional[bool] = None):
        self.db = db
        self.directory = MembershipDirectory(db)
        if exclude_self_review is None:
            exclude_self_review = get_settings().exclude_self_review
        self.exclude_self_review = exclude_self_review
    
    def submit_nomination(
        self,
        nominee_name: str,
        group_id: str,
        points: Any,
        description: Optional[str] = None,
    ) -> Event:
        """
        Nominate a member of ``group_id`` for ``points``.
        
        Returns:
            The new pending event, with its ballots flushed
            
        Raises:
            NomineeNotFound: If no member has that display name
            AmbiguousMember: If several members share that display name
            NotAGroupMember: If the nominee is not in the group
            InvalidPoints: If points is not numeric
            RosterUnavailable: If the group or its roster is missing
            NoEligibleReviewers: If the nominee is the only roster entry and
                self review is excluded
        """
        logger.info(f"Received nomination of {nominee_name!r} in group {group_id!r} for {points!r} points")
        
        try:
            nominee = self.directory.resolve_member(nominee_name)
        except MemberNotFound:
            raise NomineeNotFound(nominee_name) from None
        
        if not self.directory.is_member_of_group(nominee, group_id):
            error = NotAGroupMember(nominee.name, group_id, nominee.groups)
            logger.warning(f"Membership mismatch for {nominee.name!r}: {error.detail}")
            raise error
        
        value = coerce_points(points)
        
        event = Event(
            nominee_id=nominee.id,
            nominee_name=nominee.name,
            group_id=group_id,
            points=value,
            description=description,
            is_approved=False,
        )
        self.db.add(event)
        self.db.flush()
        
        roster = self.directory.get_roster(group_id)
        ballots = fan_out_ballots(
            self.db, event, roster, exclude_nominee=self.exclude_self_review
        )
        
        logger.info(f"Created event {event.id} with {len(ballots)} ballots in group {group_id!r}")
        return event
