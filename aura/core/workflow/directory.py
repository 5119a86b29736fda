"""Membership directory.

Resolves members and group rosters from the record store. Rosters are read
fresh on every call and never cached, so quorum math always sees the roster
as it is at evaluation time.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from aura.db.models import Member, Group
from .errors import MemberNotFound, AmbiguousMember, RosterUnavailable

logger = logging.getLogger(__name__)


class MembershipDirectory:
    """Read-only view of members and group rosters."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def resolve_member(self, name: str) -> Member:
        """
        Resolve a display name to a single member.
        
        Raises:
            MemberNotFound: If no member has that name
            AmbiguousMember: If more than one member has that name
        """
        matches = (
            self.db.query(Member)
            .filter(Member.name == name)
            .order_by(Member.id)
            .all()
        )
        if not matches:
            raise MemberNotFound(name)
        if len(matches) > 1:
            raise AmbiguousMember(name, [m.id for m in matches])
        return matches[0]
    
    def get_member(self, member_id: str) -> Member:
        """Get a member by identity."""
        member = self.db.get(Member, member_id)
        if member is None:
            raise MemberNotFound(member_id)
        return member
    
    @staticmethod
    def is_member_of_group(member: Member, group_id: str) -> bool:
        """Exact comparison of ``group_id`` against each of the member's groups."""
        return group_id in member.groups
    
    def get_roster(self, group_id: str) -> Dict[str, str]:
        """
        Get a group's reviewer roster (reviewer id -> reviewer name).
        
        Raises:
            RosterUnavailable: If the group is absent or its roster is empty
        """
        group = self.db.get(Group, group_id)
        if group is None or not group.people_map:
            raise RosterUnavailable(group_id)
        return dict(group.people_map)
    
    def default_group(self, member_id: str) -> Optional[str]:
        """Return the first group the member belongs to, or None."""
        groups = self.get_member(member_id).groups
        return groups[0] if groups else None
