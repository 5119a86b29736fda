"""Database models for Aura Board."""

from aura.db.models.member import Member
from aura.db.models.group import Group
from aura.db.models.event import Event, EventHistory
from aura.db.models.ballot import Ballot

__all__ = [
    "Member",
    "Group",
    "Event",
    "EventHistory",
    "Ballot",
]
