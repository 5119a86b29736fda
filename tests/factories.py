"""Factory functions for creating test database records.

Each factory creates a model instance, adds it to the session, and flushes
so that generated fields (id, created_at, etc.) are populated.
All fields have sensible defaults but can be overridden via keyword arguments.

Usage::

    from tests.factories import create_group_with_members, create_event

    def test_something(db_session):
        group, members = create_group_with_members(db_session, size=4)
        event = create_event(db_session, nominee=members[0], group=group)
        assert event.group_id == group.id
"""

from typing import Dict, List, Optional, Tuple, Union

from sqlalchemy.orm import Session

from aura.db.models import Ballot, Event, Group, Member


_counter = 0


def _next_id() -> int:
    """Return a monotonically increasing integer for unique default values."""
    global _counter
    _counter += 1
    return _counter


# ---------------------------------------------------------------------------
# Member
# ---------------------------------------------------------------------------


def create_member(
    session: Session,
    *,
    member_id: Optional[str] = None,
    name: Optional[str] = None,
    groups: Union[List[str], str, None] = None,
) -> Member:
    n = _next_id()
    member = Member(
        id=member_id or f"user-{n}",
        name=name or f"Test Member {n}",
        group_names=groups if groups is not None else [],
    )
    session.add(member)
    session.flush()
    return member


# ---------------------------------------------------------------------------
# Group
# ---------------------------------------------------------------------------


def create_group(
    session: Session,
    *,
    group_id: Optional[str] = None,
    people_map: Optional[Dict[str, str]] = None,
) -> Group:
    n = _next_id()
    group = Group(
        id=group_id or f"group-{n}",
        people_map=people_map if people_map is not None else {},
    )
    session.add(group)
    session.flush()
    return group


def create_group_with_members(
    session: Session,
    *,
    size: int = 4,
    group_id: Optional[str] = None,
    names: Optional[List[str]] = None,
) -> Tuple[Group, List[Member]]:
    """Create a group whose roster is exactly its ``size`` members."""
    group_id = group_id or f"group-{_next_id()}"
    names = names or [f"Member {_next_id()}" for _ in range(size)]
    members = [create_member(session, name=name, groups=[group_id]) for name in names]
    group = create_group(
        session,
        group_id=group_id,
        people_map={m.id: m.name for m in members},
    )
    return group, members


# ---------------------------------------------------------------------------
# Event
# ---------------------------------------------------------------------------


def create_event(
    session: Session,
    *,
    nominee: Optional[Member] = None,
    group: Optional[Group] = None,
    nominee_name: Optional[str] = None,
    group_id: Optional[str] = None,
    points: int = 10,
    description: Optional[str] = None,
    is_approved: bool = False,
) -> Event:
    """Create an event row directly, without fanning out ballots."""
    n = _next_id()
    event = Event(
        nominee_id=nominee.id if nominee else f"user-{n}",
        nominee_name=nominee_name or (nominee.name if nominee else f"Test Member {n}"),
        group_id=group_id or (group.id if group else f"group-{n}"),
        points=points,
        description=description or f"Event {n}",
        is_approved=is_approved,
    )
    session.add(event)
    session.flush()
    return event


# ---------------------------------------------------------------------------
# Ballot
# ---------------------------------------------------------------------------


def create_ballot(
    session: Session,
    *,
    event: Event,
    reviewer_id: Optional[str] = None,
    reviewer_name: Optional[str] = None,
    reviewed: bool = False,
    approved: bool = False,
) -> Ballot:
    n = _next_id()
    ballot = Ballot(
        event_id=event.id,
        nominee_id=event.nominee_id,
        nominee_name=event.nominee_name,
        reviewer_id=reviewer_id or f"reviewer-{n}",
        reviewer_name=reviewer_name or f"Reviewer {n}",
        reviewed=reviewed,
        approved=approved,
    )
    session.add(ballot)
    session.flush()
    return ballot
