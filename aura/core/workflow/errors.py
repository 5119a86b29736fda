"""Failure taxonomy for the nomination workflow.

Every workflow failure derives from ``WorkflowError`` and carries a
human-readable message plus an optional ``detail`` payload. The API layer
maps the families below to HTTP status codes; services never retry.
"""

from typing import Any, Dict, List, Optional


class WorkflowError(Exception):
    """Base class for all workflow failures."""
    
    def __init__(self, message: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.detail = detail or {}


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class ValidationError(WorkflowError):
    """Malformed input. No state was changed."""


class InvalidPoints(ValidationError):
    def __init__(self, value: Any):
        super().__init__(f"Points must be an integer, got {value!r}", {"points": repr(value)})
        self.value = value


class DecisionMismatch(ValidationError):
    """A decision names an event or group the ballot does not belong to."""


# ---------------------------------------------------------------------------
# Not found
# ---------------------------------------------------------------------------


class NotFoundError(WorkflowError):
    """A referenced record is absent. No state was changed."""


class MemberNotFound(NotFoundError):
    def __init__(self, key: str):
        super().__init__(f"Member {key!r} not found")
        self.key = key


class NomineeNotFound(NotFoundError):
    def __init__(self, name: str):
        super().__init__("Nominee not found in users table", {"name": name})
        self.name = name


class RosterUnavailable(NotFoundError):
    def __init__(self, group_id: str):
        super().__init__("Group or people_map not found", {"group_id": group_id})
        self.group_id = group_id


class NoEligibleReviewers(NotFoundError):
    """The roster holds nobody but the nominee, and self review is off."""
    
    def __init__(self, group_id: str):
        super().__init__("No eligible reviewers in group", {"group_id": group_id})
        self.group_id = group_id


class EventNotFound(NotFoundError):
    def __init__(self, event_id: Any):
        super().__init__(f"Event {event_id} not found")
        self.event_id = event_id


class BallotNotFound(NotFoundError):
    def __init__(self, ballot_id: Any):
        super().__init__(f"Ballot {ballot_id} not found")
        self.ballot_id = ballot_id


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------


class AmbiguousMember(WorkflowError):
    """A display name resolves to more than one member."""
    
    def __init__(self, name: str, member_ids: List[str]):
        super().__init__(
            f"Display name {name!r} matches {len(member_ids)} members",
            {"name": name, "member_ids": member_ids},
        )
        self.name = name
        self.member_ids = member_ids


class NotAGroupMember(WorkflowError):
    """
    The nominee does not belong to the submitted group.
    
    ``detail`` is the diagnostic payload returned to the caller as ``debug``.
    """
    
    def __init__(self, name: str, submitted_group: str, user_groups: List[str]):
        super().__init__(
            "Nominee is not a member of the specified group",
            {
                "userGroups": user_groups,
                "submittedGroupName": submitted_group,
                "name": name,
                "exactMatches": [
                    {
                        "group": group,
                        "matches": group == submitted_group,
                        "submittedLength": len(submitted_group),
                        "groupLength": len(group),
                    }
                    for group in user_groups
                ],
            },
        )
        self.name = name
        self.submitted_group = submitted_group
        self.user_groups = user_groups


# ---------------------------------------------------------------------------
# Conflicts
# ---------------------------------------------------------------------------


class ConflictError(WorkflowError):
    """The request conflicts with the current state of a record."""


class AlreadyReviewed(ConflictError):
    def __init__(self, ballot_id: Any):
        super().__init__(f"Ballot {ballot_id} has already been reviewed", {"ballot_id": str(ballot_id)})
        self.ballot_id = ballot_id


class TransitionError(ConflictError):
    """Raised when an event status transition is invalid."""
    
    def __init__(self, message: str, from_state, transition):
        super().__init__(message, {"from_state": from_state.value, "transition": transition.value})
        self.from_state = from_state
        self.transition = transition

