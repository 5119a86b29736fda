"""Event workflow states and transitions.

State Machine Diagram:

    ┌──────────┐
    │ PENDING  │ ← Initial state (nomination submitted, ballots fanned out)
    └────┬─────┘
         │ APPROVE (quorum reached)
    ┌────▼─────┐
    │ APPROVED │ (counts towards the leaderboard)
    └──────────┘

There is no rejected state. An event that never reaches quorum stays
PENDING indefinitely.
"""

from enum import Enum
from typing import Dict, Optional, NamedTuple


class EventStatus(str, Enum):
    """States in the nomination workflow."""
    
    PENDING = "pending"      # Awaiting reviewer quorum
    APPROVED = "approved"    # Quorum reached
    
    @classmethod
    def from_flag(cls, is_approved: bool) -> "EventStatus":
        return cls.APPROVED if is_approved else cls.PENDING


class EventTransition(str, Enum):
    """Actions that trigger state transitions."""
    
    APPROVE = "approve"      # PENDING → APPROVED


class TransitionRule(NamedTuple):
    """Defines a valid state transition."""
    from_state: EventStatus
    to_state: EventStatus
    transition: EventTransition


TRANSITION_RULES: list[TransitionRule] = [
    TransitionRule(EventStatus.PENDING, EventStatus.APPROVED, EventTransition.APPROVE),
]

TRANSITION_TARGETS: Dict[tuple[EventStatus, EventTransition], TransitionRule] = {
    (rule.from_state, rule.transition): rule for rule in TRANSITION_RULES
}


def get_transition_rule(from_state: EventStatus, transition: EventTransition) -> Optional[TransitionRule]:
    """Get the transition rule for a state/action combination, if legal."""
    return TRANSITION_TARGETS.get((from_state, transition))
