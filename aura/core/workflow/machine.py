"""Event state machine.

Validates a status transition and produces the record that the quorum
evaluator persists as an ``EventHistory`` row.
"""

import logging
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List, Optional
from uuid import UUID

from .errors import TransitionError
from .states import EventStatus, EventTransition, get_transition_rule

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransitionRecord:
    """One performed status transition."""
    event_id: UUID
    from_state: EventStatus
    to_state: EventStatus
    transition: EventTransition
    approval_percentage: Optional[float] = None
    id: UUID = field(default_factory=uuid.uuid4)
    timestamp: datetime = field(default_factory=datetime.utcnow)


class EventStateMachine:
    """Moves one event between statuses and runs hooks after each move."""
    
    def __init__(self, event_id: UUID, current_state: EventStatus):
        self.event_id = event_id
        self._state = current_state
        self._callbacks: Dict[EventTransition, List[Callable[[TransitionRecord], None]]] = {}
    
    @property
    def state(self) -> EventStatus:
        return self._state
    
    def transition(
        self,
        transition: EventTransition,
        *,
        approval_percentage: Optional[float] = None,
    ) -> TransitionRecord:
        """
        Perform a state transition.
        
        Returns:
            The record of the transition
            
        Raises:
            TransitionError: If the transition is invalid from the current state
        """
        rule = get_transition_rule(self._state, transition)
        if rule is None:
            raise TransitionError(
                f"Cannot perform {transition.value} from state {self._state.value}",
                self._state,
                transition,
            )
        
        record = TransitionRecord(
            event_id=self.event_id,
            from_state=self._state,
            to_state=rule.to_state,
            transition=transition,
            approval_percentage=approval_percentage,
        )
        self._state = rule.to_state
        
        for callback in self._callbacks.get(transition, []):
            try:
                callback(record)
            except Exception:
                # The transition already happened; a failing hook must not undo it
                logger.exception(f"Callback error for {transition.value} on event {self.event_id}")
        
        return record
    
    def register_callback(
        self,
        transition: EventTransition,
        callback: Callable[[TransitionRecord], None],
    ) -> None:
        """Run ``callback`` with the transition record after ``transition``."""
        self._callbacks.setdefault(transition, []).append(callback)
