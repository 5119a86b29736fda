"""Tests for the event state machine."""

import pytest
from uuid import uuid4

from aura.core.workflow.states import (
    EventStatus, EventTransition, TRANSITION_TARGETS, get_transition_rule,
)
from aura.core.workflow.machine import EventStateMachine
from aura.core.workflow.errors import TransitionError, ConflictError


class TestEventStates:
    
    def test_only_pending_and_approved_exist(self):
        assert {s.value for s in EventStatus} == {"pending", "approved"}
    
    def test_from_flag(self):
        assert EventStatus.from_flag(False) is EventStatus.PENDING
        assert EventStatus.from_flag(True) is EventStatus.APPROVED


class TestEventTransitions:
    
    def test_pending_can_be_approved(self):
        rule = get_transition_rule(EventStatus.PENDING, EventTransition.APPROVE)
        assert rule is not None
        assert rule.to_state == EventStatus.APPROVED
    
    def test_approved_has_no_outgoing_transitions(self):
        assert get_transition_rule(EventStatus.APPROVED, EventTransition.APPROVE) is None
        assert all(from_state != EventStatus.APPROVED for from_state, _ in TRANSITION_TARGETS)


class TestEventStateMachine:
    
    @pytest.fixture
    def machine(self):
        return EventStateMachine(uuid4(), EventStatus.PENDING)
    
    def test_approve_returns_record(self, machine):
        record = machine.transition(EventTransition.APPROVE, approval_percentage=50.0)
        
        assert machine.state == EventStatus.APPROVED
        assert record.event_id == machine.event_id
        assert record.from_state == EventStatus.PENDING
        assert record.to_state == EventStatus.APPROVED
        assert record.transition == EventTransition.APPROVE
        assert record.approval_percentage == 50.0
        assert record.id is not None
        assert record.timestamp is not None
    
    def test_approving_twice_is_rejected(self, machine):
        machine.transition(EventTransition.APPROVE)
        
        with pytest.raises(TransitionError) as exc_info:
            machine.transition(EventTransition.APPROVE)
        
        assert isinstance(exc_info.value, ConflictError)
        assert exc_info.value.from_state == EventStatus.APPROVED
        assert machine.state == EventStatus.APPROVED
    
    def test_callbacks_receive_record(self, machine):
        seen = []
        machine.register_callback(EventTransition.APPROVE, seen.append)
        
        record = machine.transition(EventTransition.APPROVE)
        
        assert seen == [record]
    
    def test_failing_callback_does_not_undo_transition(self, machine):
        def explode(record):
            raise RuntimeError("notification service down")
        
        machine.register_callback(EventTransition.APPROVE, explode)
        
        record = machine.transition(EventTransition.APPROVE)
        assert record.to_state == EventStatus.APPROVED
        assert machine.state == EventStatus.APPROVED
