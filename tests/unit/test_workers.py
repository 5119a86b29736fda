"""Tests for the reconciliation Celery tasks."""

from unittest.mock import patch

import pytest

from aura.db.models import Ballot
from aura.workers.reconcile_tasks import reconcile_orphaned_events, repair_event
from tests.factories import create_event, create_group_with_members


@pytest.fixture
def task_session(db_session):
    """Make the tasks open ``db_session`` instead of a real connection."""
    with patch("aura.workers.reconcile_tasks.SessionLocal", return_value=db_session):
        yield db_session


def test_reconcile_orphaned_events(task_session):
    group, members = create_group_with_members(task_session, size=2)
    event = create_event(task_session, nominee=members[0], group=group)
    create_event(task_session, nominee=members[1], group_id="disbanded")
    task_session.commit()
    event_id = event.id
    
    result = reconcile_orphaned_events()
    
    assert result["repaired"] == [str(event_id)]
    assert len(result["failed"]) == 1
    assert task_session.query(Ballot).filter(Ballot.event_id == event_id).count() >= 1


def test_reconcile_single_group(task_session):
    group, members = create_group_with_members(task_session, size=2)
    create_event(task_session, nominee=members[0], group=group)
    task_session.commit()
    
    result = reconcile_orphaned_events("some-other-group")
    
    assert result == {"repaired": [], "failed": []}


def test_repair_event(task_session):
    group, members = create_group_with_members(task_session, size=3)
    event = create_event(task_session, nominee=members[0], group=group)
    task_session.commit()
    event_id = str(event.id)
    
    result = repair_event(event_id)
    
    assert result["event_id"] == event_id
    assert result["ballots_created"] >= 2
    assert repair_event(event_id)["ballots_created"] == 0
