"""Tests for nomination intake."""

import math

import pytest

from aura.core.workflow.intake import NominationService, coerce_points
from aura.core.workflow.errors import (
    AmbiguousMember,
    InvalidPoints,
    NoEligibleReviewers,
    NomineeNotFound,
    NotAGroupMember,
    RosterUnavailable,
    ValidationError,
)
from aura.db.models import Ballot, Event
from tests.factories import create_group, create_group_with_members, create_member


class TestCoercePoints:
    
    @pytest.mark.parametrize("value,expected", [
        (10, 10),
        (-5, -5),
        (0, 0),
        ("15", 15),
        (" 7 ", 7),
        ("-3", -3),
        ("12.9", 12),
        (12.9, 12),
        (-2.5, -2),
    ])
    def test_numeric_values(self, value, expected):
        assert coerce_points(value) == expected
    
    @pytest.mark.parametrize("value", [None, True, False, "", "ten", "12abc", math.inf, math.nan, "inf", [1], {}])
    def test_non_numeric_values(self, value):
        with pytest.raises(InvalidPoints) as exc_info:
            coerce_points(value)
        assert isinstance(exc_info.value, ValidationError)


class TestSubmitNomination:
    
    def test_creates_pending_event_and_one_ballot_per_reviewer(self, db_session):
        group, members = create_group_with_members(db_session, size=4, names=["Alice", "Bob", "Cara", "Dev"])
        
        event = NominationService(db_session).submit_nomination("Alice", group.id, "10", "Led the climb")
        
        assert event.is_approved is False
        assert event.points == 10
        assert event.nominee_id == members[0].id
        assert event.nominee_name == "Alice"
        assert event.group_id == group.id
        assert event.description == "Led the climb"
        
        ballots = db_session.query(Ballot).filter(Ballot.event_id == event.id).all()
        assert len(ballots) == 4
        assert {b.reviewer_id for b in ballots} == set(group.people_map)
        assert all(not b.reviewed and not b.approved for b in ballots)
        assert all(b.nominee_id == members[0].id for b in ballots)
        assert {b.reviewer_name for b in ballots} == {"Alice", "Bob", "Cara", "Dev"}
    
    def test_ballot_count_matches_roster_for_every_nomination(self, db_session):
        group, members = create_group_with_members(db_session, size=3)
        service = NominationService(db_session)
        
        for member in members:
            event = service.submit_nomination(member.name, group.id, 1)
            count = db_session.query(Ballot).filter(Ballot.event_id == event.id).count()
            assert count == 3
    
    def test_roster_may_include_non_members(self, db_session):
        nominee = create_member(db_session, name="Alice", groups=["climbers"])
        create_group(db_session, group_id="climbers", people_map={nominee.id: "Alice", "coach": "Coach"})
        
        event = NominationService(db_session).submit_nomination("Alice", "climbers", 5)
        
        assert len(event.ballots) == 2
    
    def test_self_review_is_kept_by_default(self, db_session):
        group, members = create_group_with_members(db_session, size=3)
        
        event = NominationService(db_session, exclude_self_review=False).submit_nomination(
            members[0].name, group.id, 5
        )
        
        assert members[0].id in {b.reviewer_id for b in event.ballots}
    
    def test_self_review_can_be_excluded(self, db_session):
        group, members = create_group_with_members(db_session, size=3)
        
        event = NominationService(db_session, exclude_self_review=True).submit_nomination(
            members[0].name, group.id, 5
        )
        
        reviewers = {b.reviewer_id for b in event.ballots}
        assert len(reviewers) == 2
        assert members[0].id not in reviewers
    
    def test_sole_nominee_without_self_review_creates_nothing(self, db_session):
        group, (solo,) = create_group_with_members(db_session, size=1)
        db_session.commit()
        
        with pytest.raises(NoEligibleReviewers):
            NominationService(db_session, exclude_self_review=True).submit_nomination(
                solo.name, group.id, 5
            )
        db_session.rollback()
        
        assert db_session.query(Event).count() == 0
        assert db_session.query(Ballot).count() == 0
    
    def test_unknown_nominee(self, db_session):
        group, _ = create_group_with_members(db_session, size=2)
        
        with pytest.raises(NomineeNotFound):
            NominationService(db_session).submit_nomination("Nobody", group.id, 5)
        
        assert db_session.query(Event).count() == 0
    
    def test_unknown_nominee_is_reported_before_bad_points(self, db_session):
        group, _ = create_group_with_members(db_session, size=2)
        
        with pytest.raises(NomineeNotFound):
            NominationService(db_session).submit_nomination("Nobody", group.id, "lots")
    
    def test_non_member_is_reported_before_bad_points(self, db_session):
        create_group_with_members(db_session, size=2, group_id="climbers")
        create_member(db_session, name="Eve", groups=["runners"])
        
        with pytest.raises(NotAGroupMember):
            NominationService(db_session).submit_nomination("Eve", "climbers", "lots")
    
    def test_ambiguous_nominee(self, db_session):
        create_member(db_session, name="Sam", groups=["climbers"])
        create_member(db_session, name="Sam", groups=["climbers"])
        create_group(db_session, group_id="climbers", people_map={"x": "X"})
        
        with pytest.raises(AmbiguousMember):
            NominationService(db_session).submit_nomination("Sam", "climbers", 5)
    
    def test_nominee_outside_group_is_rejected(self, db_session):
        create_group_with_members(db_session, size=2, group_id="climbers")
        create_member(db_session, name="Eve", groups=["runners"])
        
        with pytest.raises(NotAGroupMember) as exc_info:
            NominationService(db_session).submit_nomination("Eve", "climbers", 5)
        
        detail = exc_info.value.detail
        assert detail["userGroups"] == ["runners"]
        assert detail["submittedGroupName"] == "climbers"
        assert detail["name"] == "Eve"
        assert detail["exactMatches"] == [
            {"group": "runners", "matches": False, "submittedLength": 8, "groupLength": 7},
        ]
        assert db_session.query(Event).count() == 0
    
    def test_invalid_points_create_nothing(self, db_session):
        group, members = create_group_with_members(db_session, size=2)
        
        with pytest.raises(InvalidPoints):
            NominationService(db_session).submit_nomination(members[0].name, group.id, "lots")
        
        assert db_session.query(Event).count() == 0
    
    def test_missing_roster_rolls_back_with_the_transaction(self, db_session):
        create_member(db_session, name="Alice", groups=["climbers"])
        db_session.commit()
        
        with pytest.raises(RosterUnavailable):
            NominationService(db_session).submit_nomination("Alice", "climbers", 5)
        db_session.rollback()
        
        assert db_session.query(Event).count() == 0
        assert db_session.query(Ballot).count() == 0
    
    def test_non_string_group_entries_still_get_the_diagnostic(self, db_session):
        create_group_with_members(db_session, size=2, group_id="climbers")
        create_member(db_session, name="Eve", groups=[42, "runners"])
        
        with pytest.raises(NotAGroupMember) as exc_info:
            NominationService(db_session).submit_nomination("Eve", "climbers", 5)
        
        detail = exc_info.value.detail
        assert detail["userGroups"] == ["42", "runners"]
        assert detail["exactMatches"][0] == {
            "group": "42", "matches": False, "submittedLength": 8, "groupLength": 2,
        }
