"""Nomination workflow for Aura Board.

Implements nomination intake, the review ledger, quorum evaluation and the
leaderboard over approved events.
"""

from .states import EventStatus, EventTransition
from .machine import EventStateMachine, TransitionRecord
from .directory import MembershipDirectory
from .intake import NominationService, coerce_points
from .quorum import QuorumEvaluator, QuorumResult
from .ledger import ReviewLedger, DecisionResult
from .leaderboard import LeaderboardAggregator
from .reconcile import EventReconciler

__all__ = [
    "EventStatus",
    "EventTransition",
    "EventStateMachine",
    "TransitionRecord",
    "MembershipDirectory",
    "NominationService",
    "coerce_points",
    "QuorumEvaluator",
    "QuorumResult",
    "ReviewLedger",
    "DecisionResult",
    "LeaderboardAggregator",
    "EventReconciler",
]
