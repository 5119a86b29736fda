"""Leaderboard aggregation over approved events."""

import logging
from typing import Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from aura.core.config import get_settings
from aura.db.models import Event

logger = logging.getLogger(__name__)


def rank_totals(rows: List[Tuple[str, int]], limit: int) -> List[Tuple[str, int]]:
    """
    Sum points per name and return the ``limit`` highest totals.
    
    Ties keep the order in which names were first seen.
    """
    totals: Dict[str, int] = {}
    for name, points in rows:
        totals[name] = totals.get(name, 0) + points
    
    ranked = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


class LeaderboardAggregator:
    """Read-only point totals per nominee for a group."""
    
    def __init__(self, db: Session):
        self.db = db
    
    def top_members(self, group_id: str, limit: Optional[int] = None) -> List[Tuple[str, int]]:
        """
        Top nominees of a group by approved points.
        
        Totals are keyed by nominee display name. Pending events do not count.
        """
        if limit is None:
            limit = get_settings().leaderboard_limit
        
        rows = self.db.query(Event.nominee_name, Event.points).filter(
            Event.group_id == group_id,
            Event.is_approved.is_(True),
        ).order_by(Event.created_at.asc()).all()
        
        return rank_totals([(name, points) for name, points in rows], limit)
