"""Leaderboard endpoint."""

from typing import List, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from aura.api.deps import get_db
from aura.api.errors import missing_parameters, store_error_response
from aura.core.workflow import LeaderboardAggregator

router = APIRouter(tags=["dashboard"])


class LeaderboardEntry(BaseModel):
    name: str
    total_aura_points: int


@router.get("/dashboard-results", response_model=List[LeaderboardEntry])
async def dashboard_results(
    group_id: Optional[str] = None,
    db: Session = Depends(get_db),
):
    """Top members of a group by approved points."""
    if not group_id:
        return missing_parameters("Missing group_id parameter")
    
    try:
        top = LeaderboardAggregator(db).top_members(group_id)
    except SQLAlchemyError as e:
        return store_error_response(e)
    
    return [LeaderboardEntry(name=name, total_aura_points=total) for name, total in top]
