"""Nomination database models.

Stores nominations ("events") and their status transition history.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, Integer, Boolean, DateTime, Float, ForeignKey, Text, Uuid
from sqlalchemy.orm import relationship

from aura.db.base import Base


class Event(Base):
    """
    A nomination of one member for a number of points within a group.
    
    Created unapproved; flipped to approved exactly once by the quorum
    evaluator and never flipped back.
    """
    __tablename__ = "events"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    
    # Nominee
    nominee_id = Column(String(64), nullable=False, index=True)
    nominee_name = Column(String(255), nullable=False, index=True)
    
    # Nomination
    group_id = Column(String(255), nullable=False, index=True)
    points = Column(Integer, nullable=False)
    description = Column(Text, nullable=True)
    
    # Workflow state
    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    approved_at = Column(DateTime, nullable=True)
    
    # Timestamps
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    # Relationships
    ballots = relationship("Ballot", back_populates="event", order_by="Ballot.created_at")
    history = relationship("EventHistory", back_populates="event", order_by="EventHistory.created_at")
    
    def __repr__(self) -> str:
        state = "approved" if self.is_approved else "pending"
        return f"<Event {self.nominee_name} {self.points:+d} in {self.group_id} [{state}]>"


class EventHistory(Base):
    """
    Records status transitions of events.
    
    There is only one legal transition today (pending -> approved), so every
    approved event has exactly one row here.
    """
    __tablename__ = "event_history"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # Transition details
    from_status = Column(String(50), nullable=False)
    to_status = Column(String(50), nullable=False)
    transition = Column(String(50), nullable=False)
    
    # Quorum snapshot at the time of the transition
    approval_percentage = Column(Float, nullable=True)
    
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    event = relationship("Event", back_populates="history")
    
    def __repr__(self) -> str:
        return f"<EventHistory {self.from_status} -> {self.to_status}>"
