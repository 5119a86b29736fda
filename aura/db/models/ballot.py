import uuid
from datetime import datetime
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey, UniqueConstraint, Uuid
from sqlalchemy.orm import relationship

from aura.db.base import Base


class Ballot(Base):
    """
    One reviewer's vote on one event.
    
    Nominee and reviewer names are denormalized for read convenience.
    ``approved`` is only meaningful once ``reviewed`` is set.
    """
    __tablename__ = "ballots"
    __table_args__ = (
        UniqueConstraint("event_id", "reviewer_id", name="uq_ballots_event_reviewer"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    event_id = Column(Uuid, ForeignKey("events.id", ondelete="CASCADE"), nullable=False, index=True)
    
    # Decision
    reviewed = Column(Boolean, nullable=False, default=False, index=True)
    approved = Column(Boolean, nullable=False, default=False)
    reviewed_at = Column(DateTime, nullable=True)
    
    # Denormalized identities
    nominee_id = Column(String(64), nullable=False)
    nominee_name = Column(String(255), nullable=False)
    reviewer_id = Column(String(64), nullable=False, index=True)
    reviewer_name = Column(String(255), nullable=False)
    
    created_at = Column(DateTime, default=datetime.utcnow, index=True)
    
    event = relationship("Event", back_populates="ballots")
    
    def __repr__(self) -> str:
        if not self.reviewed:
            verdict = "unreviewed"
        else:
            verdict = "approved" if self.approved else "declined"
        return f"<Ballot {self.reviewer_name} on {self.event_id} [{verdict}]>"
