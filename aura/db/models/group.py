from sqlalchemy import Column, String, JSON

from aura.db.base import Base


class Group(Base):
    """
    A recognition group.
    
    ``people_map`` maps reviewer id -> reviewer display name and is the
    authoritative reviewer roster for the group.
    """
    __tablename__ = "groups"

    id = Column(String(255), primary_key=True)
    people_map = Column(JSON, nullable=True, default=dict)

    def __repr__(self) -> str:
        size = len(self.people_map or {})
        return f"<Group {self.id} [{size} reviewers]>"
