from sqlalchemy import Column, String, JSON

from aura.db.base import Base


class Member(Base):
    """
    A person who can be nominated and who can review nominations.
    
    ``group_names`` is normally a JSON list of group ids, but rows written by
    older clients may hold a single string, and hand-edited rows may hold
    numbers. Use ``groups`` for comparisons: it is always a list of str.
    """
    __tablename__ = "members"

    id = Column(String(64), primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    group_names = Column(JSON, nullable=False, default=list)

    @property
    def groups(self) -> list[str]:
        if self.group_names is None:
            return []
        if isinstance(self.group_names, str):
            return [self.group_names]
        return [str(group) for group in self.group_names]

    def __repr__(self) -> str:
        return f"<Member {self.name} ({self.id})>"
