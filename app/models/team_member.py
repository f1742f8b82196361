from sqlalchemy import Column, Integer, String, Text

from app.database import Base
from app.models.base import GroupedContentMixin


class TeamMember(GroupedContentMixin, Base):
    """A team member; name, photo and social links are the same in every language."""

    __tablename__ = "team_members"

    name = Column(String, nullable=False)
    role = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    photo_url = Column(String, nullable=True)
    linkedin = Column(String, nullable=True)
    facebook = Column(String, nullable=True)
    twitter = Column(String, nullable=True)
    sort_order = Column(Integer, default=0, nullable=False)

    def __repr__(self):
        return f"<TeamMember(id={self.id}, lang={self.lang}, group_id={self.group_id}, name={self.name})>"
