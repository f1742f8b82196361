from sqlalchemy import Column, Date, Index, String, Text

from app.database import Base
from app.models.base import GroupedContentMixin


class Event(GroupedContentMixin, Base):
    __tablename__ = "events"

    slug = Column(String, nullable=True)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)

    # Shared across the group
    event_date = Column(Date, nullable=True)
    location = Column(String, nullable=True)
    image_url = Column(String, nullable=True)

    __table_args__ = (
        Index("events_lang_slug_idx", "lang", "slug", unique=True),
    )

    def __repr__(self):
        return f"<Event(id={self.id}, lang={self.lang}, group_id={self.group_id}, slug={self.slug})>"
