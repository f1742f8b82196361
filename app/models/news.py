from sqlalchemy import Boolean, Column, DateTime, Index, String, Text

from app.database import Base
from app.models.base import GroupedContentMixin


class News(GroupedContentMixin, Base):
    __tablename__ = "news"

    slug = Column(String, nullable=True)
    title = Column(String, nullable=False)
    summary = Column(Text, nullable=True)
    content = Column(Text, nullable=True)

    # Shared across the group
    image_url = Column(String, nullable=True)
    published_at = Column(DateTime, nullable=True)
    is_published = Column(Boolean, default=True, nullable=False)

    __table_args__ = (
        Index("news_lang_slug_idx", "lang", "slug", unique=True),
        Index("news_published_idx", "is_published", "published_at"),
    )

    def __repr__(self):
        return f"<News(id={self.id}, lang={self.lang}, group_id={self.group_id}, slug={self.slug})>"
