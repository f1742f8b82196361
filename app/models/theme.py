from sqlalchemy import Column, Index, String, Text

from app.database import Base
from app.models.base import GroupedContentMixin


class Theme(GroupedContentMixin, Base):
    __tablename__ = "themes"

    slug = Column(String, nullable=False)
    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String, nullable=True)

    __table_args__ = (
        Index("themes_lang_slug_idx", "lang", "slug", unique=True),
    )

    def __repr__(self):
        return f"<Theme(id={self.id}, lang={self.lang}, group_id={self.group_id}, slug={self.slug})>"
