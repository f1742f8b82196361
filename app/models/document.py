from sqlalchemy import Boolean, Column, Integer, String, Text

from app.database import Base
from app.models.base import GroupedContentMixin


class Document(GroupedContentMixin, Base):
    __tablename__ = "documents"

    title = Column(String, nullable=False)
    description = Column(Text, nullable=True)
    file_url = Column(String, nullable=False, default="")
    sort_order = Column(Integer, default=0, nullable=False)
    published = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self):
        return f"<Document(id={self.id}, lang={self.lang}, group_id={self.group_id}, title={self.title})>"
