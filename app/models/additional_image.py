"""
AdditionalImage Model

Gallery image attached to exactly one owner row. Although a gallery belongs
to a whole language group, only one variant (the gallery owner) physically
holds the images.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String

from app.database import Base


class AdditionalImage(Base):
    __tablename__ = "additional_images"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    content_type = Column(String(16), nullable=False)
    content_id = Column(Integer, nullable=False)
    image_url = Column(String, nullable=False)
    alt_text = Column(String, nullable=True, default="")
    sort_order = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)

    __table_args__ = (Index("additional_images_content_idx", "content_type", "content_id"),)

    def __repr__(self):
        return f"<AdditionalImage(id={self.id}, {self.content_type}:{self.content_id}, url={self.image_url})>"
