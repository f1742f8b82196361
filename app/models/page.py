from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, Integer, String, UniqueConstraint

from app.database import Base


class Page(Base):
    """Static page, one row per (lang, slug); pages are not grouped."""

    __tablename__ = "pages"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    lang = Column(String(8), nullable=False, index=True)
    slug = Column(String, nullable=False)
    title = Column(String, nullable=False)
    content = Column(JSON, default="", nullable=False)
    image_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(timezone.utc), nullable=False)
    updated_at = Column(
        DateTime,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (UniqueConstraint("lang", "slug", name="uq_pages_lang_slug"),)
