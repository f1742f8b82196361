"""
Shared columns for content that exists as one row per language.

All variants of one logical item carry the same ``group_id``; legacy rows
created before grouping existed have ``group_id = NULL``.
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GroupedContentMixin:
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    lang = Column(String(8), nullable=False, index=True)
    group_id = Column(String(36), nullable=True, index=True)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)
