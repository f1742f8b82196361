from sqlalchemy import JSON, Boolean, Column, Integer

from app.database import Base
from app.models.base import GroupedContentMixin

# Fixed column set of the focus areas table, in display order
FOCUS_AREA_COLUMNS: tuple[str, ...] = (
    "group",
    "field",
    "experts",
    "description",
    "activity_description",
    "type_of_activity",
)


class FocusArea(GroupedContentMixin, Base):
    """One row of the focus areas table; the translatable cells live in ``fields``."""

    __tablename__ = "focus_areas"

    fields = Column(JSON, default=dict, nullable=False)
    sort_order = Column(Integer, default=0, nullable=False)
    published = Column(Boolean, default=True, nullable=False, index=True)

    def __repr__(self):
        return f"<FocusArea(id={self.id}, lang={self.lang}, group_id={self.group_id})>"
