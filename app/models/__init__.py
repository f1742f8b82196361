from .additional_image import AdditionalImage
from .document import Document
from .event import Event
from .focus_area import FOCUS_AREA_COLUMNS, FocusArea
from .news import News
from .page import Page
from .team_member import TeamMember
from .theme import Theme

__all__ = [
    "AdditionalImage",
    "Document",
    "Event",
    "FOCUS_AREA_COLUMNS",
    "FocusArea",
    "News",
    "Page",
    "TeamMember",
    "Theme",
]
