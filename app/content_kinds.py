"""
Content kinds

Describes every grouped content type in one place: which columns are
translated per language, which are shared by the whole group, where the
lead image lives and how listings are ordered. Services and routes look a
kind up by name instead of branching on the content type.
"""

from dataclasses import dataclass, field
from typing import Any

from app.models import Document, Event, FOCUS_AREA_COLUMNS, FocusArea, News, TeamMember, Theme

# Form types for shared fields
TEXT = "text"
INT = "int"
BOOL = "bool"
DATE = "date"
DATETIME = "datetime"
LOCATION = "location"


@dataclass(frozen=True)
class ContentKind:
    name: str
    model: type
    translatable: tuple[str, ...]
    title_field: str
    shared: dict[str, str] = field(default_factory=dict)
    title_shared: bool = False
    required_shared: tuple[str, ...] = ()
    lead_field: str | None = None
    lead_from_gallery: bool = True
    gallery_type: str | None = None
    slug_fallback: str | None = None
    fields_column: str | None = None
    published_field: str | None = None
    order_by: tuple[str, ...] = ("-id",)
    upload_folder: str = ""

    @property
    def has_slug(self) -> bool:
        return self.slug_fallback is not None

    @property
    def filled_fields(self) -> tuple[str, ...]:
        """Fields of which at least one must be non-empty for a language to count as filled."""
        if self.fields_column:
            return self.translatable
        if self.title_shared:
            return self.translatable
        return (self.title_field,)

    def translated_values(self, row: Any) -> dict[str, Any]:
        """Current per-language values of ``row``, keyed by translatable field."""
        if row is None:
            return {}
        if self.fields_column:
            stored = getattr(row, self.fields_column) or {}
            return {name: stored.get(name) for name in self.translatable}
        return {name: getattr(row, name, None) for name in self.translatable}

    def column_values(self, values: dict[str, Any]) -> dict[str, Any]:
        """Map translatable values onto model columns."""
        if self.fields_column:
            return {self.fields_column: {name: values.get(name) or "" for name in self.translatable}}
        return dict(values)

    def title_of(self, row: Any) -> str:
        if row is None:
            return ""
        if self.fields_column:
            stored = getattr(row, self.fields_column) or {}
            return str(stored.get(self.title_field) or "")
        return str(getattr(row, self.title_field, None) or "")


CONTENT_KINDS: dict[str, ContentKind] = {
    "event": ContentKind(
        name="event",
        model=Event,
        translatable=("title", "description"),
        title_field="title",
        shared={"event_date": DATE, "location": LOCATION},
        required_shared=("event_date", "location"),
        lead_field="image_url",
        gallery_type="event",
        slug_fallback="event",
        order_by=("event_date", "-id"),
        upload_folder="events",
    ),
    "news": ContentKind(
        name="news",
        model=News,
        translatable=("title", "summary", "content"),
        title_field="title",
        shared={"published_at": DATETIME, "is_published": BOOL},
        lead_field="image_url",
        gallery_type="news",
        slug_fallback="news",
        published_field="is_published",
        order_by=("-published_at", "-id"),
        upload_folder="news",
    ),
    "theme": ContentKind(
        name="theme",
        model=Theme,
        translatable=("title", "description"),
        title_field="title",
        lead_field="image_url",
        gallery_type="theme",
        slug_fallback="theme",
        order_by=("-id",),
        upload_folder="themes",
    ),
    "team": ContentKind(
        name="team",
        model=TeamMember,
        translatable=("role", "bio"),
        title_field="name",
        title_shared=True,
        shared={
            "name": TEXT,
            "linkedin": TEXT,
            "facebook": TEXT,
            "twitter": TEXT,
            "sort_order": INT,
        },
        required_shared=("name",),
        lead_field="photo_url",
        lead_from_gallery=False,
        gallery_type="team",
        order_by=("sort_order", "-id"),
        upload_folder="team",
    ),
    "document": ContentKind(
        name="document",
        model=Document,
        translatable=("title", "description"),
        title_field="title",
        shared={"file_url": TEXT, "sort_order": INT, "published": BOOL},
        published_field="published",
        order_by=("sort_order", "-id"),
        upload_folder="documents",
    ),
    "focus_area": ContentKind(
        name="focus_area",
        model=FocusArea,
        translatable=FOCUS_AREA_COLUMNS,
        title_field="field",
        shared={"sort_order": INT, "published": BOOL},
        fields_column="fields",
        published_field="published",
        order_by=("sort_order", "-id"),
    ),
}

# URL segments used by the HTTP layer
KIND_PATHS: dict[str, str] = {
    "events": "event",
    "news": "news",
    "themes": "theme",
    "team": "team",
    "documents": "document",
    "focus-areas": "focus_area",
}


def get_kind(name: str) -> ContentKind:
    """Look a kind up by registry name or URL segment; raises KeyError when unknown."""
    if name in CONTENT_KINDS:
        return CONTENT_KINDS[name]
    return CONTENT_KINDS[KIND_PATHS[name]]
