"""
Content Item Schemas

Pydantic response models shared by the admin and public routes.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from app.content_kinds import ContentKind  # noqa: TC001


class ContentItemResponse(BaseModel):
    """One language variant of a content item"""

    id: int
    kind: str
    lang: str
    group_id: str | None = None
    slug: str | None = None
    title: str
    fields: dict[str, Any] = Field(default_factory=dict)
    shared: dict[str, Any] = Field(default_factory=dict)
    lead_image: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, kind: ContentKind, row: Any) -> "ContentItemResponse":
        return cls(
            id=row.id,
            kind=kind.name,
            lang=row.lang,
            group_id=row.group_id,
            slug=getattr(row, "slug", None) if kind.has_slug else None,
            title=kind.title_of(row),
            fields=kind.translated_values(row),
            shared={name: getattr(row, name) for name in kind.shared},
            lead_image=getattr(row, kind.lead_field) if kind.lead_field else None,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class GalleryImageResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    image_url: str
    alt_text: str | None = None
    sort_order: int = 0


class PublicItemResponse(BaseModel):
    item: ContentItemResponse
    gallery: list[GalleryImageResponse] = Field(default_factory=list)


class AdminItemResponse(BaseModel):
    """Edit view: every language variant of a group plus its gallery"""

    base: ContentItemResponse
    variants: dict[str, ContentItemResponse | None]
    gallery_owner_id: int | None = None
    gallery: list[GalleryImageResponse] = Field(default_factory=list)


class CreatedGroupResponse(BaseModel):
    group_id: str
    record_ids: dict[str, int]


class UpdateGroupResponse(BaseModel):
    group_id: str
    updated: dict[str, int] = Field(default_factory=dict)
    created: dict[str, int] = Field(default_factory=dict)
    skipped: list[str] = Field(default_factory=list)
    removed_images: list[str] = Field(default_factory=list)


class DeleteGroupResponse(BaseModel):
    deleted: int


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    slug: str
    title: str
    url: str


class MaintenanceReport(BaseModel):
    counts: dict[str, int]


class PageSectionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    sort_order: int
    text: str = ""
    image_url: str | None = None


class PageResponse(BaseModel):
    id: int
    lang: str
    slug: str
    title: str
    content: Any = None
    image_url: str | None = None
    sections: list[PageSectionResponse] = Field(default_factory=list)

    @classmethod
    def from_row(cls, page: Any, sections: list[PageSectionResponse] | None = None) -> "PageResponse":
        return cls(
            id=page.id,
            lang=page.lang,
            slug=page.slug,
            title=page.title,
            content=page.content,
            image_url=page.image_url,
            sections=sections or [],
        )


class AdminPageResponse(BaseModel):
    """Edit view of a static page: every language with its stored sections"""

    slug: str
    pages: dict[str, PageResponse | None]


class PageUpdateResponse(BaseModel):
    slug: str
    record_ids: dict[str, int]
    removed_images: list[str] = Field(default_factory=list)
