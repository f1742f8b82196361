from .content_item import (
    AdminItemResponse,
    AdminPageResponse,
    ContentItemResponse,
    CreatedGroupResponse,
    DeleteGroupResponse,
    GalleryImageResponse,
    MaintenanceReport,
    MenuItemResponse,
    PageResponse,
    PageSectionResponse,
    PageUpdateResponse,
    PublicItemResponse,
    UpdateGroupResponse,
)
from .multilingual import MultilingualForm, PageForm, parse_multilingual_form, parse_page_form

# Define the public API of this module
__all__ = [
    "AdminItemResponse",
    "AdminPageResponse",
    "ContentItemResponse",
    "CreatedGroupResponse",
    "DeleteGroupResponse",
    "GalleryImageResponse",
    "MaintenanceReport",
    "MenuItemResponse",
    "MultilingualForm",
    "PageForm",
    "PageResponse",
    "PageSectionResponse",
    "PageUpdateResponse",
    "PublicItemResponse",
    "UpdateGroupResponse",
    "parse_multilingual_form",
    "parse_page_form",
]
