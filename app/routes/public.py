"""
Public Routes

Read-only JSON API. Every response is in the request language
(request.state.locale); items missing in that language fall back to
another variant of their group.

    GET /api/languages         → supported languages
    GET /api/menu              → navigation pages in menu order
    GET /api/pages/{slug}      → static page with its sections, images from en
    GET /api/{kind}            → one entry per item, resolved to the language
    GET /api/{kind}/{key}      → detail by id or slug, ``gid`` pins the group
"""

import logging

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession  # noqa: TC002

from app.config import settings
from app.content_kinds import ContentKind, get_kind
from app.database import get_db
from app.exceptions import ContentNotFoundError
from app.i18n import SUPPORTED_LANGUAGES, get_language_info
from app.schemas.content_item import (
    ContentItemResponse,
    GalleryImageResponse,
    MenuItemResponse,
    PageResponse,
    PageSectionResponse,
    PublicItemResponse,
)
from app.services.grouping_service import find_public_item, list_resolved, resolve_gallery_owner
from app.services.page_service import resolve_page
from app.services.persistence import SQLAlchemyContentStore, SQLAlchemyGalleryStore, SQLAlchemyPageStore
from app.utils.menu import build_menu

router = APIRouter(prefix="/api", tags=["Public"])
logger = logging.getLogger(__name__)


def _kind_or_404(kind_path: str) -> ContentKind:
    try:
        return get_kind(kind_path)
    except KeyError:
        raise ContentNotFoundError("Content type", kind_path) from None


def _current_language(request: Request) -> str:
    return getattr(request.state, "locale", settings.default_language)


@router.get("/languages")
async def list_languages():
    return [get_language_info(lang) for lang in SUPPORTED_LANGUAGES]


@router.get("/menu", response_model=list[MenuItemResponse])
async def get_menu(request: Request, db: AsyncSession = Depends(get_db)):
    lang = _current_language(request)
    pages = await SQLAlchemyPageStore(db).list_pages(lang)
    return [
        MenuItemResponse(slug=page.slug, title=page.title, url=f"/{page.slug}?lang={lang}")
        for page in build_menu(pages)
    ]


@router.get("/pages/{slug}", response_model=PageResponse)
async def get_page(slug: str, request: Request, db: AsyncSession = Depends(get_db)):
    page, sections = await resolve_page(
        SQLAlchemyPageStore(db), SQLAlchemyGalleryStore(db), _current_language(request), slug
    )
    return PageResponse.from_row(page, [PageSectionResponse.model_validate(section) for section in sections])


@router.get("/{kind_path}", response_model=list[ContentItemResponse])
async def list_items(kind_path: str, request: Request, db: AsyncSession = Depends(get_db)):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    rows = await list_resolved(store, _current_language(request))
    return [ContentItemResponse.from_row(kind, row) for row in rows]


@router.get("/{kind_path}/{key}", response_model=PublicItemResponse)
async def get_item(
    kind_path: str,
    key: str,
    request: Request,
    gid: str | None = Query(None, description="Group id to disambiguate a slug"),
    db: AsyncSession = Depends(get_db),
):
    kind = _kind_or_404(kind_path)
    store = SQLAlchemyContentStore(db, kind)
    item = await find_public_item(store, _current_language(request), key, gid=gid)
    if kind.published_field and not getattr(item, kind.published_field):
        raise ContentNotFoundError(kind.name, key)

    response = PublicItemResponse(item=ContentItemResponse.from_row(kind, item))
    if kind.gallery_type:
        gallery = SQLAlchemyGalleryStore(db)
        owner_id = await resolve_gallery_owner(store, gallery, item)
        images = await gallery.get_additional_images(kind.gallery_type, owner_id)
        response.gallery = [GalleryImageResponse.model_validate(img) for img in images]
    return response
