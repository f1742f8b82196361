"""
Page Service

Multi-language editing of static pages. Pages are not grouped: each
language has its own row under the same slug. A page carries up to
PAGE_SECTION_COUNT sections stored as additional images tagged ``page``.
Section text lives in ``alt_text`` per language, while section images are
kept on the ``en`` page only and shown for every language.

Functions:
    save_page          — write every language of a page from one submission
    load_page_editor   — pages and raw sections by language, for the admin
    resolve_page       — public page in a language with its merged sections
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from app.exceptions import ContentNotFoundError, ValidationError
from app.i18n import FALLBACK_ORDER, SUPPORTED_LANGUAGES
from app.schemas.multilingual import PAGE_SECTION_COUNT, PageForm  # noqa: TC001
from app.services.persistence import GalleryStore, PageStore  # noqa: TC001
from app.utils.slugify import slugify

logger = logging.getLogger(__name__)

PAGE_GALLERY_TYPE = "page"

# Owner of the section images
IMAGE_OWNER_LANG = FALLBACK_ORDER[0]

DEFAULT_PAGE_TITLES: dict[str, dict[str, str]] = {
    "home": {"en": "Home", "sk": "Domov", "hu": "Főoldal"},
    "about-us": {"en": "About Us", "sk": "O nás", "hu": "Rólunk"},
    "focus-areas": {"en": "Focus Areas", "sk": "Zamerania", "hu": "Fókuszterületek"},
}


@dataclass
class PageSection:
    sort_order: int
    text: str = ""
    image_url: str | None = None


@dataclass
class SavedPage:
    slug: str
    record_ids: dict[str, int] = field(default_factory=dict)
    removed_images: list[str] = field(default_factory=list)


def validate_page_slug(slug: str) -> str:
    """
    Raises:
        ValidationError: the slug is not already in slug form.
    """
    if not slug or slugify(slug) != slug:
        raise ValidationError(f"Invalid page slug: {slug!r}", field="slug")
    return slug


def default_title(slug: str, lang: str) -> str:
    titles = DEFAULT_PAGE_TITLES.get(slug, {})
    return titles.get(lang) or titles.get("en") or slug.replace("-", " ").title()


async def save_page(pages: PageStore, gallery: GalleryStore, slug: str, form: PageForm) -> SavedPage:
    """
    Upsert the ``slug`` page in every supported language.

    Titles and contents that were not posted keep their stored values; a
    new page without a posted title gets its default title. When any section
    field was posted, each language's sections are rebuilt: texts not posted
    are kept, images change on the ``en`` page only.

    Returns:
        The page ids by language and the URLs of replaced or removed section
        images, for the caller to delete from storage after commit.
    """
    validate_page_slug(slug)
    saved = SavedPage(slug=slug)

    for lang in SUPPORTED_LANGUAGES:
        existing = await pages.get_page(lang, slug)
        title = form.titles.get(lang) or (existing.title if existing else None) or default_title(slug, lang)
        if lang in form.contents:
            content = form.contents[lang]
        else:
            content = existing.content if existing is not None else ""
        page = await pages.upsert_page(lang, slug, title, content)
        saved.record_ids[lang] = page.id

    if not form.touches_sections:
        return saved

    for lang, page_id in saved.record_ids.items():
        existing_items = await gallery.get_additional_images(PAGE_GALLERY_TYPE, page_id)
        posted_texts = form.section_texts.get(lang, {})
        items: list[dict[str, Any]] = []
        for idx in range(PAGE_SECTION_COUNT):
            current = existing_items[idx] if idx < len(existing_items) else None
            text = posted_texts.get(idx, current.alt_text if current is not None else "") or ""
            image_url = ""
            if lang == IMAGE_OWNER_LANG:
                image_url = (current.image_url if current is not None else "") or ""
                if idx in form.section_images and form.section_images[idx] != image_url:
                    if image_url:
                        saved.removed_images.append(image_url)
                    image_url = form.section_images[idx]
            items.append({"image_url": image_url, "alt_text": text, "sort_order": idx})

        if not any(item["image_url"] or item["alt_text"] for item in items):
            items = []
        await gallery.replace_additional_image_items(PAGE_GALLERY_TYPE, page_id, items)

    logger.info("Saved page %s (%d replaced section images)", slug, len(saved.removed_images))
    return saved


async def load_page_editor(
    pages: PageStore, gallery: GalleryStore, slug: str
) -> dict[str, tuple[Any | None, list[Any]]]:
    """Stored page and raw section rows per language; missing languages map to (None, [])."""
    editor = {}
    for lang in SUPPORTED_LANGUAGES:
        page = await pages.get_page(lang, slug)
        items = await gallery.get_additional_images(PAGE_GALLERY_TYPE, page.id) if page is not None else []
        editor[lang] = (page, items)
    return editor


async def resolve_page(
    pages: PageStore, gallery: GalleryStore, lang: str, slug: str
) -> tuple[Any, list[PageSection]]:
    """
    Public page for ``lang`` with its sections.

    The page falls back along FALLBACK_ORDER when ``lang`` has none. Section
    images always come from the ``en`` page; a section's text is the
    language's own when non-blank, else the ``en`` text.

    Raises:
        ContentNotFoundError: no language has the page.
    """
    page = await pages.get_page(lang, slug)
    for fallback in FALLBACK_ORDER:
        if page is not None:
            break
        page = await pages.get_page(fallback, slug)
    if page is None:
        raise ContentNotFoundError("page", slug)

    owner = page if page.lang == IMAGE_OWNER_LANG else await pages.get_page(IMAGE_OWNER_LANG, slug)
    owner_items = await gallery.get_additional_images(PAGE_GALLERY_TYPE, owner.id) if owner is not None else []
    own_items = owner_items if owner is page else await gallery.get_additional_images(PAGE_GALLERY_TYPE, page.id)

    sections = []
    for idx in range(max(len(owner_items), len(own_items))):
        owner_item = owner_items[idx] if idx < len(owner_items) else None
        own_item = own_items[idx] if idx < len(own_items) else None
        text = own_item.alt_text if own_item is not None and (own_item.alt_text or "").strip() else ""
        if not text and owner_item is not None:
            text = owner_item.alt_text or ""
        image_url = (owner_item.image_url if owner_item is not None else "") or None
        if text or image_url:
            sections.append(PageSection(sort_order=idx, text=text, image_url=image_url))
    return page, sections
