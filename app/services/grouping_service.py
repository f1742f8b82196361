"""
Grouping Service

Resolves which language variant of a content group to show.

Functions:
    resolve_variant        — variant for a language, with fallback
    collapse_groups        — one row per group, first occurrence wins
    list_resolved          — public listing across all languages
    variants_by_lang       — {lang: row} map for edit views
    find_public_item       — public detail lookup by id or slug
    resolve_gallery_owner  — row that physically owns the group's gallery
"""

from __future__ import annotations

import logging
from typing import Any

from app.exceptions import ContentNotFoundError
from app.i18n import FALLBACK_ORDER, SUPPORTED_LANGUAGES
from app.services.persistence import ContentStore, GalleryStore  # noqa: TC001

logger = logging.getLogger(__name__)


def group_key(row: Any) -> str:
    """Key that identifies the logical item a row belongs to."""
    return row.group_id or f"single_{row.id}"


async def resolve_variant(store: ContentStore, item: Any, lang: str) -> Any:
    """
    Return the variant of ``item``'s group in ``lang``.

    When that language is missing, the first variant found in FALLBACK_ORDER
    is used, and when the group has no other rows, ``item`` itself. Never
    returns None for a non-null item.
    """
    if item is None or not item.group_id:
        return item
    if item.lang == lang:
        return item

    variant = await store.get_by_group_and_lang(item.group_id, lang)
    if variant is not None:
        return variant

    for fallback in FALLBACK_ORDER:
        if fallback == lang:
            continue
        variant = await store.get_by_group_and_lang(item.group_id, fallback)
        if variant is not None:
            return variant
    return item


def collapse_groups(rows: list[Any]) -> list[Any]:
    seen: set[str] = set()
    collapsed = []
    for row in rows:
        key = group_key(row)
        if key in seen:
            continue
        seen.add(key)
        collapsed.append(row)
    return collapsed


async def list_resolved(store: ContentStore, lang: str, published_only: bool = True) -> list[Any]:
    """
    List every logical item once, resolved to ``lang``.

    Rows are gathered from all languages so that items written in only one
    language still appear.
    """
    rows: list[Any] = []
    for code in SUPPORTED_LANGUAGES:
        rows.extend(await store.list_by_lang(code, published_only=published_only))
    resolved = []
    for row in collapse_groups(rows):
        resolved.append(await resolve_variant(store, row, lang))
    return resolved


async def variants_by_lang(store: ContentStore, item: Any) -> dict[str, Any | None]:
    variants: dict[str, Any | None] = {lang: None for lang in SUPPORTED_LANGUAGES}
    if not item.group_id:
        variants[item.lang] = item
        return variants
    for lang in SUPPORTED_LANGUAGES:
        variants[lang] = await store.get_by_group_and_lang(item.group_id, lang)
    return variants


async def find_public_item(store: ContentStore, lang: str, key: str, gid: str | None = None) -> Any:
    """
    Look up a public detail item and resolve it to ``lang``.

    ``key`` is a numeric id or a slug. A slug is tried in the requested
    language first, then in any language; ``gid`` pins the match to one
    group when the same slug exists in several groups.

    Raises:
        ContentNotFoundError: when nothing matches.
    """
    item = None
    if gid:
        item = await store.get_by_group_and_lang(gid, lang)
        if item is None:
            group = await store.list_group(gid)
            item = group[0] if group else None

    if item is None and key.isdigit():
        item = await store.get(int(key))

    if item is None and store.kind.has_slug:
        item = await store.get_by_slug(lang, key)
        if item is None:
            matches = await store.find_by_slug(key)
            item = matches[0] if matches else None

    if item is None:
        raise ContentNotFoundError(store.kind.name, key)
    return await resolve_variant(store, item, lang)


async def resolve_gallery_owner(store: ContentStore, gallery: GalleryStore, item: Any) -> int:
    """
    Id of the group member whose additional images are the group's gallery.

    Candidates are the variants in FALLBACK_ORDER followed by ``item`` itself;
    the first one that already has images wins, otherwise the first
    candidate. Any error during the lookup falls back to ``item.id``; the lookup
    runs in a savepoint so the surrounding transaction stays usable.
    """
    if not item.group_id:
        return item.id

    gallery_type = store.kind.gallery_type
    try:
        async with gallery.savepoint():
            candidates: list[int] = []
            for lang in FALLBACK_ORDER:
                variant = await store.get_by_group_and_lang(item.group_id, lang)
                if variant is not None and variant.id not in candidates:
                    candidates.append(variant.id)
            if item.id not in candidates:
                candidates.append(item.id)

            for candidate in candidates:
                if await gallery.get_additional_images(gallery_type, candidate):
                    return candidate
            return candidates[0]
    except Exception:
        logger.warning("Gallery owner lookup failed for %s %s", store.kind.name, item.id, exc_info=True)
        return item.id
