"""
Gallery Service

Keeps the additional images of a content group on its gallery owner and the
lead image in sync across every variant of the group.
"""

from __future__ import annotations

import logging
from typing import Any

from app.services.grouping_service import resolve_gallery_owner
from app.services.persistence import ContentStore, GalleryStore  # noqa: TC001

logger = logging.getLogger(__name__)


async def set_group_lead(store: ContentStore, item: Any, url: str | None) -> None:
    """Write ``url`` as the lead image of ``item`` and every other variant of its group."""
    lead_field = store.kind.lead_field
    if not lead_field:
        return
    if item.group_id:
        await store.update_shared_for_group(item.group_id, {lead_field: url})
    else:
        await store.update(item.id, {lead_field: url})


async def attach_uploads(
    store: ContentStore,
    gallery: GalleryStore,
    owner: Any,
    urls: list[str],
) -> list[Any]:
    """
    Attach freshly uploaded images to a newly created group.

    ``owner`` should be the ``en`` variant when there is one, so that the
    gallery owner resolver finds the images first. The first image becomes
    the lead image of the group.
    """
    if not urls or not store.kind.gallery_type:
        return []
    images = await gallery.add_additional_images(store.kind.gallery_type, owner.id, urls)
    if store.kind.lead_from_gallery:
        await set_group_lead(store, owner, urls[0])
    logger.info("Attached %d images to %s %s", len(urls), store.kind.name, owner.id)
    return images


async def update_gallery(
    store: ContentStore,
    gallery: GalleryStore,
    base: Any,
    remove_ids: list[int] | None = None,
    new_urls: list[str] | None = None,
    lead_url: str | None = None,
) -> list[str]:
    """
    Apply a gallery edit to the group of ``base``.

    Kept images are renumbered, new ones appended and the owner's whole set
    replaced. The lead image is the explicit selection if there is one,
    otherwise the first image when the current lead was removed or is unset,
    otherwise the current lead.

    Returns:
        URLs of the removed images, for the caller to delete from storage.
    """
    gallery_type = store.kind.gallery_type
    lead_field = store.kind.lead_field
    if not gallery_type:
        return []

    owner_id = await resolve_gallery_owner(store, gallery, base)
    existing = await gallery.get_additional_images(gallery_type, owner_id)

    remove_set = {int(image_id) for image_id in (remove_ids or [])}
    kept = [img for img in existing if img.id not in remove_set]
    removed_urls = [img.image_url for img in existing if img.id in remove_set]

    items = [
        {"image_url": img.image_url, "alt_text": img.alt_text or "", "sort_order": idx}
        for idx, img in enumerate(kept)
    ]
    items.extend(
        {"image_url": url, "alt_text": "", "sort_order": len(kept) + idx}
        for idx, url in enumerate(new_urls or [])
    )
    await gallery.replace_additional_image_items(gallery_type, owner_id, items)

    if lead_field and store.kind.lead_from_gallery:
        current = getattr(base, lead_field)
        lead = (lead_url or "").strip() or None
        if lead is None:
            if not current or current in removed_urls:
                lead = items[0]["image_url"] if items else None
            else:
                lead = current
        await set_group_lead(store, base, lead)

    return removed_urls
