"""
Maintenance Service

Manually triggered repair jobs for content groups. Each job runs inside the
calling request and is not resumable; a failure halfway leaves the rows
processed so far changed.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

from app.i18n import SUPPORTED_LANGUAGES
from app.services.persistence import ContentStore  # noqa: TC001

logger = logging.getLogger(__name__)

# Kinds whose duplicates are cleaned, and kinds with a lead image to backfill
DEDUPLICATED_KINDS = ("event", "news", "theme", "team", "document")
LEAD_IMAGE_KINDS = ("event", "theme", "news")


async def clean_duplicates(stores: Iterable[ContentStore]) -> dict[str, int]:
    """
    Delete rows repeating an earlier row's (group, title) within one language.

    The first row in listing order is kept. Returns the number of deleted
    rows per kind.
    """
    report: dict[str, int] = {}
    for store in stores:
        kind = store.kind
        deleted = 0
        for lang in SUPPORTED_LANGUAGES:
            seen: set[tuple[str, str]] = set()
            for row in await store.list_by_lang(lang):
                key = (row.group_id or "null", kind.title_of(row) or "notitle")
                if key not in seen:
                    seen.add(key)
                    continue
                await store.delete(row.id)
                deleted += 1
                logger.info("Deleted duplicate %s %s (%s)", kind.name, row.id, kind.title_of(row))
        report[kind.name] = deleted
    logger.info("Duplicate cleanup finished: %s", report)
    return report


async def backfill_lead_images(store: ContentStore) -> int:
    """
    Copy a group's lead image to its variants that have none.

    When variants disagree, the greatest URL wins so repeated runs pick the
    same one. Returns the number of updated rows.
    """
    lead_field = store.kind.lead_field
    if not lead_field:
        return 0

    groups: dict[str, list[Any]] = {}
    for lang in SUPPORTED_LANGUAGES:
        for row in await store.list_by_lang(lang):
            if row.group_id:
                groups.setdefault(row.group_id, []).append(row)

    updated = 0
    for rows in groups.values():
        leads = [getattr(row, lead_field) for row in rows if getattr(row, lead_field)]
        if not leads:
            continue
        lead = max(leads)
        for row in rows:
            if not getattr(row, lead_field):
                await store.update(row.id, {lead_field: lead})
                updated += 1

    if updated:
        logger.info("Backfilled lead image on %d %s rows", updated, store.kind.name)
    return updated
