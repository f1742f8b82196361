"""
Replication Service

Fans one admin submission out into per-language rows of a content group.

A submission rarely fills every language. The first filled language in
SUPPORTED_LANGUAGES order is the source language; its values fill the gaps
of the others. Values already stored in a language are never replaced by
replicated ones, only by values posted for that language.

Functions:
    create_group   — create every language variant of a new item
    update_group   — merge an edit into an existing group
    delete_group   — remove every variant of a group
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from functools import partial
from typing import Any

from app.exceptions import ErrorCode, ValidationError
from app.i18n import DEFAULT_LANGUAGE, SUPPORTED_LANGUAGES
from app.schemas.multilingual import MultilingualForm, is_blank
from app.services.persistence import ContentStore  # noqa: TC001
from app.utils.slugify import slugify, unique_slug


@dataclass
class CreatedGroup:
    group_id: str
    record_ids: dict[str, int] = field(default_factory=dict)


@dataclass
class UpdateResult:
    group_id: str
    updated: dict[str, int] = field(default_factory=dict)
    created: dict[str, int] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


def _validate(store: ContentStore, form: MultilingualForm, filled: list[str]) -> None:
    kind = store.kind
    if kind.title_shared:
        if is_blank(form.shared.get(kind.title_field)):
            raise ValidationError("missing name", field=kind.title_field, error_code=ErrorCode.MISSING_NAME)
    elif not filled:
        raise ValidationError("missing title", field=kind.title_field, error_code=ErrorCode.MISSING_TITLE)

    missing = [name for name in kind.required_shared if is_blank(form.shared.get(name))]
    if missing:
        raise ValidationError(
            "missing shared fields",
            details={"fields": missing},
            error_code=ErrorCode.MISSING_SHARED_FIELDS,
        )


async def _new_slug(store: ContentStore, lang: str, source: str, exclude_id: int | None = None) -> str:
    exists = partial(store.slug_exists, exclude_id=exclude_id)
    return await unique_slug(lang, slugify(source), exists, fallback=store.kind.slug_fallback)


async def create_group(
    store: ContentStore,
    form: MultilingualForm,
    lang: str = DEFAULT_LANGUAGE,
) -> CreatedGroup:
    """
    Create a new content group from one submission.

    Every supported language gets a row; blank fields are copied from the
    source language. Kinds whose title is shared (team members) may post no
    translated text at all, in which case only the ``lang`` row is created.

    Raises:
        ValidationError: no title (or name) was posted, or a required
            shared field is missing.
        SlugExhaustedError: no free slug was found.
    """
    kind = store.kind
    filled = form.filled_languages(kind.filled_fields)
    _validate(store, form, filled)

    source_values = form.posted(filled[0]) if filled else {}
    languages = SUPPORTED_LANGUAGES if filled else (lang,)

    created = CreatedGroup(group_id=str(uuid.uuid4()))
    for code in languages:
        posted = form.posted(code)
        values = {name: posted.get(name) or source_values.get(name) or None for name in kind.translatable}

        row_values: dict[str, Any] = {"lang": code, "group_id": created.group_id}
        row_values.update(kind.column_values(values))
        row_values.update(form.shared)
        if kind.has_slug:
            row_values["slug"] = await _new_slug(store, code, form.slug(code) or values[kind.title_field])

        row = await store.create(row_values)
        created.record_ids[code] = row.id
    return created


async def update_group(store: ContentStore, base: Any, form: MultilingualForm) -> UpdateResult:
    """
    Merge an edit of ``base`` into its group.

    Per language, a posted value wins. A field that was not posted is filled
    from the source language only while the stored value is empty. Rows
    with nothing to change are not written. Missing variants are created
    when they end up with content. Shared fields are written to every
    variant afterwards.

    Raises:
        ValidationError: a team member edit without a name.
        SlugExhaustedError: no free slug was found.
    """
    kind = store.kind
    if kind.title_shared and is_blank(form.shared.get(kind.title_field)):
        raise ValidationError("missing name", field=kind.title_field, error_code=ErrorCode.MISSING_NAME)

    group_id = base.group_id
    if not group_id:
        group_id = str(uuid.uuid4())
        await store.set_group(base.id, group_id)
        base.group_id = group_id

    posted_langs = form.filled_languages(kind.translatable)
    source_values = form.posted(posted_langs[0]) if posted_langs else {}
    base_values = kind.translated_values(base)
    result = UpdateResult(group_id=group_id)

    for code in SUPPORTED_LANGUAGES:
        existing = await store.get_by_group_and_lang(group_id, code)
        posted = form.posted(code)
        current = kind.translated_values(existing)

        changes: dict[str, Any] = {}
        for name in kind.translatable:
            if posted.get(name):
                changes[name] = posted[name]
            elif is_blank(current.get(name)) and source_values.get(name):
                changes[name] = source_values[name]

        if existing is not None:
            changes = {name: value for name, value in changes.items() if value != current.get(name)}
            values = kind.column_values({**current, **changes}) if kind.fields_column else dict(changes)
            posted_slug = slugify(form.slug(code)) if kind.has_slug else ""
            if posted_slug and posted_slug != existing.slug:
                values["slug"] = await _new_slug(store, code, posted_slug, exclude_id=existing.id)
            if not changes and "slug" not in values:
                result.skipped.append(code)
                continue
            await store.update(existing.id, values)
            result.updated[code] = existing.id
            continue

        merged = {
            name: changes.get(name) or source_values.get(name) or base_values.get(name) or None
            for name in kind.translatable
        }
        if all(is_blank(merged.get(name)) for name in kind.filled_fields):
            result.skipped.append(code)
            continue

        row_values: dict[str, Any] = {"lang": code, "group_id": group_id}
        for name in kind.shared:
            row_values[name] = getattr(base, name)
        if kind.lead_field:
            row_values[kind.lead_field] = getattr(base, kind.lead_field)
        row_values.update(kind.column_values(merged))
        if kind.has_slug:
            slug_source = form.slug(code) or base.slug or merged[kind.title_field]
            row_values["slug"] = await _new_slug(store, code, slug_source)

        row = await store.create(row_values)
        result.created[code] = row.id

    if form.shared:
        await store.update_shared_for_group(group_id, dict(form.shared))
    return result


async def delete_group(store: ContentStore, base: Any) -> int:
    """Delete every variant sharing ``base``'s group; ungrouped rows go alone."""
    if base.group_id:
        return await store.delete_group(base.group_id)
    return 1 if await store.delete(base.id) else 0
