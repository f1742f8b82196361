"""
Tests for variant resolution and gallery ownership
"""

from datetime import date

import pytest
from sqlalchemy.exc import OperationalError

from app.exceptions import ContentNotFoundError
from app.i18n import SUPPORTED_LANGUAGES
from app.services.grouping_service import (
    collapse_groups,
    find_public_item,
    group_key,
    list_resolved,
    resolve_gallery_owner,
    resolve_variant,
    variants_by_lang,
)


async def make_event(store, lang, title, group_id=None, slug=None):
    return await store.create(
        {
            "lang": lang,
            "group_id": group_id,
            "slug": slug or f"{title.lower()}-{lang}",
            "title": title,
            "event_date": date(2026, 5, 1),
            "location": "Bratislava",
        }
    )


class TestResolveVariant:
    """Test resolving the variant for a language"""

    @pytest.mark.asyncio
    async def test_ungrouped_item_is_returned_unchanged(self, event_store):
        """Test that an ungrouped item is returned as is"""
        item = await make_event(event_store, "sk", "Legacy")
        assert await resolve_variant(event_store, item, "en") is item

    @pytest.mark.asyncio
    async def test_requested_language_hit(self, event_store):
        """Test that the requested language variant is returned"""
        en = await make_event(event_store, "en", "Launch", "g1")
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        assert (await resolve_variant(event_store, en, "sk")).id == sk.id

    @pytest.mark.asyncio
    async def test_falls_back_to_english_first(self, event_store):
        """Test that a missing language falls back to en first"""
        en = await make_event(event_store, "en", "Launch", "g1")
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        assert (await resolve_variant(event_store, sk, "hu")).id == en.id

    @pytest.mark.asyncio
    async def test_falls_back_past_missing_english(self, event_store):
        """Test that the fallback skips a missing en variant"""
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        hu = await make_event(event_store, "hu", "Indítás", "g1")
        assert (await resolve_variant(event_store, hu, "en")).id == sk.id

    @pytest.mark.asyncio
    async def test_fallback_totality(self, event_store):
        """Test that every requested language resolves to some row of a non-empty group"""
        only = await make_event(event_store, "hu", "Indítás", "g1")
        for lang in SUPPORTED_LANGUAGES + ("de",):
            assert (await resolve_variant(event_store, only, lang)).id == only.id

    @pytest.mark.asyncio
    async def test_none_passes_through(self, event_store):
        """Test that None resolves to None"""
        assert await resolve_variant(event_store, None, "en") is None


class TestCollapseGroups:
    """Test collapsing rows to one per group"""

    def test_first_row_per_group_wins(self):
        """Test that the first row of each group is kept"""
        class Row:
            def __init__(self, id, group_id):
                self.id = id
                self.group_id = group_id

        rows = [Row(1, "a"), Row(2, None), Row(3, "a"), Row(4, "b"), Row(5, None)]
        assert [row.id for row in collapse_groups(rows)] == [1, 2, 4, 5]
        assert group_key(rows[1]) == "single_2"


class TestListingAndLookup:
    """Test listings and public lookups"""

    @pytest.mark.asyncio
    async def test_list_resolved_shows_each_item_once_in_language(self, event_store):
        """Test that a listing shows each item once in the language"""
        await make_event(event_store, "en", "Launch", "g1")
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        hu_only = await make_event(event_store, "hu", "Csak magyar", "g2")

        rows = await list_resolved(event_store, "sk")

        assert sorted(row.id for row in rows) == sorted([sk.id, hu_only.id])

    @pytest.mark.asyncio
    async def test_variants_by_lang(self, event_store):
        """Test mapping a group's variants by language"""
        en = await make_event(event_store, "en", "Launch", "g1")
        hu = await make_event(event_store, "hu", "Indítás", "g1")

        variants = await variants_by_lang(event_store, en)

        assert variants["en"].id == en.id
        assert variants["sk"] is None
        assert variants["hu"].id == hu.id

    @pytest.mark.asyncio
    async def test_variants_by_lang_for_legacy_row(self, event_store):
        """Test that an ungrouped row maps to its own language only"""
        legacy = await make_event(event_store, "sk", "Legacy")
        variants = await variants_by_lang(event_store, legacy)
        assert variants == {"en": None, "sk": legacy, "hu": None}

    @pytest.mark.asyncio
    async def test_find_by_slug_in_other_language(self, event_store):
        """Test that a slug from another language finds the item"""
        en = await make_event(event_store, "en", "Launch", "g1", slug="launch")
        sk = await make_event(event_store, "sk", "Spustenie", "g1", slug="spustenie")

        item = await find_public_item(event_store, "sk", "launch")
        assert item.id == sk.id

        item = await find_public_item(event_store, "en", "spustenie")
        assert item.id == en.id

    @pytest.mark.asyncio
    async def test_find_by_id(self, event_store):
        """Test finding an item by numeric id"""
        en = await make_event(event_store, "en", "Launch", "g1")
        assert (await find_public_item(event_store, "en", str(en.id))).id == en.id

    @pytest.mark.asyncio
    async def test_gid_pins_the_group(self, event_store):
        """Test that a group id picks between items sharing a slug"""
        await make_event(event_store, "en", "Launch", "g1", slug="launch")
        other = await make_event(event_store, "en", "Launch", "g2", slug="launch-2")

        item = await find_public_item(event_store, "en", "launch", gid="g2")
        assert item.id == other.id

    @pytest.mark.asyncio
    async def test_missing_item_raises_not_found(self, event_store):
        """Test that a missing item raises ContentNotFoundError"""
        with pytest.raises(ContentNotFoundError):
            await find_public_item(event_store, "en", "nothing-here")


class TestGalleryOwner:
    """Test choosing the gallery owner of a group"""

    @pytest.mark.asyncio
    async def test_variant_with_images_owns_the_gallery(self, event_store, gallery_store):
        """Test that the variant holding images owns the gallery even when en exists"""
        en = await make_event(event_store, "en", "Launch", "g1")
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        hu = await make_event(event_store, "hu", "Indítás", "g1")
        await gallery_store.add_additional_images("event", sk.id, ["/uploads/events/a.jpg", "/uploads/events/b.jpg"])

        for item in (en, sk, hu):
            assert await resolve_gallery_owner(event_store, gallery_store, item) == sk.id

    @pytest.mark.asyncio
    async def test_fresh_gallery_attaches_to_english(self, event_store, gallery_store):
        """Test that a group without images attaches its gallery to en"""
        en = await make_event(event_store, "en", "Launch", "g1")
        hu = await make_event(event_store, "hu", "Indítás", "g1")
        assert await resolve_gallery_owner(event_store, gallery_store, hu) == en.id

    @pytest.mark.asyncio
    async def test_fresh_gallery_without_english(self, event_store, gallery_store):
        """Test that a group without en attaches its gallery to the next language"""
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        hu = await make_event(event_store, "hu", "Indítás", "g1")
        assert await resolve_gallery_owner(event_store, gallery_store, hu) == sk.id

    @pytest.mark.asyncio
    async def test_ungrouped_item_owns_its_gallery(self, event_store, gallery_store):
        """Test that an ungrouped item owns its own gallery"""
        legacy = await make_event(event_store, "sk", "Legacy")
        assert await resolve_gallery_owner(event_store, gallery_store, legacy) == legacy.id

    @pytest.mark.asyncio
    async def test_database_errors_fall_back_to_item(self, event_store, gallery_store, monkeypatch):
        """Test that database errors fall back to the item"""
        sk = await make_event(event_store, "sk", "Spustenie", "g1")
        await make_event(event_store, "en", "Launch", "g1")

        async def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(gallery_store, "get_additional_images", broken)
        assert await resolve_gallery_owner(event_store, gallery_store, sk) == sk.id

    @pytest.mark.asyncio
    async def test_any_error_falls_back_to_item(self, event_store, gallery_store, monkeypatch):
        """Test that errors other than database errors also fall back to the item"""
        sk = await make_event(event_store, "sk", "Spustenie", "g1")

        async def broken(*args, **kwargs):
            raise RuntimeError("storage misconfigured")

        monkeypatch.setattr(gallery_store, "get_additional_images", broken)
        assert await resolve_gallery_owner(event_store, gallery_store, sk) == sk.id

    @pytest.mark.asyncio
    async def test_session_usable_after_failed_lookup(self, event_store, gallery_store, monkeypatch):
        """Test that a failed lookup leaves the transaction usable for later writes"""
        en = await make_event(event_store, "en", "Launch", "g1")

        async def broken(*args, **kwargs):
            raise OperationalError("SELECT", {}, Exception("connection lost"))

        monkeypatch.setattr(gallery_store, "get_additional_images", broken)
        assert await resolve_gallery_owner(event_store, gallery_store, en) == en.id
        monkeypatch.undo()

        hu = await make_event(event_store, "hu", "Indítás", "g1")
        assert {row.id for row in await event_store.list_group("g1")} == {en.id, hu.id}
        assert await resolve_gallery_owner(event_store, gallery_store, hu) == en.id
