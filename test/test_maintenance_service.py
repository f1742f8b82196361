"""
Tests for the duplicate cleanup and lead image backfill jobs
"""

from datetime import date

import pytest

from app.services.maintenance_service import backfill_lead_images, clean_duplicates


def event_values(lang, slug, title, group_id=None, image_url=None):
    return {
        "lang": lang,
        "slug": slug,
        "title": title,
        "group_id": group_id,
        "event_date": date(2026, 5, 1),
        "location": "Bratislava",
        "image_url": image_url,
    }


class TestCleanDuplicates:
    """Test duplicate cleanup"""

    @pytest.mark.asyncio
    async def test_keeps_first_row_in_listing_order(self, event_store, theme_store):
        """Test that the first row in listing order is kept"""
        older = await event_store.create(event_values("en", "launch", "Launch", "g1"))
        newer = await event_store.create(event_values("en", "launch-2", "Launch", "g1"))
        other_lang = await event_store.create(event_values("sk", "launch", "Launch", "g1"))
        other_title = await event_store.create(event_values("en", "party", "Party", "g1"))

        report = await clean_duplicates([event_store, theme_store])

        assert report == {"event": 1, "theme": 0}
        # events on the same date list newest first
        assert await event_store.get(older.id) is None
        for row in (newer, other_lang, other_title):
            assert await event_store.get(row.id) is not None

    @pytest.mark.asyncio
    async def test_ungrouped_rows_share_one_key(self, event_store):
        """Test that ungrouped rows with the same title are duplicates"""
        await event_store.create(event_values("en", "old", "Old"))
        await event_store.create(event_values("en", "old-2", "Old"))

        report = await clean_duplicates([event_store])

        assert report == {"event": 1}
        assert len(await event_store.list_by_lang("en")) == 1

    @pytest.mark.asyncio
    async def test_team_rows_compare_by_name(self, team_store):
        """Test that team rows are compared by name"""
        await team_store.create({"lang": "en", "group_id": "t1", "name": "Eva", "role": "Chair"})
        await team_store.create({"lang": "en", "group_id": "t1", "name": "Eva", "role": "Member"})

        assert await clean_duplicates([team_store]) == {"team": 1}


class TestBackfillLeadImages:
    """Test lead image backfill"""

    @pytest.mark.asyncio
    async def test_copies_lead_to_variants_without_one(self, event_store):
        """Test that variants without a lead image get the group's lead"""
        en = await event_store.create(event_values("en", "launch", "Launch", "g1", "/uploads/events/a.jpg"))
        sk = await event_store.create(event_values("sk", "launch", "Launch", "g1"))
        hu = await event_store.create(event_values("hu", "launch", "Launch", "g1"))

        assert await backfill_lead_images(event_store) == 2
        assert {row.image_url for row in (en, sk, hu)} == {"/uploads/events/a.jpg"}

    @pytest.mark.asyncio
    async def test_conflicting_leads_pick_the_greatest(self, event_store):
        """Test that conflicting leads resolve to the greatest URL"""
        await event_store.create(event_values("en", "launch", "Launch", "g1", "/uploads/events/a.jpg"))
        await event_store.create(event_values("sk", "launch", "Launch", "g1", "/uploads/events/b.jpg"))
        hu = await event_store.create(event_values("hu", "launch", "Launch", "g1"))

        await backfill_lead_images(event_store)

        assert hu.image_url == "/uploads/events/b.jpg"

    @pytest.mark.asyncio
    async def test_second_run_changes_nothing(self, event_store):
        """Test that a second run changes nothing"""
        await event_store.create(event_values("en", "launch", "Launch", "g1", "/uploads/events/a.jpg"))
        await event_store.create(event_values("sk", "launch", "Launch", "g1"))

        assert await backfill_lead_images(event_store) == 1
        assert await backfill_lead_images(event_store) == 0

    @pytest.mark.asyncio
    async def test_groups_without_any_lead_are_left_alone(self, event_store):
        """Test that groups without any lead are left alone"""
        await event_store.create(event_values("en", "launch", "Launch", "g1"))
        await event_store.create(event_values("sk", "launch", "Launch", "g1"))

        assert await backfill_lead_images(event_store) == 0

    @pytest.mark.asyncio
    async def test_kind_without_lead_field(self, document_store):
        """Test that a kind without a lead field has nothing to backfill"""
        assert await backfill_lead_images(document_store) == 0
