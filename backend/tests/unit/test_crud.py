"""
Unit tests for entry CRUD operations.

Tests database operations for creating, reading, updating, deleting
and listing entries.
"""

import logging
from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import crud
import pytest
from domain.exceptions import EntryNotFoundError
from schemas.entries import BatchUpdateItem, EntryCreate, EntryUpdate
from sqlalchemy.exc import OperationalError

# Clock value for writes made after the fixtures were created
LATER = datetime(2099, 1, 1, tzinfo=timezone.utc)


def _naive(dt: datetime) -> datetime:
    """SQLite hands timestamps back without tzinfo; compare everything as naive UTC."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


class TestEntryCRUD:
    """Tests for single-entry operations."""

    @pytest.mark.crud
    async def test_create_entry(self, test_db):
        """Test creating an entry assigns an id and timestamps."""
        entry = await crud.create_entry(
            test_db,
            EntryCreate(title="First Episode", speaker="Host", key_takeaways=["One", "Two"]),
        )

        assert entry.id is not None
        assert entry.title == "First Episode"
        assert entry.key_takeaways == ["One", "Two"]
        assert entry.strengths == []
        assert entry.notes == ""
        assert entry.created_at is not None
        assert entry.updated_at == entry.created_at

    @pytest.mark.crud
    async def test_ids_are_unique(self, test_db):
        """Test the store assigns distinct ids."""
        first = await crud.create_entry(test_db, EntryCreate(title="A"))
        second = await crud.create_entry(test_db, EntryCreate(title="B"))

        assert first.id != second.id

    @pytest.mark.crud
    async def test_get_entry(self, test_db, sample_entry):
        """Test fetching an entry by id."""
        entry = await crud.get_entry(test_db, sample_entry.id)

        assert entry is not None
        assert entry.title == "Building a Business with AI"
        assert entry.tags == ["Business", "AI & Technology"]

    @pytest.mark.crud
    async def test_get_nonexistent_entry(self, test_db):
        """Test fetching a missing entry returns None."""
        assert await crud.get_entry(test_db, 99999) is None

    @pytest.mark.crud
    async def test_update_entry_merges_fields(self, test_db, sample_entry):
        """Test a partial update only touches the fields it carries."""
        original_created = _naive(sample_entry.created_at)
        original_updated = _naive(sample_entry.updated_at)

        with patch("crud.entries._utcnow", return_value=LATER):
            updated = await crud.update_entry(test_db, sample_entry.id, EntryUpdate(title="Renamed", tags=["Money"]))

        assert updated.title == "Renamed"
        assert updated.tags == ["Money"]
        assert updated.speaker == "Alex Hormozi"
        assert updated.key_takeaways == ["Start with the offer", "Price on value"]
        assert _naive(updated.created_at) == original_created
        assert _naive(updated.updated_at) > original_updated
        assert _naive(updated.updated_at) == _naive(LATER)

    @pytest.mark.crud
    async def test_update_entry_with_null_list(self, test_db, sample_entry):
        """Test an explicit null list is stored as an empty list."""
        updated = await crud.update_entry(test_db, sample_entry.id, EntryUpdate(social_media_hooks=None))

        assert updated.social_media_hooks == []

    @pytest.mark.crud
    async def test_update_nonexistent_entry(self, test_db):
        """Test updating a missing entry returns None."""
        assert await crud.update_entry(test_db, 99999, EntryUpdate(title="x")) is None

    @pytest.mark.crud
    async def test_delete_entry(self, test_db, sample_entry):
        """Test deleting an entry."""
        assert await crud.delete_entry(test_db, sample_entry.id) is True
        assert await crud.get_entry(test_db, sample_entry.id) is None

    @pytest.mark.crud
    async def test_delete_nonexistent_entry(self, test_db):
        """Test deleting a missing entry returns False."""
        assert await crud.delete_entry(test_db, 99999) is False


class TestEntryListing:
    """Tests for listing and counting."""

    @pytest.mark.crud
    async def test_list_newest_first(self, test_db, sample_entries):
        """Test entries are listed by creation time, newest first."""
        entries = await crud.list_entries(test_db)

        assert [e.title for e in entries] == [
            "The Productivity Myth",
            "Deep Work",
            "Pricing Power",
            "Morning Routines",
        ]

    @pytest.mark.crud
    async def test_list_with_limit_and_offset(self, test_db, sample_entries):
        """Test pagination."""
        entries = await crud.list_entries(test_db, limit=2, offset=1)

        assert [e.title for e in entries] == ["Deep Work", "Pricing Power"]

    @pytest.mark.crud
    async def test_list_by_speaker(self, test_db, sample_entries):
        """Test filtering by exact speaker."""
        entries = await crud.get_entries_by_speaker(test_db, "Cal Newport")

        assert [e.title for e in entries] == ["Deep Work"]

    @pytest.mark.crud
    async def test_list_by_date_range(self, test_db):
        """Test filtering by the entry date."""
        await crud.create_entry(test_db, EntryCreate(title="Old", date=datetime(2023, 1, 10)))
        await crud.create_entry(test_db, EntryCreate(title="New", date=datetime(2024, 6, 1)))
        await crud.create_entry(test_db, EntryCreate(title="Undated"))

        entries = await crud.list_entries(test_db, date_from=datetime(2024, 1, 1))
        assert [e.title for e in entries] == ["New"]

        entries = await crud.list_entries(test_db, date_to=datetime(2023, 12, 31))
        assert [e.title for e in entries] == ["Old"]

    @pytest.mark.crud
    async def test_count_entries(self, test_db, sample_entries):
        """Test counting all entries and per speaker."""
        assert await crud.count_entries(test_db) == 4
        assert await crud.count_entries(test_db, speaker="Tim Ferriss") == 1
        assert await crud.count_entries(test_db, speaker="Nobody") == 0

    @pytest.mark.crud
    async def test_get_all_speakers(self, test_db, sample_entries):
        """Test distinct speakers are sorted and blanks are skipped."""
        await crud.create_entry(test_db, EntryCreate(title="No speaker"))
        await crud.create_entry(test_db, EntryCreate(title="Repeat", speaker="Tim Ferriss"))

        speakers = await crud.get_all_speakers(test_db)

        assert speakers == ["Alex Hormozi", "Cal Newport", "Oliver Burkeman", "Tim Ferriss"]

    @pytest.mark.crud
    async def test_get_all_tags(self, test_db, sample_entries):
        """Test distinct tags across entries are sorted and deduplicated."""
        await crud.create_entry(test_db, EntryCreate(title="More", tags=["Business", " Finance ", ""]))

        tags = await crud.get_all_tags(test_db)

        assert tags == ["Business", "Finance", "Productivity"]

    @pytest.mark.crud
    async def test_empty_store(self, test_db):
        """Test listing helpers on an empty store."""
        assert await crud.list_entries(test_db) == []
        assert await crud.get_all_speakers(test_db) == []
        assert await crud.get_all_tags(test_db) == []

    @pytest.mark.crud
    @pytest.mark.parametrize("facet", [crud.get_all_speakers, crud.get_all_tags])
    async def test_facets_degrade_on_database_error(self, facet, caplog):
        """Test a failing facet query logs a warning and returns an empty list."""
        db = AsyncMock()
        db.execute.side_effect = OperationalError("SELECT", {}, Exception("no such table: entries"))

        with caplog.at_level(logging.WARNING, logger="EntryCRUD"):
            result = await facet(db)

        assert result == []
        db.execute.assert_awaited_once()
        warnings = [r for r in caplog.records if r.name == "EntryCRUD" and r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert "no such table" in warnings[0].getMessage()


class TestBatchUpdate:
    """Tests for all-or-nothing batch updates."""

    @pytest.mark.crud
    async def test_batch_update(self, test_db, sample_entries):
        """Test every item in the batch is applied."""
        first, second = sample_entries[0], sample_entries[1]

        count = await crud.batch_update_entries(
            test_db,
            [
                BatchUpdateItem(id=first.id, update=EntryUpdate(notes="reviewed")),
                BatchUpdateItem(id=second.id, update=EntryUpdate(tags=["Pricing"])),
            ],
        )

        assert count == 2
        assert (await crud.get_entry(test_db, first.id)).notes == "reviewed"
        assert (await crud.get_entry(test_db, second.id)).tags == ["Pricing"]

    @pytest.mark.crud
    async def test_batch_update_refreshes_updated_at(self, test_db, sample_entries):
        """Test every entry in a batch gets a new updated_at and keeps its created_at."""
        first, second = sample_entries[0], sample_entries[1]
        before = {entry.id: (_naive(entry.created_at), _naive(entry.updated_at)) for entry in (first, second)}

        with patch("crud.entries._utcnow", return_value=LATER):
            await crud.batch_update_entries(
                test_db,
                [
                    BatchUpdateItem(id=first.id, update=EntryUpdate(notes="reviewed")),
                    BatchUpdateItem(id=second.id, update=EntryUpdate(tags=["Pricing"])),
                ],
            )

        for entry_id, (created, updated) in before.items():
            entry = await crud.get_entry(test_db, entry_id)
            await test_db.refresh(entry)
            assert _naive(entry.created_at) == created
            assert _naive(entry.updated_at) > updated
            assert _naive(entry.updated_at) == _naive(LATER)

    @pytest.mark.crud
    async def test_batch_update_unknown_id_changes_nothing(self, test_db, sample_entries):
        """Test one missing id aborts the whole batch."""
        first = sample_entries[0]

        with pytest.raises(EntryNotFoundError) as exc_info:
            await crud.batch_update_entries(
                test_db,
                [
                    BatchUpdateItem(id=first.id, update=EntryUpdate(notes="should not stick")),
                    BatchUpdateItem(id=99999, update=EntryUpdate(notes="missing")),
                ],
            )

        assert exc_info.value.entry_id == 99999
        await test_db.refresh(first)
        assert first.notes == ""

    @pytest.mark.crud
    async def test_batch_update_empty(self, test_db):
        """Test an empty batch is a no-op."""
        assert await crud.batch_update_entries(test_db, []) == 0
