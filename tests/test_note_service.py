"""
Notes Backend: Note Service Unit Tests
======================================

What:  Tests for NoteService business rules.
How:   The store is an AsyncMock (no database); assertions look at what the
       service hands to the store and what it returns.

What we test:
    ✅ Create assigns created_date and normalizes missing tags
    ✅ Update keeps id and created_date, overwrites title/text/tags
    ✅ NotFound on update/delete/get/stats of unknown ids
    ✅ Listing passes the filter through and maps to summaries
    ✅ Word statistics ordering
"""

import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from notesapp.domain import NoteSlice, NoteTag, WordCount
from notesapp.exceptions import NotFoundError
from notesapp.schemas.note import NoteRequest
from notesapp.services.note_service import NoteService

CREATED_AT = datetime(2025, 2, 27, tzinfo=timezone.utc)


async def _echo_with_id(note):
    # Stored copy; the argument keeps the id it was called with
    return dataclasses.replace(note, id=note.id or "123")


class TestNoteServiceCreateOrUpdate:
    """Tests for the create/update merge rule."""

    @pytest.mark.asyncio
    async def test_creates_new_note_when_id_missing(self, mock_store):
        mock_store.insert.side_effect = _echo_with_id
        service = NoteService(mock_store)
        before = datetime.now(timezone.utc)

        result = await service.create_or_update(
            NoteRequest(title="Title", text="Text", tags={NoteTag.BUSINESS})
        )

        mock_store.insert.assert_awaited_once()
        mock_store.replace.assert_not_awaited()
        mock_store.find_by_id.assert_not_awaited()

        to_save = mock_store.insert.call_args.args[0]
        assert to_save.id is None
        assert to_save.title == "Title"
        assert to_save.text == "Text"
        assert to_save.tags == {NoteTag.BUSINESS}
        assert before <= to_save.created_date <= datetime.now(timezone.utc)

        assert result.id == "123"
        assert result.title == "Title"
        assert result.text == "Text"
        assert result.tags == {NoteTag.BUSINESS}
        assert result.created_date == to_save.created_date

    @pytest.mark.asyncio
    async def test_missing_tags_become_empty_set(self, mock_store):
        mock_store.insert.side_effect = _echo_with_id
        service = NoteService(mock_store)

        result = await service.create_or_update(NoteRequest(title="Title", text="Text"))

        to_save = mock_store.insert.call_args.args[0]
        assert to_save.tags == set()
        assert result.tags == set()

    @pytest.mark.asyncio
    async def test_updates_existing_note_keeping_identity(self, mock_store, note_factory):
        existing = note_factory(
            note_id="123", title="Old", text="Old text", tags={NoteTag.PERSONAL}
        )
        mock_store.find_by_id.return_value = existing
        mock_store.replace.side_effect = _echo_with_id
        service = NoteService(mock_store)

        result = await service.create_or_update(
            NoteRequest(id="123", title="Updated", text="Updated text", tags={NoteTag.IMPORTANT})
        )

        mock_store.find_by_id.assert_awaited_once_with("123")
        mock_store.insert.assert_not_awaited()
        replaced = mock_store.replace.call_args.args[0]
        assert replaced.id == "123"
        assert replaced.created_date == CREATED_AT

        assert result.id == "123"
        assert result.title == "Updated"
        assert result.text == "Updated text"
        assert result.tags == {NoteTag.IMPORTANT}
        assert result.created_date == CREATED_AT

    @pytest.mark.asyncio
    async def test_update_without_tags_clears_them(self, mock_store, note_factory):
        mock_store.find_by_id.return_value = note_factory(tags={NoteTag.PERSONAL, NoteTag.BUSINESS})
        mock_store.replace.side_effect = _echo_with_id
        service = NoteService(mock_store)

        result = await service.create_or_update(NoteRequest(id="123", title="T", text="X"))

        assert mock_store.replace.call_args.args[0].tags == set()
        assert result.tags == set()

    @pytest.mark.asyncio
    async def test_update_of_missing_note_raises_not_found(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = NoteService(mock_store)

        with pytest.raises(NotFoundError, match="Note with id missing not found"):
            await service.create_or_update(NoteRequest(id="missing", title="Title", text="Text"))

        mock_store.replace.assert_not_awaited()
        mock_store.insert.assert_not_awaited()


class TestNoteServiceDeleteAndGet:
    """Tests for delete and get_by_id."""

    @pytest.mark.asyncio
    async def test_delete_existing_note(self, mock_store, sample_note):
        mock_store.find_by_id.return_value = sample_note
        service = NoteService(mock_store)

        await service.delete("123")

        mock_store.find_by_id.assert_awaited_once_with("123")
        mock_store.delete_by_id.assert_awaited_once_with("123")

    @pytest.mark.asyncio
    async def test_delete_missing_note_raises_not_found(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = NoteService(mock_store)

        with pytest.raises(NotFoundError):
            await service.delete("missing")

        mock_store.delete_by_id.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_get_by_id_returns_details(self, mock_store, sample_note):
        mock_store.find_by_id.return_value = sample_note
        service = NoteService(mock_store)

        result = await service.get_by_id("123")

        assert result.id == "123"
        assert result.title == "Title"
        assert result.text == "Text"
        assert result.tags == {NoteTag.PERSONAL}
        assert result.created_date == CREATED_AT

    @pytest.mark.asyncio
    async def test_get_by_id_missing_raises_not_found(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = NoteService(mock_store)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_by_id("missing")

        assert exc_info.value.message == "Note with id missing not found"


class TestNoteServiceList:
    """Tests for the paginated listing."""

    @pytest.mark.asyncio
    async def test_list_without_tags_passes_no_filter(self, mock_store, note_factory):
        first = note_factory(note_id="2", title="Second", created_date=CREATED_AT + timedelta(days=1))
        second = note_factory(note_id="1", title="First", created_date=CREATED_AT)
        mock_store.find_filtered.return_value = NoteSlice(notes=[first, second], total=2)
        service = NoteService(mock_store)

        result = await service.list(None, 0, 20)

        mock_store.find_filtered.assert_awaited_once_with(None, 0, 20)
        assert result.total_elements == 2
        assert [item.title for item in result.content] == ["Second", "First"]
        assert result.content[0].created_date == CREATED_AT + timedelta(days=1)

    @pytest.mark.asyncio
    async def test_list_empty_tag_list_means_no_filter(self, mock_store):
        mock_store.find_filtered.return_value = NoteSlice(notes=[], total=0)
        service = NoteService(mock_store)

        await service.list([], 0, 20)

        mock_store.find_filtered.assert_awaited_once_with(None, 0, 20)

    @pytest.mark.asyncio
    async def test_list_with_tags_passes_filter(self, mock_store, note_factory):
        note = note_factory(title="Business", tags={NoteTag.BUSINESS})
        mock_store.find_filtered.return_value = NoteSlice(notes=[note], total=1)
        service = NoteService(mock_store)

        result = await service.list([NoteTag.BUSINESS], 0, 10)

        mock_store.find_filtered.assert_awaited_once_with({NoteTag.BUSINESS}, 0, 10)
        assert result.total_elements == 1
        assert result.content[0].title == "Business"

    @pytest.mark.asyncio
    async def test_total_reflects_all_pages(self, mock_store, note_factory):
        mock_store.find_filtered.return_value = NoteSlice(
            notes=[note_factory(note_id="a"), note_factory(note_id="b")], total=5
        )
        service = NoteService(mock_store)

        result = await service.list(None, 1, 2)

        assert result.total_elements == 5
        assert result.total_pages == 3
        assert result.number == 1
        assert result.number_of_elements == 2
        assert result.first is False
        assert result.last is False

    @pytest.mark.asyncio
    async def test_page_past_the_end_is_empty(self, mock_store):
        mock_store.find_filtered.return_value = NoteSlice(notes=[], total=3)
        service = NoteService(mock_store)

        result = await service.list(None, 10, 20)

        assert result.content == []
        assert result.total_elements == 3
        assert result.empty is True


class TestNoteServiceStats:
    """Tests for word statistics."""

    @pytest.mark.asyncio
    async def test_stats_are_ordered_by_count_then_word(self, mock_store, note_factory):
        mock_store.find_by_id.return_value = note_factory(text="note is just a note!")
        service = NoteService(mock_store)

        stats = await service.get_stats("123")

        assert stats == [
            WordCount("note", 2),
            WordCount("a", 1),
            WordCount("is", 1),
            WordCount("just", 1),
        ]

    @pytest.mark.asyncio
    async def test_stats_are_idempotent(self, mock_store, note_factory):
        mock_store.find_by_id.return_value = note_factory(text="B b a, A! c")
        service = NoteService(mock_store)

        first = await service.get_stats("123")
        second = await service.get_stats("123")

        assert first == second == [WordCount("a", 2), WordCount("b", 2), WordCount("c", 1)]

    @pytest.mark.asyncio
    async def test_stats_of_missing_note_raises_not_found(self, mock_store):
        mock_store.find_by_id.return_value = None
        service = NoteService(mock_store)

        with pytest.raises(NotFoundError):
            await service.get_stats("missing")
