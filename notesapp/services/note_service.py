"""
Notes Backend: Note Service (Business Logic)
============================================

What:  The note lifecycle rules and derived views.
How:   Works only against the NoteStore contract; the concrete store is passed
       to the constructor (see notesapp.dependencies).
Who:   Called by the /api/notes route handlers.

Operations:
    create_or_update  new note (no id) or full overwrite of an existing one
    delete            fetch-then-delete; unknown ids raise NotFoundError
    get_by_id         detail view
    list              newest-first page of summaries, optional match-any tags
    get_stats         word frequencies of the note text

NoteService holds no mutable state. Concurrent writes to the same note are
last-writer-wins; store errors propagate unchanged.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from notesapp.domain import Note, NoteTag, WordCount
from notesapp.exceptions import NotFoundError
from notesapp.schemas.note import (
    NoteDetailsResponse,
    NoteRequest,
    NoteSummaryResponse,
    PageResponse,
)
from notesapp.services.word_stats import word_frequencies
from notesapp.store.base import NoteStore

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note operations.

    Args:
        store: Persistence backend implementing NoteStore.
    """

    def __init__(self, store: NoteStore):
        self.store = store

    async def create_or_update(self, request: NoteRequest) -> NoteDetailsResponse:
        """
        Save a note.

        Merge rule:
            - request.id is None → new Note with created_date = now (UTC)
            - request.id is set  → the stored Note; id and created_date kept
            - either way title, text and tags come from the request, and
              missing tags become an empty set

        Raises:
            NotFoundError: request.id does not exist.
        """
        if request.id is None:
            logger.info("Creating new note with title='%s'", request.title)
            note = Note(created_date=datetime.now(timezone.utc))
        else:
            logger.info("Updating note id='%s' with title='%s'", request.id, request.title)
            note = await self._find_or_raise(request.id)

        note.title = request.title
        note.text = request.text
        note.tags = set(request.tags or ())

        if note.id is None:
            saved = await self.store.insert(note)
        else:
            saved = await self.store.replace(note)

        logger.debug("Note saved id='%s'", saved.id)
        return NoteDetailsResponse.from_note(saved)

    async def delete(self, note_id: str) -> None:
        logger.info("Deleting note id='%s'", note_id)
        note = await self._find_or_raise(note_id)
        await self.store.delete_by_id(note.id)

    async def get_by_id(self, note_id: str) -> NoteDetailsResponse:
        logger.debug("Fetching note details id='%s'", note_id)
        note = await self._find_or_raise(note_id)
        return NoteDetailsResponse.from_note(note)

    async def list(
        self,
        tags: Optional[Iterable[NoteTag]],
        page: int,
        size: int,
    ) -> PageResponse[NoteSummaryResponse]:
        """
        Page of note summaries, newest first.

        Args:
            tags: Match-any filter; None or empty lists every note.
            page: Zero-based page index. Pages past the end come back empty
                  with the correct total.
            size: Page size.
        """
        tag_filter = set(tags) if tags else None
        logger.debug("Listing notes with tags=%s page=%d size=%d", tag_filter, page, size)

        result = await self.store.find_filtered(tag_filter, page, size)
        return PageResponse[NoteSummaryResponse].create(
            content=[NoteSummaryResponse.from_note(note) for note in result.notes],
            total=result.total,
            page=page,
            size=size,
        )

    async def get_stats(self, note_id: str) -> List[WordCount]:
        """
        Word frequencies of the note text, ordered by count descending and
        then by word ascending.

        Raises:
            NotFoundError: note_id does not exist.
        """
        logger.debug("Calculating stats for note id='%s'", note_id)
        note = await self._find_or_raise(note_id)
        return word_frequencies(note.text)

    async def _find_or_raise(self, note_id: str) -> Note:
        note = await self.store.find_by_id(note_id)
        if note is None:
            logger.warning("Note with id '%s' not found", note_id)
            raise NotFoundError(resource="Note", resource_id=note_id)
        return note
