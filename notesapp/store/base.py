"""
Notes Backend: Abstract Note Store Interface
============================================

What:  Abstract base class defining the persistence contract for notes.
How:   Concrete stores inherit from NoteStore and implement every method.
       NoteService receives a store through its constructor and never knows
       which implementation it talks to.
Who:   Implemented by SqlNoteStore; replaced by AsyncMock doubles in tests.
"""

from abc import ABC, abstractmethod
from typing import Iterable, Optional

from notesapp.domain import Note, NoteSlice, NoteTag


class NoteStore(ABC):
    """
    Durable keyed storage for note records.

    Contract:
        - Ids are assigned by the store on insert and never change.
        - Tags are returned as a set, never None.
        - Failures of the backing storage propagate unchanged; stores do not
          retry on behalf of the caller.
    """

    @abstractmethod
    async def insert(self, note: Note) -> Note:
        """
        Persist a new note and assign its id.

        Returns:
            The stored record, with `id` set.
        """
        ...

    @abstractmethod
    async def replace(self, note: Note) -> Note:
        """
        Overwrite title, text and tags of the note with `note.id`.

        `created_date` is part of the record but callers pass the stored
        value back unchanged.

        Raises:
            NotFoundError: No note with that id exists.
        """
        ...

    @abstractmethod
    async def find_by_id(self, note_id: str) -> Optional[Note]:
        """Return the note with `note_id`, or None."""
        ...

    @abstractmethod
    async def delete_by_id(self, note_id: str) -> None:
        """Remove the note and its tags. Unknown ids are ignored."""
        ...

    @abstractmethod
    async def find_filtered(
        self,
        tags: Optional[Iterable[NoteTag]],
        page: int,
        size: int,
    ) -> NoteSlice:
        """
        One page of notes, newest first.

        Args:
            tags: Match-any filter. None or empty means no filtering.
            page: Zero-based page index.
            size: Page size (> 0).

        Returns:
            NoteSlice whose `total` counts every matching note, not just the
            ones on this page. Pages past the end yield an empty list.
        """
        ...
