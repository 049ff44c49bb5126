"""Domain types shared by the store and service layers."""

from notesapp.domain.note import Note, NoteSlice, NoteTag, WordCount

__all__ = ["Note", "NoteSlice", "NoteTag", "WordCount"]
