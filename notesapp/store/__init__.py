# Store package init
"""
Notes Backend: Store Layer
==========================

    - base.py: NoteStore, the persistence contract the service depends on
    - sql.py:  SqlNoteStore, the async SQLAlchemy implementation
"""

from notesapp.store.base import NoteStore
from notesapp.store.sql import SqlNoteStore

__all__ = ["NoteStore", "SqlNoteStore"]
