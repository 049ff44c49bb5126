"""
FastAPI dependencies wiring the service to a request-scoped store.

    get_db_session → get_note_store → get_note_service

Tests swap any link with app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.database import get_db_session
from notesapp.services.note_service import NoteService
from notesapp.store.base import NoteStore
from notesapp.store.sql import SqlNoteStore


def get_note_store(db: AsyncSession = Depends(get_db_session)) -> NoteStore:
    return SqlNoteStore(db)


def get_note_service(store: NoteStore = Depends(get_note_store)) -> NoteService:
    return NoteService(store)
