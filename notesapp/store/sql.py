"""
Notes Backend: SQLAlchemy Note Store
====================================

What:  NoteStore implementation over an async SQLAlchemy session.
How:   Maps NoteRow/NoteTagRow to the domain Note. Writes are flushed, not
       committed: the transaction belongs to the per-request session created
       by get_db_session(), which commits when the request succeeds.

Listing Query Plan (tags = {BUSINESS, IMPORTANT}, page 2, size 20):
    SELECT notes.* FROM notes
    WHERE EXISTS (SELECT 1 FROM note_tags
                  WHERE note_tags.note_id = notes.id
                    AND note_tags.tag IN ('BUSINESS', 'IMPORTANT'))
    ORDER BY notes.created_date DESC, notes.id
    LIMIT 20 OFFSET 40

    SELECT count(*) FROM notes WHERE EXISTS (...same filter...)

The count is a second statement in the same transaction; under READ
COMMITTED it may observe writes the page query did not.
"""

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notesapp.domain import Note, NoteSlice, NoteTag
from notesapp.exceptions import NotFoundError
from notesapp.models.note import NoteRow, NoteTagRow
from notesapp.store.base import NoteStore

logger = logging.getLogger(__name__)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes; everything stored is UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_domain(row: NoteRow) -> Note:
    return Note(
        id=row.id,
        title=row.title,
        text=row.text,
        tags={NoteTag(link.tag) for link in row.tags},
        created_date=_as_utc(row.created_date),
    )


class SqlNoteStore(NoteStore):
    """
    Note store backed by the `notes` / `note_tags` tables.

    One instance per session; see notesapp.dependencies.get_note_store.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def insert(self, note: Note) -> Note:
        row = NoteRow(
            title=note.title,
            text=note.text,
            created_date=note.created_date,
            tags=[NoteTagRow(tag=tag.value) for tag in sorted(note.tags)],
        )
        self._session.add(row)
        await self._session.flush()  # assigns row.id
        logger.debug("Inserted note row %s", row.id)
        return _to_domain(row)

    async def replace(self, note: Note) -> Note:
        row = await self._session.get(NoteRow, note.id)
        if row is None:
            raise NotFoundError(resource="Note", resource_id=note.id)

        row.title = note.title
        row.text = note.text
        if note.created_date is not None:
            row.created_date = note.created_date

        # Diff the tag links: a delete + insert of the same (note_id, tag)
        # in one flush would collide on the primary key.
        wanted = {tag.value for tag in note.tags}
        for link in list(row.tags):
            if link.tag not in wanted:
                row.tags.remove(link)
        present = {link.tag for link in row.tags}
        for value in sorted(wanted - present):
            row.tags.append(NoteTagRow(tag=value))

        await self._session.flush()
        logger.debug("Replaced note row %s", row.id)
        return _to_domain(row)

    async def find_by_id(self, note_id: str) -> Optional[Note]:
        row = await self._session.get(NoteRow, note_id)
        if row is None:
            return None
        return _to_domain(row)

    async def delete_by_id(self, note_id: str) -> None:
        row = await self._session.get(NoteRow, note_id)
        if row is None:
            return
        await self._session.delete(row)
        await self._session.flush()
        logger.debug("Deleted note row %s", note_id)

    async def find_filtered(
        self,
        tags: Optional[Iterable[NoteTag]],
        page: int,
        size: int,
    ) -> NoteSlice:
        conditions = []
        tag_values = sorted({NoteTag(tag).value for tag in tags}) if tags else []
        if tag_values:
            conditions.append(NoteRow.tags.any(NoteTagRow.tag.in_(tag_values)))

        query = select(NoteRow)
        count_query = select(func.count()).select_from(NoteRow)
        if conditions:
            query = query.where(*conditions)
            count_query = count_query.where(*conditions)

        query = (
            query.order_by(NoteRow.created_date.desc(), NoteRow.id)
            .offset(page * size)
            .limit(size)
        )

        result = await self._session.execute(query)
        rows: List[NoteRow] = list(result.scalars().all())

        count_result = await self._session.execute(count_query)
        total = count_result.scalar_one()

        return NoteSlice(notes=[_to_domain(row) for row in rows], total=total)
