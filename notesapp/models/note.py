"""
Notes Backend: Note SQLAlchemy Models
=====================================

What:  ORM models for the `notes` and `note_tags` tables.
How:   Inherit from the shared DeclarativeBase; Alembic reads the metadata
       for migrations.
Who:   Used only by SqlNoteStore; services never see these classes.

Table Design:
    notes
        id            VARCHAR(36) primary key, UUID4 string generated on insert
        title         VARCHAR(255), indexed
        text          TEXT
        created_date  TIMESTAMP WITH TIME ZONE, indexed DESC
    note_tags
        (note_id, tag) composite primary key, so a note holds each tag once
        note_id → notes.id ON DELETE CASCADE

    Tags live in their own table so the match-any filter is a plain
    EXISTS subquery that works the same on PostgreSQL and SQLite.
"""

import uuid
from datetime import datetime
from typing import List

from sqlalchemy import TIMESTAMP, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from notesapp.database import Base


class NoteRow(Base):
    """
    A persisted note.

    Query Patterns:
        - List recent notes: ORDER BY created_date DESC LIMIT :size OFFSET :n
          → idx_notes_created_date
        - Single note: WHERE id = :id → primary key
    """

    __tablename__ = "notes"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid.uuid4()),
        comment="Opaque note identifier (UUID4 string)",
    )

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Note title",
    )

    text: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        comment="Note body",
    )

    # Set by the service on create, never touched by updates
    created_date: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True),
        nullable=False,
        comment="When this note was created (UTC)",
    )

    # selectin: tags are loaded together with the note, no lazy IO in async code
    tags: Mapped[List["NoteTagRow"]] = relationship(
        back_populates="note",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("idx_notes_created_date", created_date.desc()),
        Index("idx_notes_title", "title"),
    )

    def __repr__(self) -> str:
        return f"<NoteRow(id={self.id}, title='{self.title}', created_date='{self.created_date}')>"


class NoteTagRow(Base):
    """Link row: one tag attached to one note."""

    __tablename__ = "note_tags"

    note_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("notes.id", ondelete="CASCADE"),
        primary_key=True,
    )

    tag: Mapped[str] = mapped_column(
        String(32),
        primary_key=True,
        comment="NoteTag value: PERSONAL, BUSINESS, IMPORTANT",
    )

    note: Mapped[NoteRow] = relationship(back_populates="tags")

    __table_args__ = (
        Index("idx_note_tags_tag", "tag"),
    )

    def __repr__(self) -> str:
        return f"<NoteTagRow(note_id={self.note_id}, tag='{self.tag}')>"
