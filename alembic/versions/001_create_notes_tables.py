"""Create notes and note_tags tables

Revision ID: 001
Revises: None
Create Date: 2025-02-27 00:00:00.000000+00:00

What:  Creates `notes` and its tag link table `note_tags`.
How:   Portable column types only, so the same revision runs on PostgreSQL
       and SQLite.

Rollback: downgrade() drops both tables (all note data is lost).
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create both tables with their indexes. See notesapp/models/note.py."""
    op.create_table(
        "notes",
        sa.Column(
            "id",
            sa.String(36),
            nullable=False,
            comment="Opaque note identifier (UUID4 string)",
        ),
        sa.Column(
            "title",
            sa.String(255),
            nullable=False,
            comment="Note title",
        ),
        sa.Column(
            "text",
            sa.Text(),
            nullable=False,
            comment="Note body",
        ),
        sa.Column(
            "created_date",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            comment="When this note was created (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Listing is always newest first
    op.create_index(
        "idx_notes_created_date",
        "notes",
        [sa.text("created_date DESC")],
    )
    op.create_index("idx_notes_title", "notes", ["title"])

    op.create_table(
        "note_tags",
        sa.Column("note_id", sa.String(36), nullable=False),
        sa.Column(
            "tag",
            sa.String(32),
            nullable=False,
            comment="NoteTag value: PERSONAL, BUSINESS, IMPORTANT",
        ),
        sa.ForeignKeyConstraint(["note_id"], ["notes.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("note_id", "tag"),
    )
    op.create_index("idx_note_tags_tag", "note_tags", ["tag"])


def downgrade() -> None:
    """Drop both tables. Destructive."""
    op.drop_index("idx_note_tags_tag", table_name="note_tags")
    op.drop_table("note_tags")
    op.drop_index("idx_notes_title", table_name="notes")
    op.drop_index("idx_notes_created_date", table_name="notes")
    op.drop_table("notes")
