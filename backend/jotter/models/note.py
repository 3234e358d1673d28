"""
Jotter Backend: Note SQLAlchemy Model
======================================

What:  ORM model representing the `notes` table.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteRepository for all reads and writes.

Table Design:
    - UUID primary key, assigned in Python at creation and never changed
    - title / content: stored trimmed; emptiness is rejected before any write
    - created_at: set once; updated_at: equal to created_at on insert and
      refreshed on every effective update
    - Index on updated_at DESC: both the listing and the search endpoints
      return the most recently updated notes first
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, String, Text, TypeDecorator, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from jotter.database import Base

TITLE_MAX_LENGTH = 200
CONTENT_MAX_LENGTH = 10_000


class UTCDateTime(TypeDecorator):
    """
    TIMESTAMP WITH TIME ZONE that always hands back aware UTC datetimes.

    PostgreSQL returns aware values already. SQLite stores the value as text
    and returns it naive, so the UTC tzinfo is re-attached on load.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


class Note(Base):
    """
    A short text note.

    Lifecycle:
        1. Created via POST /notes (created_at == updated_at)
        2. Mutated only via PUT /notes/{id}; absent fields are left untouched
        3. Never deleted
    """

    __tablename__ = "notes"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        comment="Unique identifier, assigned on creation",
    )

    title: Mapped[str] = mapped_column(
        String(TITLE_MAX_LENGTH),
        nullable=False,
        comment="Trimmed, non-empty note title",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Trimmed, non-empty note body",
    )

    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        comment="When this note was created (UTC)",
    )

    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(),
        nullable=False,
        comment="When this note last changed (UTC)",
    )

    __table_args__ = (
        Index("idx_notes_updated_at", updated_at.desc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title='{self.title}', updated_at='{self.updated_at}')>"
