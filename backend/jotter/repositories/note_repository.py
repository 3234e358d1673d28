"""
Jotter Backend: Note Repository
================================

What:  Data access layer for Note rows.
How:   Async SQLAlchemy queries against a session injected per request.
       Writes commit immediately and refresh the row, so the caller sees
       the stored values.
Who:   Used by NoteService only.

Ordering:
    Every multi-row read returns notes by updated_at DESC (most recently
    changed first), backed by idx_notes_updated_at.

Errors:
    SQLAlchemy / driver exceptions propagate unchanged; NoteService turns
    them into INTERNAL errors.
"""

import uuid
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional

from sqlalchemy import ColumnElement, desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.models.note import Note

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class NoteRepository:
    """
    Store operations used by the API.

    Args:
        clock: Source of "now" for timestamps, injectable for tests
    """

    def __init__(self, clock: Clock = utc_now):
        self._clock = clock

    async def find_all(self, session: AsyncSession) -> List[Note]:
        result = await session.execute(select(Note).order_by(desc(Note.updated_at)))
        return list(result.scalars().all())

    async def find_by_id(self, session: AsyncSession, note_id: uuid.UUID) -> Optional[Note]:
        result = await session.execute(select(Note).where(Note.id == note_id))
        return result.scalar_one_or_none()

    async def find_matching(
        self, session: AsyncSession, criteria: ColumnElement[bool]
    ) -> List[Note]:
        result = await session.execute(
            select(Note).where(criteria).order_by(desc(Note.updated_at))
        )
        return list(result.scalars().all())

    async def create(self, session: AsyncSession, fields: Dict[str, str]) -> Note:
        """Insert a note; created_at and updated_at share one timestamp."""
        now = self._clock()
        note = Note(
            id=uuid.uuid4(),
            title=fields["title"],
            content=fields["content"],
            created_at=now,
            updated_at=now,
        )
        session.add(note)
        await session.commit()
        await session.refresh(note)
        return note

    async def update_by_id(
        self,
        session: AsyncSession,
        note_id: uuid.UUID,
        fields: Dict[str, str],
    ) -> Optional[Note]:
        """
        Overwrite the supplied fields and refresh updated_at.

        updated_at always moves forward: if the clock has not passed the
        stored value (coarse clocks, fast successive writes) it is bumped by
        one microsecond.

        Returns:
            The updated note, or None when no note has `note_id`.
        """
        note = await self.find_by_id(session, note_id)
        if note is None:
            return None

        for name, value in fields.items():
            setattr(note, name, value)

        now = self._clock()
        if now <= note.updated_at:
            now = note.updated_at + timedelta(microseconds=1)
        note.updated_at = now

        await session.commit()
        await session.refresh(note)
        return note


note_repository = NoteRepository()
