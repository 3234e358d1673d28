"""
Jotter Backend: Note Service (Request Orchestration)
=====================================================

What:  Runs each note endpoint as validate -> store operation -> outcome.
How:   Composes the validator, the search filter builder, the update
       decision and NoteRepository. Every method returns a Result; nothing
       here raises for an expected failure.
Who:   Called by route handlers in jotter.routes.notes.

Per-request flow:
    Received -> Validated -> (store op) -> Responded
    A validation or store failure short-circuits to an error Result.

Error Handling:
    - Validation failures come back from the validator as INVALID_INPUT
    - A missing note is NOT_FOUND ("Note not found")
    - Any exception raised by the store is logged with its traceback, the
      session is rolled back, and the caller gets a generic INTERNAL error
"""

import logging
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from jotter.errors import AppError, Result
from jotter.models.note import Note
from jotter.repositories.note_repository import NoteRepository, note_repository
from jotter.services.note_changes import decide_update
from jotter.services.note_validator import ValidationMode, validate_note_payload
from jotter.services.search_filter import build_search_filter

logger = logging.getLogger(__name__)

NOTE_NOT_FOUND_MESSAGE = "Note not found"


@dataclass(frozen=True)
class UpdateOutcome:
    """Result of PUT /notes/{id}: whether anything was written."""

    changed: bool
    note: Note


def _parse_note_id(raw_id: str) -> Optional[uuid.UUID]:
    try:
        return uuid.UUID(str(raw_id))
    except ValueError:
        return None


class NoteService:
    """
    Business logic for note endpoints.

    Responsibilities:
        - list_notes():   all notes, most recently updated first
        - create_note():  validate and insert
        - search_notes(): validate query and filter
        - update_note():  validate, look up, decide, maybe write
    """

    def __init__(self, repository: NoteRepository = note_repository):
        self.repository = repository

    async def _store_failure(
        self, db: AsyncSession, operation: str, exc: Exception, **context: Any
    ) -> AppError:
        logger.error("Store failure during %s: %s", operation, exc, exc_info=True)
        try:
            await db.rollback()
        except Exception:
            logger.error("Rollback after failed %s also failed", operation, exc_info=True)
        return AppError.internal(operation=operation, error_type=type(exc).__name__, **context)

    async def list_notes(self, db: AsyncSession) -> Result[List[Note]]:
        try:
            notes = await self.repository.find_all(db)
        except Exception as e:
            return Result.failure(await self._store_failure(db, "list_notes", e))
        return Result.success(notes)

    async def create_note(self, db: AsyncSession, payload: Any) -> Result[Note]:
        """
        Validate a create payload and insert the note.

        Raises nothing; see Result.error for INVALID_INPUT / INTERNAL.
        """
        validated = validate_note_payload(payload, ValidationMode.CREATE)
        if not validated.ok:
            return Result.failure(validated.error)

        try:
            note = await self.repository.create(db, validated.value)
        except Exception as e:
            return Result.failure(await self._store_failure(db, "create_note", e))

        logger.info("Note created: %s", note.id)
        return Result.success(note)

    async def search_notes(self, db: AsyncSession, query: Optional[str]) -> Result[List[Note]]:
        """Notes whose title or content contains `query` (case-insensitive)."""
        criteria = build_search_filter(query)
        if not criteria.ok:
            return Result.failure(criteria.error)

        try:
            notes = await self.repository.find_matching(db, criteria.value)
        except Exception as e:
            return Result.failure(await self._store_failure(db, "search_notes", e))
        return Result.success(notes)

    async def update_note(
        self, db: AsyncSession, raw_id: str, payload: Any
    ) -> Result[UpdateOutcome]:
        """
        Apply a partial update unless it would change nothing.

        Order of checks:
            1. Payload validation (INVALID_INPUT)
            2. Note lookup (NOT_FOUND; an id that is not a UUID cannot exist)
            3. No-op decision: when every supplied field already matches,
               the store is not written and updated_at stays as it is
        """
        validated = validate_note_payload(payload, ValidationMode.UPDATE)
        if not validated.ok:
            return Result.failure(validated.error)

        note_id = _parse_note_id(raw_id)
        if note_id is None:
            return Result.failure(AppError.not_found(NOTE_NOT_FOUND_MESSAGE, note_id=raw_id))

        try:
            note = await self.repository.find_by_id(db, note_id)
            if note is None:
                return Result.failure(
                    AppError.not_found(NOTE_NOT_FOUND_MESSAGE, note_id=str(note_id))
                )

            decision = decide_update(note, validated.value)
            if decision.is_noop:
                logger.info("Note %s: no changes", note_id)
                return Result.success(UpdateOutcome(changed=False, note=note))

            updated = await self.repository.update_by_id(db, note_id, decision.changes)
        except Exception as e:
            return Result.failure(
                await self._store_failure(db, "update_note", e, note_id=str(note_id))
            )

        if updated is None:
            # Row vanished between lookup and write
            return Result.failure(AppError.not_found(NOTE_NOT_FOUND_MESSAGE, note_id=str(note_id)))

        logger.info("Note %s updated: %s", note_id, ", ".join(sorted(decision.changes)))
        return Result.success(UpdateOutcome(changed=True, note=updated))


note_service = NoteService()
