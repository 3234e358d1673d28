"""
Jotter Backend: Update Decision
================================

What:  Decides whether a validated partial update changes a stored note.
How:   Compares every supplied field with the stored value. Only when all of
       them already match is the update a no-op; otherwise the full set of
       supplied fields is written.

Rules:
    - A field left out of the update is "unchanged", never "clear".
    - The decision is all-or-nothing: {"title": <same>, "content": <new>}
      is an APPLY that rewrites both fields.
    - Values are compared after validation, so both sides are trimmed.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict

from jotter.models.note import Note


class UpdateKind(str, Enum):
    NO_CHANGES = "no_changes"
    APPLY = "apply"


@dataclass(frozen=True)
class UpdateDecision:
    kind: UpdateKind
    changes: Dict[str, str] = field(default_factory=dict)

    @property
    def is_noop(self) -> bool:
        return self.kind is UpdateKind.NO_CHANGES


def decide_update(note: Note, changes: Dict[str, str]) -> UpdateDecision:
    """
    Args:
        note:    The currently stored note
        changes: Normalized output of the update validator

    Returns:
        UpdateDecision.NO_CHANGES when every supplied field equals the
        stored value, otherwise APPLY carrying all supplied fields.
    """
    if all(getattr(note, name) == value for name, value in changes.items()):
        return UpdateDecision(UpdateKind.NO_CHANGES)
    return UpdateDecision(UpdateKind.APPLY, dict(changes))
