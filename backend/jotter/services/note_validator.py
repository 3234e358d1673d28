"""
Jotter Backend: Note Payload Validator
=======================================

What:  Checks the shape of create/update payloads and normalizes them.
How:   Runs the raw payload through the NoteCreate / NoteUpdate pydantic
       models and reports the first violation as an INVALID_INPUT error.
Who:   Called by NoteService before any store access.

Output:
    Result.value is a plain dict holding only the recognized fields that
    were supplied, already trimmed, e.g. {"title": "Shopping"}.

Messages quote the offending field, e.g.:
    "title" is required
    "content" is not allowed to be empty
    "color" is not allowed
"""

from enum import Enum
from typing import Any, Dict

from pydantic import ValidationError

from jotter.errors import AppError, Result
from jotter.schemas.note import NoteCreate, NoteUpdate

NoteFields = Dict[str, str]


class ValidationMode(str, Enum):
    CREATE = "create"
    UPDATE = "update"


_MODELS = {
    ValidationMode.CREATE: NoteCreate,
    ValidationMode.UPDATE: NoteUpdate,
}

_OBJECT_ERROR_TYPES = {"model_type", "model_attributes_type", "dict_type"}


def _format_error(error: Dict[str, Any]) -> str:
    """Turns one pydantic error entry into a client-facing sentence."""
    loc = error.get("loc") or ()
    name = str(loc[0]) if loc else "value"
    kind = error.get("type", "")
    ctx = error.get("ctx") or {}

    if kind == "missing":
        return f'"{name}" is required'
    if kind == "string_type":
        return f'"{name}" must be a string'
    if kind == "string_too_short":
        return f'"{name}" is not allowed to be empty'
    if kind == "string_too_long":
        return (
            f'"{name}" length must be less than or equal to '
            f'{ctx.get("max_length")} characters long'
        )
    if kind == "extra_forbidden":
        return f'"{name}" is not allowed'
    if kind in _OBJECT_ERROR_TYPES:
        return '"value" must be of type object'
    if kind == "at_least_one_field":
        return error["msg"]
    return f'"{name}" {error.get("msg", "is invalid")}'


def validate_note_payload(payload: Any, mode: ValidationMode) -> Result[NoteFields]:
    """
    Validate a raw payload for the given mode.

    Args:
        payload: Untyped request body (normally a dict decoded from JSON/form)
        mode:    ValidationMode.CREATE or ValidationMode.UPDATE

    Returns:
        Result with the normalized fields, or an INVALID_INPUT error carrying
        the first violated rule.
    """
    model = _MODELS[mode]
    try:
        validated = model.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors()
        message = _format_error(errors[0]) if errors else "invalid payload"
        return Result.failure(
            AppError.invalid_input(message, mode=mode.value, error_count=len(errors))
        )
    return Result.success(validated.model_dump(exclude_unset=True))
