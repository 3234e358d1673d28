"""
Jotter Backend: Notes Route Handlers
=====================================

What:  GET /notes, POST /notes, GET /notes/search, PUT /notes/{note_id}.
How:   Reads the raw request, delegates to NoteService, and turns the
       returned Result into a response. Errors go through error_response().
Who:   Any HTTP client; HTML forms reach PUT through MethodOverrideMiddleware.

Bodies:
    JSON or application/x-www-form-urlencoded. An empty body is treated as
    an empty object, so a missing body fails validation field by field.

Success bodies:
    GET endpoints return JSON arrays of notes. POST and PUT return a short
    plain-text confirmation.
"""

import json
import logging
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response
from sqlalchemy.ext.asyncio import AsyncSession

from jotter.database import get_db_session
from jotter.errors import AppError, Result
from jotter.responses import error_response
from jotter.schemas.note import NoteResponse, RateLimitResponse
from jotter.services.note_service import note_service
from jotter.services.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Notes"])

NOTE_CREATED_MESSAGE = "note created successfully"
NOTE_UPDATED_MESSAGE = "Note updated successfully"
NO_CHANGES_MESSAGE = "No changes found"
RATE_LIMIT_MESSAGE = "Too many note creation, Wait for some time"
INVALID_JSON_MESSAGE = "request body must be valid JSON"

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"

_TEXT_RESPONSES = {
    400: {"description": "Invalid input", "content": {"text/plain": {}}},
    500: {"description": "Server error", "content": {"text/plain": {}}},
}


# ── Dependencies / helpers ────────────────────────────────────────────────

def get_note_rate_limiter(request: Request) -> RateLimiter:
    """The process-wide creation limiter built by create_app()."""
    return request.app.state.note_rate_limiter


def client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def form_to_dict(pairs: List[Tuple[str, str]]) -> Dict[str, Any]:
    """Repeated keys collect into a list, which the validator rejects as a non-string."""
    data: Dict[str, Any] = {}
    for key, value in pairs:
        if key not in data:
            data[key] = value
        elif isinstance(data[key], list):
            data[key].append(value)
        else:
            data[key] = [data[key], value]
    return data


async def read_payload(request: Request) -> Result[Any]:
    """Decode the request body into a Python value without validating it."""
    body = await request.body()
    if not body.strip():
        return Result.success({})

    content_type = request.headers.get("content-type", "")
    if content_type.startswith(FORM_CONTENT_TYPE):
        try:
            pairs = parse_qsl(body.decode("utf-8"), keep_blank_values=True)
        except UnicodeDecodeError:
            return Result.failure(AppError.invalid_input("request body must be UTF-8"))
        return Result.success(form_to_dict(pairs))

    try:
        return Result.success(json.loads(body))
    except ValueError:
        return Result.failure(AppError.invalid_input(INVALID_JSON_MESSAGE))


# ── Routes ────────────────────────────────────────────────────────────────

@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: _TEXT_RESPONSES[500]},
    summary="List all notes",
    description="Returns every note, most recently updated first.",
)
async def list_notes(db: AsyncSession = Depends(get_db_session)):
    result = await note_service.list_notes(db)
    if not result.ok:
        return error_response(result.error)
    return [NoteResponse.model_validate(note) for note in result.value]


@router.post(
    "/notes",
    status_code=201,
    response_class=PlainTextResponse,
    responses={
        201: {"description": "Note created", "content": {"text/plain": {}}},
        429: {"description": "Creation rate limit exceeded", "model": RateLimitResponse},
        **_TEXT_RESPONSES,
    },
    summary="Create a note",
    description=(
        "Body: {title, content}, both non-empty after trimming. "
        "Limited per client (default 5 creations per 60 seconds)."
    ),
)
async def create_note(
    request: Request,
    db: AsyncSession = Depends(get_db_session),
    rate_limiter: RateLimiter = Depends(get_note_rate_limiter),
) -> Response:
    key = client_key(request)
    if not rate_limiter.allow(key):
        return error_response(
            AppError.rate_limited(
                RATE_LIMIT_MESSAGE,
                client=key,
                retry_after=rate_limiter.retry_after(key),
            )
        )

    payload = await read_payload(request)
    if not payload.ok:
        return error_response(payload.error)

    result = await note_service.create_note(db, payload.value)
    if not result.ok:
        return error_response(result.error)
    return PlainTextResponse(NOTE_CREATED_MESSAGE, status_code=201)


@router.get(
    "/notes/search",
    response_model=List[NoteResponse],
    responses=dict(_TEXT_RESPONSES),
    summary="Search notes",
    description=(
        "Case-insensitive substring match of `q` against title or content. "
        "Most recently updated first."
    ),
)
async def search_notes(
    q: Optional[str] = Query(default=None, description="Text to look for"),
    db: AsyncSession = Depends(get_db_session),
):
    result = await note_service.search_notes(db, q)
    if not result.ok:
        return error_response(result.error)
    return [NoteResponse.model_validate(note) for note in result.value]


@router.put(
    "/notes/{note_id}",
    response_class=PlainTextResponse,
    responses={
        200: {"description": "Updated, or nothing to change", "content": {"text/plain": {}}},
        404: {"description": "Note not found", "content": {"text/plain": {}}},
        **_TEXT_RESPONSES,
    },
    summary="Update a note",
    description=(
        "Body: {title?, content?} with at least one field. Fields left out are "
        "kept. Resubmitting the stored values writes nothing."
    ),
)
async def update_note(
    note_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    payload = await read_payload(request)
    if not payload.ok:
        return error_response(payload.error)

    result = await note_service.update_note(db, note_id, payload.value)
    if not result.ok:
        return error_response(result.error)

    message = NOTE_UPDATED_MESSAGE if result.value.changed else NO_CHANGES_MESSAGE
    return PlainTextResponse(message, status_code=200)
