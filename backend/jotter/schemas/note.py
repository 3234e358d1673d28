"""
Jotter Backend: Pydantic Request/Response Schemas
==================================================

What:  Pydantic models defining the API contract for notes.
How:   Request models are run by jotter.services.note_validator against the
       raw request payload; response models serialize ORM rows.

Design Decision:
    Schemas are separate from the SQLAlchemy model so payload rules can be
    tested on their own, without a database, and so the API never exposes
    columns it does not mean to.
"""

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator
from pydantic_core import PydanticCustomError

from jotter.models.note import CONTENT_MAX_LENGTH, TITLE_MAX_LENGTH

# Whitespace is stripped before the length checks run.
TitleStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=TITLE_MAX_LENGTH),
]
ContentStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=CONTENT_MAX_LENGTH),
]

NOTE_FIELDS = ("title", "content")


# ══════════════════════════════════════════════════════════════════════════
# Request Models
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /notes: both fields required."""

    model_config = ConfigDict(extra="forbid", strict=True)

    title: TitleStr
    content: ContentStr


class NoteUpdate(BaseModel):
    """
    Body of PUT /notes/{id}: partial update.

    A field may be left out, but when present it follows the same rules as
    on creation. An explicit null is not the same as leaving the field out
    and is rejected as a non-string. At least one field must be present.
    """

    model_config = ConfigDict(extra="forbid", strict=True)

    title: TitleStr = None  # type: ignore[assignment]
    content: ContentStr = None  # type: ignore[assignment]

    @model_validator(mode="after")
    def require_one_field(self) -> "NoteUpdate":
        if not self.model_fields_set.intersection(NOTE_FIELDS):
            raise PydanticCustomError(
                "at_least_one_field",
                "at least one of title or content is required",
            )
        return self


# ══════════════════════════════════════════════════════════════════════════
# Response Models
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """A stored note as returned by GET /notes and GET /notes/search."""

    id: uuid.UUID = Field(description="Unique note identifier (UUID)")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    updated_at: datetime = Field(description="When the note last changed (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class RateLimitResponse(BaseModel):
    """Body of the 429 returned when note creation is throttled."""

    error: str = Field(description="Fixed rate-limit message")


class HealthResponse(BaseModel):
    """Health check response showing service and database status."""

    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
