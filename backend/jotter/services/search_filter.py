"""
Jotter Backend: Search Filter Builder
======================================

What:  Turns the `q` query parameter into a SQL predicate over title/content.
How:   Case-insensitive substring containment (ILIKE '%q%') on either column.
       LIKE wildcards in the query are escaped so `50%` or `snake_case` match
       literally instead of acting as patterns.

On SQLite, ILIKE is compiled to lower(x) LIKE lower(y); the explicit ESCAPE
clause keeps the escaping portable since SQLite has no default escape char.
"""

from typing import Optional

from sqlalchemy import ColumnElement, or_

from jotter.errors import AppError, Result
from jotter.models.note import Note

EMPTY_QUERY_MESSAGE = "search field can not be empty"
LIKE_ESCAPE = "\\"


def escape_like(value: str) -> str:
    """Escape LIKE/ILIKE special characters (\\, %, _) so they match literally."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def build_search_filter(query: Optional[str]) -> Result[ColumnElement[bool]]:
    """
    Build the search predicate for GET /notes/search.

    Args:
        query: Raw `q` value (may be None when the parameter is missing)

    Returns:
        Result holding the predicate, or INVALID_INPUT when the trimmed query
        is empty.
    """
    term = (query or "").strip()
    if not term:
        return Result.failure(AppError.invalid_input(EMPTY_QUERY_MESSAGE))

    pattern = f"%{escape_like(term)}%"
    return Result.success(
        or_(
            Note.title.ilike(pattern, escape=LIKE_ESCAPE),
            Note.content.ilike(pattern, escape=LIKE_ESCAPE),
        )
    )
