"""
Jotter Backend: Search Filter Tests
====================================

What we test:
    ✅ LIKE wildcards in the query match literally
    ✅ Empty / whitespace-only queries are rejected
    ✅ The predicate runs against a real (SQLite) database
"""

import pytest
from sqlalchemy import select
from sqlalchemy.dialects import postgresql

from jotter.errors import ErrorKind
from jotter.models.note import Note
from jotter.repositories.note_repository import NoteRepository
from jotter.services.search_filter import EMPTY_QUERY_MESSAGE, build_search_filter, escape_like


class TestEscapeLike:

    def test_plain_text_unchanged(self):
        assert escape_like("shopping list") == "shopping list"

    def test_wildcards_escaped(self):
        assert escape_like("50%") == "50\\%"
        assert escape_like("snake_case") == "snake\\_case"

    def test_backslash_escaped_first(self):
        assert escape_like("a\\%") == "a\\\\\\%"


class TestBuildSearchFilter:

    @pytest.mark.parametrize("query", [None, "", "  \t "])
    def test_empty_query(self, query):
        result = build_search_filter(query)
        assert result.error.kind is ErrorKind.INVALID_INPUT
        assert result.error.message == EMPTY_QUERY_MESSAGE

    def test_compiles_to_ilike_on_both_columns(self):
        result = build_search_filter("  50% ")
        compiled = result.value.compile(dialect=postgresql.dialect())
        sql = str(compiled)

        assert sql.count("ILIKE") == 2
        assert "notes.title" in sql and "notes.content" in sql
        assert "ESCAPE" in sql
        assert set(compiled.params.values()) == {"%50\\%%"}


class TestSearchAgainstDatabase:

    async def _seed(self, session, *titles):
        repo = NoteRepository()
        for title in titles:
            await repo.create(session, {"title": title, "content": "body"})

    async def _titles(self, session, query):
        criteria = build_search_filter(query).value
        result = await session.execute(select(Note.title).where(criteria))
        return sorted(result.scalars().all())

    @pytest.mark.asyncio
    async def test_case_insensitive_substring(self, db_session):
        await self._seed(db_session, "note one", "Shopping")
        assert await self._titles(db_session, "OTE") == ["note one"]

    @pytest.mark.asyncio
    async def test_matches_content(self, db_session):
        await NoteRepository().create(db_session, {"title": "t", "content": "Buy MILK today"})
        assert await self._titles(db_session, "milk") == ["t"]

    @pytest.mark.asyncio
    async def test_percent_is_literal(self, db_session):
        await self._seed(db_session, "100% done", "1000 things")
        assert await self._titles(db_session, "0%") == ["100% done"]

    @pytest.mark.asyncio
    async def test_underscore_is_literal(self, db_session):
        await self._seed(db_session, "snake_case", "snakeXcase")
        assert await self._titles(db_session, "e_c") == ["snake_case"]
