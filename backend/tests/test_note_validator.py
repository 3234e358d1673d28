"""
Jotter Backend: Note Validator Unit Tests
==========================================

What we test:
    ✅ Create requires both fields, trims them, rejects blanks
    ✅ Update accepts partial payloads but not empty ones
    ✅ Non-string values, unknown keys and non-object payloads
    ✅ Only the first violation is reported
"""

import pytest

from jotter.errors import ErrorKind
from jotter.services.note_validator import ValidationMode, validate_note_payload


class TestCreateValidation:

    def test_valid_payload_is_trimmed(self):
        result = validate_note_payload(
            {"title": "  Shopping ", "content": "\tmilk, eggs\n"}, ValidationMode.CREATE
        )
        assert result.ok
        assert result.value == {"title": "Shopping", "content": "milk, eggs"}

    def test_missing_title(self):
        result = validate_note_payload({"content": "milk"}, ValidationMode.CREATE)
        assert not result.ok
        assert result.error.kind is ErrorKind.INVALID_INPUT
        assert result.error.status == 400
        assert result.error.message == '"title" is required'

    def test_missing_content(self):
        result = validate_note_payload({"title": "Shopping"}, ValidationMode.CREATE)
        assert result.error.message == '"content" is required'

    def test_empty_body_reports_first_field_only(self):
        result = validate_note_payload({}, ValidationMode.CREATE)
        assert result.error.message == '"title" is required'

    @pytest.mark.parametrize("blank", ["", "   ", "\n\t"])
    def test_blank_title_rejected(self, blank):
        result = validate_note_payload({"title": blank, "content": "x"}, ValidationMode.CREATE)
        assert result.error.message == '"title" is not allowed to be empty'

    def test_non_string_content_rejected(self):
        result = validate_note_payload({"title": "a", "content": 42}, ValidationMode.CREATE)
        assert result.error.message == '"content" must be a string'

    def test_null_title_rejected(self):
        result = validate_note_payload({"title": None, "content": "x"}, ValidationMode.CREATE)
        assert result.error.message == '"title" must be a string'

    def test_title_too_long(self):
        result = validate_note_payload({"title": "a" * 201, "content": "x"}, ValidationMode.CREATE)
        assert result.error.message == (
            '"title" length must be less than or equal to 200 characters long'
        )

    def test_unknown_key_rejected(self):
        result = validate_note_payload(
            {"title": "a", "content": "b", "color": "red"}, ValidationMode.CREATE
        )
        assert result.error.message == '"color" is not allowed'

    @pytest.mark.parametrize("payload", [None, ["title", "content"], "title"])
    def test_non_object_payload(self, payload):
        result = validate_note_payload(payload, ValidationMode.CREATE)
        assert result.error.message == '"value" must be of type object'


class TestUpdateValidation:

    def test_single_field(self):
        result = validate_note_payload({"content": " milk, eggs, bread "}, ValidationMode.UPDATE)
        assert result.ok
        assert result.value == {"content": "milk, eggs, bread"}

    def test_both_fields(self):
        result = validate_note_payload({"title": "T", "content": "C"}, ValidationMode.UPDATE)
        assert result.value == {"title": "T", "content": "C"}

    def test_empty_update_rejected(self):
        result = validate_note_payload({}, ValidationMode.UPDATE)
        assert result.error.kind is ErrorKind.INVALID_INPUT
        assert result.error.message == "at least one of title or content is required"

    def test_present_field_must_not_be_blank(self):
        result = validate_note_payload({"title": "   "}, ValidationMode.UPDATE)
        assert result.error.message == '"title" is not allowed to be empty'

    def test_explicit_null_is_not_absence(self):
        result = validate_note_payload({"title": None}, ValidationMode.UPDATE)
        assert result.error.message == '"title" must be a string'

    def test_unknown_key_only(self):
        result = validate_note_payload({"pinned": True}, ValidationMode.UPDATE)
        assert result.error.message == '"pinned" is not allowed'
