"""
QuickNotes — Note Field Validation Tests
=========================================

What:  Tests for validate_note_fields and normalize_category.
How:   Pure function calls, no database.

What we test:
    ✅ Create requires non-blank title and content
    ✅ Category defaults to "Others" and is normalized case-insensitively
    ✅ Unknown categories are rejected
    ✅ Partial updates only check the fields that were sent
    ✅ Empty updates are rejected
"""

import pytest

from quicknotes.services.validation import (
    CATEGORY_MESSAGE,
    EMPTY_UPDATE_MESSAGE,
    REQUIRED_MESSAGE,
    normalize_category,
    validate_note_fields,
)


class TestCreateValidation:

    def test_valid_payload_is_cleaned(self):
        result = validate_note_fields(
            {"title": "Shopping", "content": "Milk, eggs", "category": "personal"}
        )
        assert result.ok
        assert result.fields == {
            "title": "Shopping",
            "content": "Milk, eggs",
            "category": "Personal",
        }

    @pytest.mark.parametrize("title", [None, "", "   ", "\n\t"])
    def test_blank_title_rejected(self, title):
        result = validate_note_fields({"title": title, "content": "Body"})
        assert not result.ok
        assert result.message == REQUIRED_MESSAGE
        assert result.field == "title"

    def test_missing_content_rejected(self):
        result = validate_note_fields({"title": "Title"})
        assert not result.ok
        assert result.field == "content"

    @pytest.mark.parametrize("category", [None, "", "  "])
    def test_missing_category_defaults_to_others(self, category):
        result = validate_note_fields({"title": "T", "content": "C", "category": category})
        assert result.ok
        assert result.fields["category"] == "Others"

    def test_category_absent_defaults_to_others(self):
        result = validate_note_fields({"title": "T", "content": "C"})
        assert result.fields["category"] == "Others"

    def test_unknown_category_rejected(self):
        result = validate_note_fields({"title": "T", "content": "C", "category": "Groceries"})
        assert not result.ok
        assert result.message == CATEGORY_MESSAGE
        assert result.field == "category"

    def test_extra_keys_are_dropped(self):
        result = validate_note_fields(
            {"title": "T", "content": "C", "id": "abc", "createdAt": "yesterday"}
        )
        assert set(result.fields) == {"title", "content", "category"}


class TestUpdateValidation:

    def test_only_supplied_fields_are_returned(self):
        result = validate_note_fields({"title": "New title"}, partial=True)
        assert result.ok
        assert result.fields == {"title": "New title"}

    def test_empty_update_rejected(self):
        result = validate_note_fields({}, partial=True)
        assert not result.ok
        assert result.message == EMPTY_UPDATE_MESSAGE

    def test_unrelated_keys_only_counts_as_empty(self):
        result = validate_note_fields({"id": "abc"}, partial=True)
        assert result.message == EMPTY_UPDATE_MESSAGE

    def test_supplied_blank_content_rejected(self):
        result = validate_note_fields({"title": "ok", "content": "  "}, partial=True)
        assert not result.ok
        assert result.field == "content"

    def test_explicit_null_title_rejected(self):
        result = validate_note_fields({"title": None}, partial=True)
        assert not result.ok
        assert result.message == REQUIRED_MESSAGE

    def test_null_category_resets_to_others(self):
        result = validate_note_fields({"category": None}, partial=True)
        assert result.ok
        assert result.fields == {"category": "Others"}


class TestNormalizeCategory:

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("Work", "Work"),
            ("WORK", "Work"),
            (" ideas ", "Ideas"),
            ("others", "Others"),
            (None, "Others"),
            ("", "Others"),
        ],
    )
    def test_known_labels(self, raw, expected):
        assert normalize_category(raw) == expected

    @pytest.mark.parametrize("raw", ["Shopping", "Work!", 3])
    def test_unknown_labels(self, raw):
        assert normalize_category(raw) is None
