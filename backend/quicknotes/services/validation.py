"""
QuickNotes — Note Field Validation
===================================

What:  The one place that decides whether a create or update payload is
       acceptable, and what it means once cleaned.
How:   `validate_note_fields()` returns a tagged `ValidationResult` instead of
       raising; the Note Store turns a failed result into ValidationError.
Who:   NoteStore.create and NoteStore.update.

Rules:
    - title/content: required on create; on update only checked when present.
      Must be strings that are not blank after stripping whitespace.
    - category: matched case-insensitively against `Category`; missing, null
      or empty means "Others". Unknown labels fail.
    - update: the payload must name at least one editable field.
    - keys other than title/content/category are dropped.
"""

import dataclasses
from typing import Any, Dict, Mapping, Optional

from quicknotes.models.category import DEFAULT_CATEGORY, Category

EDITABLE_FIELDS = ("title", "content", "category")

REQUIRED_MESSAGE = "Title and content are required"
EMPTY_UPDATE_MESSAGE = "Provide at least one of title, content or category"
CATEGORY_MESSAGE = "Category must be one of: " + ", ".join(Category.labels())


@dataclasses.dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating a note payload: either ok with cleaned fields, or an error."""

    ok: bool
    fields: Dict[str, str] = dataclasses.field(default_factory=dict)
    message: Optional[str] = None
    field: Optional[str] = None

    @classmethod
    def success(cls, fields: Dict[str, str]) -> "ValidationResult":
        return cls(ok=True, fields=fields)

    @classmethod
    def failure(cls, message: str, field: Optional[str] = None) -> "ValidationResult":
        return cls(ok=False, message=message, field=field)


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def normalize_category(value: Any) -> Optional[str]:
    """Maps a user-supplied label to its canonical spelling, or None if unknown."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return DEFAULT_CATEGORY
    if not isinstance(value, str):
        return None
    wanted = value.strip().lower()
    for label in Category.labels():
        if label.lower() == wanted:
            return label
    return None


def validate_note_fields(data: Mapping[str, Any], partial: bool = False) -> ValidationResult:
    """
    Validate a note payload for create (partial=False) or update (partial=True).

    Args:
        data:    Raw fields from the request body. For updates only the keys
                 actually sent should be present.
        partial: True for updates, where absent keys mean "leave unchanged".

    Returns:
        ValidationResult. On success `fields` holds the cleaned values to
        store; for creates it always contains title, content and category.
    """
    supplied = {key: data[key] for key in EDITABLE_FIELDS if key in data}

    if partial and not supplied:
        return ValidationResult.failure(EMPTY_UPDATE_MESSAGE)

    cleaned: Dict[str, str] = {}
    for name in ("title", "content"):
        if name not in supplied and partial:
            continue
        value = supplied.get(name)
        if _is_blank(value):
            return ValidationResult.failure(REQUIRED_MESSAGE, field=name)
        cleaned[name] = value

    if "category" in supplied or not partial:
        category = normalize_category(supplied.get("category"))
        if category is None:
            return ValidationResult.failure(CATEGORY_MESSAGE, field="category")
        cleaned["category"] = category

    return ValidationResult.success(cleaned)
