"""Record parser spec (movies, books, games, music).

Rules:
- Required: title, category, date (critical).
- ``category`` in movie/book/game/music; ``tags`` a list; ``date``
  parses; ``rating`` a number in [1, 10].
- Each category has one recommended creator field (movie -> director,
  book -> author, game -> developer, music -> artist). Missing it
  without ``notes`` is a warning.
- A creator field belonging to another category is a warning.

Defaults: ``tags`` becomes ``[]`` and ``rating`` becomes ``None`` when
absent (or unusable), so "unrated" is never confused with zero.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from folio.domain.content import ContentMetadata
from folio.domain.frontmatter import RECORD_CREATOR_FIELDS, RecordCategory, RecordFrontmatter
from folio.domain.validation import (
    FieldWarning,
    ValidationResult,
    check_array,
    check_date,
    check_enum,
    check_foreign_fields,
    check_range,
    collect,
    is_missing,
    is_number,
    require_fields,
)
from folio.parsers.base import ParserSpec

REQUIRED_FIELDS = ("title", "category", "date")
RECORD_CATEGORIES = [c.value for c in RecordCategory]
RATING_RANGE = (1, 10)

# Creator field -> the only category it belongs to.
CREATOR_OWNERS: dict[str, str] = {
    field_name: category for category, field_name in RECORD_CREATOR_FIELDS.items()
}


def recommended_field_warnings(data: Mapping[str, Any]) -> list[FieldWarning]:
    category = data.get("category")
    field_name = RECORD_CREATOR_FIELDS.get(category) if isinstance(category, str) else None
    if field_name is None:
        return []
    if not is_missing(data.get(field_name)) or not is_missing(data.get("notes")):
        return []
    return [
        FieldWarning(
            field=field_name,
            message=f"{category} records should include '{field_name}' or 'notes'",
            suggestion=f"Add '{field_name}' for a more complete record",
        )
    ]


def validate_record(data: Mapping[str, Any]) -> ValidationResult:
    errors = require_fields(data, REQUIRED_FIELDS)
    errors += collect(
        check_enum(data, "category", RECORD_CATEGORIES),
        check_array(data, "tags"),
        check_date(data, "date"),
        check_range(data, "rating", *RATING_RANGE),
    )

    warnings: list[FieldWarning] = []
    category = data.get("category")
    if not is_missing(category):
        warnings += recommended_field_warnings(data)
        warnings += check_foreign_fields(data, str(category), CREATOR_OWNERS)
    return ValidationResult.build(errors, warnings)


def record_defaults(data: dict[str, Any], metadata: ContentMetadata) -> dict[str, Any]:
    if not isinstance(data.get("tags"), list):
        data["tags"] = []
    rating = data.get("rating")
    data["rating"] = rating if is_number(rating) else None
    return data


RECORD_SPEC = ParserSpec(
    name="record",
    model=RecordFrontmatter,
    validate=validate_record,
    apply_defaults=record_defaults,
)
