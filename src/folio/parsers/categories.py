"""Writing category profiles: essay, annual, fiction, poetry.

A profile holds what one writing category adds on top of the shared
writing rules: its own validator, display defaults and any extra
metadata it derives from the body.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from folio.domain.dates import normalize_date
from folio.domain.frontmatter import StatusColor, WritingCategory
from folio.domain.validation import (
    FieldWarning,
    ValidationResult,
    require_fields,
)
from folio.parsers.base import MetadataHook, Validator, no_extra_metadata
from folio.parsers.metadata import analyze_poetry

CHAPTER_HEADING = re.compile(r"^#{2,3}\s+.+$", re.MULTILINE)
ANNUAL_DATE = re.compile(r"^\d{4}(-\d{2})?$")
LEADING_YEAR = re.compile(r"^\d{4}")


@dataclass(frozen=True)
class CategoryProfile:
    """Per-category rules and defaults for writing documents."""

    category: str
    validate: Validator
    show_toc: bool
    status_color: str
    read_time: int | None = None
    extra_metadata: MetadataHook = no_extra_metadata


def _date_text(value: Any) -> str | None:
    if value is None or isinstance(value, bool):
        return None
    return str(normalize_date(value))


# ---------------------------------------------------------------------------
# Validators
# ---------------------------------------------------------------------------


def validate_essay(data: Mapping[str, Any]) -> ValidationResult:
    return ValidationResult.build(require_fields(data, ["description"], label="Essay"))


def validate_fiction(data: Mapping[str, Any]) -> ValidationResult:
    return ValidationResult.build(require_fields(data, ["description"], label="Fiction"))


def validate_annual(data: Mapping[str, Any]) -> ValidationResult:
    errors = require_fields(data, ["description"], label="Annual review")
    warnings: list[FieldWarning] = []
    text = _date_text(data.get("date"))
    if text is not None and not ANNUAL_DATE.match(text):
        warnings.append(
            FieldWarning(
                field="date",
                message="Annual reviews should be dated by year or month",
                suggestion='Use "YYYY" or "YYYY-MM", e.g. "2024" or "2024-12"',
            )
        )
    return ValidationResult.build(errors, warnings)


def validate_poetry(data: Mapping[str, Any]) -> ValidationResult:
    return ValidationResult.build()


# ---------------------------------------------------------------------------
# Extra metadata
# ---------------------------------------------------------------------------


def annual_metadata(raw: str, html: str, data: Mapping[str, Any]) -> dict[str, Any]:
    text = _date_text(data.get("date"))
    match = LEADING_YEAR.match(text) if text else None
    return {"year": int(match.group(0))} if match else {}


def fiction_metadata(raw: str, html: str, data: Mapping[str, Any]) -> dict[str, Any]:
    return {"chapter_count": len(CHAPTER_HEADING.findall(raw))}


def poetry_metadata(raw: str, html: str, data: Mapping[str, Any]) -> dict[str, Any]:
    shape = analyze_poetry(raw)
    return {"line_count": shape.line_count, "stanza_count": shape.stanza_count}


CATEGORY_PROFILES: dict[str, CategoryProfile] = {
    WritingCategory.ESSAY: CategoryProfile(
        category=WritingCategory.ESSAY.value,
        validate=validate_essay,
        show_toc=True,
        status_color=StatusColor.BLUE.value,
    ),
    WritingCategory.ANNUAL: CategoryProfile(
        category=WritingCategory.ANNUAL.value,
        validate=validate_annual,
        show_toc=True,
        status_color=StatusColor.GREEN.value,
        extra_metadata=annual_metadata,
    ),
    WritingCategory.FICTION: CategoryProfile(
        category=WritingCategory.FICTION.value,
        validate=validate_fiction,
        show_toc=True,
        status_color=StatusColor.WHITE.value,
        extra_metadata=fiction_metadata,
    ),
    WritingCategory.POETRY: CategoryProfile(
        category=WritingCategory.POETRY.value,
        validate=validate_poetry,
        show_toc=False,
        status_color=StatusColor.PINK.value,
        read_time=3,
        extra_metadata=poetry_metadata,
    ),
}
