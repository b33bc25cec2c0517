"""Writing parser: shared writing rules plus a per-category profile.

The category of a document is resolved once, up front:

1. an explicit, recognised ``category`` field,
2. otherwise a category directory in the source path
   (``/fiction/``, ``/annual/``, ``/essays/`` or ``/essay/``,
   ``/poetry/`` or ``/poem/``),
3. otherwise ``essay``.

The resolved category selects one :class:`ParserSpec` whose validator
is the shared writing rules merged with the category's own rules.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from folio.domain.content import ContentMetadata, ParsedContent, parse_frontmatter
from folio.domain.frontmatter import WritingCategory, WritingFrontmatter
from folio.domain.types import ContentKind
from folio.domain.validation import (
    FieldError,
    FieldWarning,
    ValidationResult,
    check_array,
    check_date,
    check_enum,
    collect,
    is_number,
    require_fields,
)
from folio.parsers.base import DefaultsHook, ParserSpec, Validator, process_document
from folio.parsers.categories import CATEGORY_PROFILES, CategoryProfile
from folio.parsers.metadata import DEFAULT_SPEED, ReadingSpeed

REQUIRED_FIELDS = ("title", "date")
WRITING_CATEGORIES = [c.value for c in WritingCategory]
DEFAULT_CATEGORY = WritingCategory.ESSAY.value

# Checked in order; the first directory marker found in the path wins.
PATH_MARKERS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("/fiction/",), WritingCategory.FICTION.value),
    (("/annual/",), WritingCategory.ANNUAL.value),
    (("/essays/", "/essay/"), WritingCategory.ESSAY.value),
    (("/poetry/", "/poem/"), WritingCategory.POETRY.value),
)


def category_from_path(path: str | None) -> str | None:
    """Infer a writing category from directory names in *path*."""
    if not path:
        return None
    lowered = "/" + path.replace("\\", "/").lower()
    for markers, category in PATH_MARKERS:
        if any(marker in lowered for marker in markers):
            return category
    return None


def resolve_category(data: Mapping[str, Any], path: str | None = None) -> str:
    explicit = data.get("category")
    if isinstance(explicit, str) and explicit in WRITING_CATEGORIES:
        return explicit
    return category_from_path(path) or DEFAULT_CATEGORY


# ---------------------------------------------------------------------------
# Shared writing rules
# ---------------------------------------------------------------------------


def validate_writing(data: Mapping[str, Any], category: str | None = None) -> ValidationResult:
    """Rules shared by every writing category.

    *category* is the resolved category; it defaults to the raw field.
    """
    errors = require_fields(data, REQUIRED_FIELDS)
    errors += collect(
        check_array(data, "tags"),
        check_date(data, "date"),
        check_enum(data, "category", WRITING_CATEGORIES),
    )

    show_toc = data.get("showToc")
    if show_toc is not None and not isinstance(show_toc, bool):
        errors.append(
            FieldError(field="showToc", message="'showToc' must be a boolean", value=show_toc)
        )

    warnings: list[FieldWarning] = []
    if "readTime" in data and not _usable_read_time(data["readTime"]):
        warnings.append(
            FieldWarning(
                field="readTime",
                message="'readTime' should be a non-negative number",
                suggestion="Omit 'readTime' to have it computed from the body",
            )
        )
    if category is None:
        category = data.get("category")
    if data.get("years") is not None and category != WritingCategory.ANNUAL:
        warnings.append(
            FieldWarning(
                field="years",
                message=f"'years' only applies to annual content, not {category or 'essay'}",
                suggestion="Remove 'years' or set category to annual",
            )
        )
    return ValidationResult.build(errors, warnings)


def _usable_read_time(value: Any) -> bool:
    return is_number(value) and value >= 0


def _merged_validator(profile: CategoryProfile) -> Validator:
    def validate(data: Mapping[str, Any]) -> ValidationResult:
        return validate_writing(data, profile.category).merge(profile.validate(data))

    return validate


def _defaults_for(profile: CategoryProfile) -> DefaultsHook:
    def apply_defaults(data: dict[str, Any], metadata: ContentMetadata) -> dict[str, Any]:
        data["category"] = profile.category
        if not isinstance(data.get("tags"), list):
            data["tags"] = []
        if not isinstance(data.get("showToc"), bool):
            data["showToc"] = profile.show_toc
        data["statusColor"] = data.get("statusColor") or profile.status_color
        data["wordCount"] = metadata.word_count

        read_time = data.get("readTime")
        if not _usable_read_time(read_time):
            read_time = profile.read_time if profile.read_time is not None else metadata.read_time
        data["readTime"] = read_time
        return data

    return apply_defaults


def writing_spec(profile: CategoryProfile) -> ParserSpec:
    """Build the parser spec for one writing category."""
    return ParserSpec(
        name=ContentKind.WRITING.value,
        model=WritingFrontmatter,
        validate=_merged_validator(profile),
        apply_defaults=_defaults_for(profile),
        extra_metadata=profile.extra_metadata,
    )


WRITING_SPECS: dict[str, ParserSpec] = {
    category: writing_spec(profile) for category, profile in CATEGORY_PROFILES.items()
}


def parse_writing(
    text: str,
    slug: str,
    path: str | None = None,
    *,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> ParsedContent:
    """Parse a writing document, dispatching on its resolved category.

    Raises:
        ParserValidationError: On any critical error from the shared or
            category rules.
    """
    from folio.parsers.registry import get_parser_spec

    data, body = parse_frontmatter(text)
    spec = get_parser_spec(ContentKind.WRITING, resolve_category(data, path))
    return process_document(spec, data, body, slug, path=path, speed=speed)
