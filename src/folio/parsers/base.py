"""The shared parse pipeline and the parser spec bundle.

Every content type runs the same fixed pipeline:

1. Extract frontmatter and body (:func:`parse_frontmatter`).
2. Validate the raw frontmatter; critical errors raise
   :class:`ParserValidationError`.
3. Render the Markdown body to HTML.
4. Extract base metadata plus any type-specific extras.
5. Apply type-specific defaults to the frontmatter (the hook sees the
   metadata, so derived values such as ``wordCount`` can flow back).
6. Build the typed frontmatter model.

What differs per type is bundled in a :class:`ParserSpec`: a validator
and two optional hooks. There is no parser class hierarchy; a spec is
plain data and the pipeline is a plain function.

Non-critical errors and warnings are logged and kept on the resulting
:class:`ParsedContent`; they never stop a document from loading.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any

from pydantic import ValidationError as ModelValidationError

from folio.domain.content import ContentMetadata, ParsedContent, parse_frontmatter
from folio.domain.frontmatter import BaseFrontmatter
from folio.domain.validation import FieldError, ParserValidationError, ValidationResult
from folio.infrastructure.markdown import render_markdown
from folio.parsers.metadata import DEFAULT_SPEED, ReadingSpeed, extract_all

logger = logging.getLogger(__name__)

Validator = Callable[[Mapping[str, Any]], ValidationResult]
DefaultsHook = Callable[[dict[str, Any], ContentMetadata], dict[str, Any]]
MetadataHook = Callable[[str, str, Mapping[str, Any]], dict[str, Any]]


def keep_frontmatter(data: dict[str, Any], metadata: ContentMetadata) -> dict[str, Any]:
    """Default ``apply_defaults`` hook: frontmatter passes through as-is."""
    return data


def no_extra_metadata(raw: str, html: str, data: Mapping[str, Any]) -> dict[str, Any]:
    """Default ``extra_metadata`` hook: nothing beyond the base metadata."""
    return {}


@dataclass(frozen=True)
class ParserSpec:
    """Everything type-specific about parsing one content type.

    Attributes:
        name: Content type key, also stamped on ``ParsedContent.kind``.
        model: Frontmatter model built from the defaulted mapping.
        validate: Rule set run against the raw frontmatter.
        apply_defaults: Returns the enriched frontmatter mapping.
        extra_metadata: Returns extra ``ContentMetadata`` fields.
    """

    name: str
    model: type[BaseFrontmatter]
    validate: Validator
    apply_defaults: DefaultsHook = keep_frontmatter
    extra_metadata: MetadataHook = no_extra_metadata


def parse_document(
    spec: ParserSpec,
    text: str,
    slug: str,
    *,
    path: str | None = None,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> ParsedContent:
    """Parse one raw Markdown document with *spec*.

    Raises:
        ParserValidationError: If validation reports a critical error,
            or the defaulted frontmatter cannot form a valid model.
    """
    data, body = parse_frontmatter(text)
    return process_document(spec, data, body, slug, path=path, speed=speed)


def process_document(
    spec: ParserSpec,
    data: Mapping[str, Any],
    body: str,
    slug: str,
    *,
    path: str | None = None,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> ParsedContent:
    """Run pipeline steps 2-6 on an already extracted document."""
    result = spec.validate(data)
    log_validation(spec.name, slug, result)

    if not result.valid:
        raise ParserValidationError(
            f"{spec.name} validation failed",
            result.errors,
            warnings=result.warnings,
            slug=slug,
            path=path,
        )

    html = render_markdown(body)
    metadata = extract_all(body, html, speed=speed)
    extra = spec.extra_metadata(body, html, data)
    if extra:
        metadata = metadata.model_copy(update=extra)

    enriched = spec.apply_defaults(dict(data), metadata)
    try:
        frontmatter = spec.model.model_validate(enriched)
    except ModelValidationError as exc:
        raise ParserValidationError(
            f"{spec.name} frontmatter could not be normalized",
            [*result.errors, *_model_errors(exc)],
            warnings=result.warnings,
            slug=slug,
            path=path,
        ) from exc

    return ParsedContent(
        kind=spec.name,
        frontmatter=frontmatter,
        content=html,
        slug=slug,
        metadata=metadata,
        path=path,
        errors=result.errors,
        warnings=result.warnings,
    )


def log_validation(kind: str, slug: str, result: ValidationResult) -> None:
    """Log every warning and non-critical error of a validation result."""
    for warning in result.warnings:
        logger.warning("[%s] %s: %s - %s", kind, slug, warning.field, warning.message)
    for error in result.errors:
        if error.severity == "critical":
            logger.error("[%s] %s: %s - %s", kind, slug, error.field, error.message)
        else:
            logger.warning(
                "[%s] %s: %s - %s (value: %r)",
                kind,
                slug,
                error.field,
                error.message,
                error.value,
            )


def _model_errors(exc: ModelValidationError) -> list[FieldError]:
    errors: list[FieldError] = []
    for detail in exc.errors():
        location = ".".join(str(part) for part in detail.get("loc", ())) or "frontmatter"
        errors.append(
            FieldError(
                field=location,
                message=str(detail.get("msg", "invalid value")),
                severity="critical",
                value=detail.get("input"),
            )
        )
    return errors
