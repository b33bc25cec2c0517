"""Frontmatter validation primitives and the critical-error exception.

Severity model:
- ``critical`` errors abort parsing of the document.
- ``error`` issues are recorded, parsing continues with best-effort defaults.
- warnings are advisory (recommended fields, suggestions) and never block.

Each content type composes its own rule set from the primitives below.
Every primitive is a pure function over the raw frontmatter mapping and
returns ``None`` (or an empty list) when the check passes.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Literal

from pydantic import BaseModel, Field

from folio.domain.dates import is_valid_date

Severity = Literal["critical", "error"]


class FieldError(BaseModel):
    """A validation error attached to one frontmatter field."""

    model_config = {"frozen": True}

    field: str
    message: str
    severity: Severity = "error"
    value: Any = None


class FieldWarning(BaseModel):
    """A non-blocking validation finding, optionally with a suggested fix."""

    model_config = {"frozen": True}

    field: str
    message: str
    suggestion: str | None = None


class ValidationResult(BaseModel):
    """Outcome of validating one frontmatter mapping.

    ``valid`` is False if and only if at least one error is critical.
    """

    model_config = {"frozen": True}

    valid: bool
    errors: list[FieldError] = Field(default_factory=list)
    warnings: list[FieldWarning] = Field(default_factory=list)

    @classmethod
    def build(
        cls,
        errors: Iterable[FieldError] = (),
        warnings: Iterable[FieldWarning] = (),
    ) -> ValidationResult:
        """Create a result, deriving ``valid`` from the error severities."""
        error_list = list(errors)
        return cls(
            valid=not any(e.severity == "critical" for e in error_list),
            errors=error_list,
            warnings=list(warnings),
        )

    def merge(self, other: ValidationResult) -> ValidationResult:
        """Combine two results (errors and warnings concatenated in order)."""
        return ValidationResult.build(
            [*self.errors, *other.errors],
            [*self.warnings, *other.warnings],
        )

    @property
    def critical_errors(self) -> list[FieldError]:
        return [e for e in self.errors if e.severity == "critical"]


class ParserValidationError(Exception):
    """Raised when a document has at least one critical validation error.

    Carries the full list of errors and warnings so callers can report
    every problem in the document, not only the first.
    """

    def __init__(
        self,
        message: str,
        errors: Sequence[FieldError],
        *,
        warnings: Sequence[FieldWarning] = (),
        slug: str | None = None,
        path: str | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.errors: tuple[FieldError, ...] = tuple(errors)
        self.warnings: tuple[FieldWarning, ...] = tuple(warnings)
        self.slug = slug
        self.path = path

    def critical_errors(self) -> list[FieldError]:
        return [e for e in self.errors if e.severity == "critical"]

    def non_critical_errors(self) -> list[FieldError]:
        return [e for e in self.errors if e.severity == "error"]

    def format(self) -> str:
        """Render a multi-line, human-readable report."""
        lines = [self.message]
        if self.path:
            lines.append(f"File: {self.path}")
        if self.slug:
            lines.append(f"Slug: {self.slug}")
        lines.append("")
        lines.append("Errors:")
        for err in self.errors:
            suffix = f" (value: {err.value!r})" if err.value is not None else ""
            lines.append(f"  [{err.severity}] {err.field}: {err.message}{suffix}")
        if self.warnings:
            lines.append("Warnings:")
            lines.extend(f"  {w.field}: {w.message}" for w in self.warnings)
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "message": self.message,
            "slug": self.slug,
            "path": self.path,
            "errors": [e.model_dump() for e in self.errors],
            "warnings": [w.model_dump() for w in self.warnings],
        }

    def __str__(self) -> str:
        where = self.path or self.slug
        count = len(self.critical_errors())
        if where:
            return f"{self.message} ({where}, {count} critical)"
        return f"{self.message} ({count} critical)"


# ---------------------------------------------------------------------------
# Primitives
# ---------------------------------------------------------------------------


def is_missing(value: Any) -> bool:
    """A required value is missing when absent, ``None`` or the empty string."""
    return value is None or (isinstance(value, str) and value == "")


def is_number(value: Any) -> bool:
    """Booleans are not numbers for frontmatter purposes."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def require_fields(
    data: Mapping[str, Any],
    fields: Iterable[str],
    *,
    label: str | None = None,
) -> list[FieldError]:
    """Critical error for every field in *fields* that is missing."""
    errors: list[FieldError] = []
    for name in fields:
        value = data.get(name)
        if is_missing(value):
            prefix = f"{label} requires" if label else "Missing required field"
            errors.append(
                FieldError(
                    field=name,
                    message=f"{prefix} '{name}'",
                    severity="critical",
                    value=value,
                )
            )
    return errors


def check_array(data: Mapping[str, Any], field: str) -> FieldError | None:
    value = data.get(field)
    if value is not None and not isinstance(value, list):
        return FieldError(field=field, message=f"'{field}' must be a list", value=value)
    return None


def check_date(data: Mapping[str, Any], field: str) -> FieldError | None:
    value = data.get(field)
    if value is not None and not is_valid_date(value):
        return FieldError(
            field=field,
            message=f"'{field}' must be a valid ISO 8601 date",
            value=value,
        )
    return None


def check_enum(
    data: Mapping[str, Any],
    field: str,
    allowed: Iterable[str],
) -> FieldError | None:
    value = data.get(field)
    allowed_list = list(allowed)
    if value is not None and value not in allowed_list:
        return FieldError(
            field=field,
            message=f"'{field}' must be one of: {', '.join(allowed_list)}",
            value=value,
        )
    return None


def check_range(
    data: Mapping[str, Any],
    field: str,
    low: float,
    high: float,
) -> FieldError | None:
    value = data.get(field)
    if value is None:
        return None
    if not is_number(value) or not low <= value <= high:
        return FieldError(
            field=field,
            message=f"'{field}' must be a number between {low:g} and {high:g}",
            value=value,
        )
    return None


def check_type(
    data: Mapping[str, Any],
    field: str,
    kind: type | tuple[type, ...],
    label: str,
) -> FieldError | None:
    value = data.get(field)
    if value is not None and not isinstance(value, kind):
        return FieldError(field=field, message=f"'{field}' must be {label}", value=value)
    return None


def check_foreign_fields(
    data: Mapping[str, Any],
    category: str | None,
    owned_by: Mapping[str, str],
) -> list[FieldWarning]:
    """Warn about category-specific fields set on a different category.

    *owned_by* maps a field name to the only category allowed to use it.
    """
    warnings: list[FieldWarning] = []
    for name, owner in owned_by.items():
        if is_missing(data.get(name)) or owner == category:
            continue
        warnings.append(
            FieldWarning(
                field=name,
                message=f"'{name}' only applies to {owner} content, not {category}",
                suggestion=f"Remove '{name}' or change the category to {owner}",
            )
        )
    return warnings


def collect(*issues: FieldError | None) -> list[FieldError]:
    """Drop ``None`` results from a run of single-issue checks."""
    return [issue for issue in issues if issue is not None]
