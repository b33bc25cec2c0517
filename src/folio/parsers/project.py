"""Project parser spec.

Rules:
- Required: title, description, date, tags, status (critical).
- ``tags`` must be a list; ``date`` must parse.
- ``status`` must be a canonical value or a localized alias.
- ``statusColor`` outside the palette is a warning; non-string
  ``version`` is an error.

Defaults: localized status labels map to canonical values and
``statusColor`` falls back to blue.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from folio.domain.content import ContentMetadata
from folio.domain.frontmatter import (
    DEFAULT_STATUS_COLOR,
    STATUS_ALIASES,
    ProjectFrontmatter,
    ProjectStatus,
    StatusColor,
)
from folio.domain.validation import (
    FieldWarning,
    ValidationResult,
    check_array,
    check_date,
    check_enum,
    check_type,
    collect,
    require_fields,
)
from folio.parsers.base import ParserSpec

REQUIRED_FIELDS = ("title", "description", "date", "tags", "status")
ACCEPTED_STATUSES = [*(s.value for s in ProjectStatus), *STATUS_ALIASES]
STATUS_COLORS = [c.value for c in StatusColor]


def validate_project(data: Mapping[str, Any]) -> ValidationResult:
    errors = require_fields(data, REQUIRED_FIELDS)
    errors += collect(
        check_array(data, "tags"),
        check_enum(data, "status", ACCEPTED_STATUSES),
        check_date(data, "date"),
        check_type(data, "version", str, "a string"),
    )

    warnings: list[FieldWarning] = []
    color = data.get("statusColor")
    if color and color not in STATUS_COLORS:
        warnings.append(
            FieldWarning(
                field="statusColor",
                message=f"statusColor should be one of: {', '.join(STATUS_COLORS)}",
                suggestion=f"Use one of the palette colors, e.g. {DEFAULT_STATUS_COLOR}",
            )
        )
    return ValidationResult.build(errors, warnings)


def normalize_status(status: Any) -> Any:
    """Map a localized status label to its canonical value."""
    if isinstance(status, str):
        return STATUS_ALIASES.get(status.strip(), status)
    return status


def project_defaults(data: dict[str, Any], metadata: ContentMetadata) -> dict[str, Any]:
    data["status"] = normalize_status(data.get("status"))
    data["statusColor"] = data.get("statusColor") or DEFAULT_STATUS_COLOR
    if data.get("version") is not None and not isinstance(data["version"], str):
        data["version"] = str(data["version"])
    return data


PROJECT_SPEC = ParserSpec(
    name="project",
    model=ProjectFrontmatter,
    validate=validate_project,
    apply_defaults=project_defaults,
)
