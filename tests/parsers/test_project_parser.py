"""Tests for project validation and defaults."""

from __future__ import annotations

from typing import Any

import pytest

from folio.domain.validation import ParserValidationError
from folio.parsers.base import parse_document
from folio.parsers.project import PROJECT_SPEC, normalize_status, validate_project
from tests.conftest import PROJECT_MD


def _project(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Folio",
        "description": "Pipeline",
        "date": "2024-03-01",
        "tags": ["python"],
        "status": "completed",
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


class TestValidateProject:
    def test_valid(self) -> None:
        result = validate_project(_project())
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize("field", ["title", "description", "date", "tags", "status"])
    def test_required(self, field: str) -> None:
        data = _project()
        del data[field]
        result = validate_project(data)
        assert result.valid is False
        assert [e.field for e in result.critical_errors] == [field]

    def test_localized_status_accepted(self) -> None:
        assert validate_project(_project(status="已完成")).errors == []

    def test_unknown_status_is_non_critical(self) -> None:
        result = validate_project(_project(status="paused"))
        assert result.valid
        assert [e.field for e in result.errors] == ["status"]

    def test_tags_must_be_list(self) -> None:
        result = validate_project(_project(tags="python"))
        assert [e.field for e in result.errors] == ["tags"]

    def test_bad_date(self) -> None:
        result = validate_project(_project(date="someday"))
        assert [e.field for e in result.errors] == ["date"]

    def test_status_color_outside_palette_warns(self) -> None:
        result = validate_project(_project(statusColor="purple"))
        assert result.valid
        assert [w.field for w in result.warnings] == ["statusColor"]

    def test_numeric_version_is_error(self) -> None:
        result = validate_project(_project(version=1.2))
        assert [e.field for e in result.errors] == ["version"]


class TestNormalizeStatus:
    @pytest.mark.parametrize(
        ("label", "expected"),
        [
            ("已完成", "completed"),
            ("进行中", "in-progress"),
            ("计划中", "planned"),
            ("planned", "planned"),
        ],
    )
    def test_aliases(self, label: str, expected: str) -> None:
        assert normalize_status(label) == expected


class TestParseProject:
    def test_full_document(self) -> None:
        parsed = parse_document(PROJECT_SPEC, PROJECT_MD, "folio", path="projects/folio.md")
        fm = parsed.frontmatter
        assert parsed.kind == "project"
        assert fm.status == "in-progress"
        assert fm.status_color == "blue"
        assert fm.date == "2024-03-01"
        assert fm.tags == ["python", "markdown"]
        assert '<h2 id="overview">Overview</h2>' in parsed.content
        assert parsed.metadata.excerpt.startswith("Overview Turns Markdown")

    def test_explicit_color_kept(self) -> None:
        text = PROJECT_MD.replace("status: 进行中", "status: planned\nstatusColor: pink")
        parsed = parse_document(PROJECT_SPEC, text, "folio")
        assert parsed.frontmatter.status_color == "pink"

    def test_numeric_version_stringified(self) -> None:
        text = PROJECT_MD.replace("status: 进行中", "status: planned\nversion: 1.2")
        parsed = parse_document(PROJECT_SPEC, text, "folio")
        assert parsed.frontmatter.version == "1.2"
        assert [e.field for e in parsed.errors] == ["version"]

    def test_missing_title_raises(self) -> None:
        text = PROJECT_MD.replace("title: Folio\n", "")
        with pytest.raises(ParserValidationError) as exc_info:
            parse_document(PROJECT_SPEC, text, "folio")
        assert exc_info.value.critical_errors()[0].field == "title"
