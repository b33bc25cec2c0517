"""Tests for record validation and defaults."""

from __future__ import annotations

from typing import Any

import pytest

from folio.parsers.base import parse_document
from folio.parsers.record import RECORD_SPEC, validate_record


def _record(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "title": "Paprika",
        "category": "movie",
        "date": "2024-01-01",
        "director": "Satoshi Kon",
    }
    data.update(overrides)
    return {k: v for k, v in data.items() if v is not None}


class TestValidateRecord:
    def test_valid(self) -> None:
        result = validate_record(_record(rating=9, tags=["anime"]))
        assert result.valid
        assert result.errors == []
        assert result.warnings == []

    @pytest.mark.parametrize("field", ["title", "category", "date"])
    def test_required(self, field: str) -> None:
        data = _record()
        del data[field]
        result = validate_record(data)
        assert result.valid is False
        assert field in [e.field for e in result.critical_errors]

    def test_unknown_category(self) -> None:
        result = validate_record(_record(category="podcast"))
        assert result.valid
        assert [e.field for e in result.errors] == ["category"]

    @pytest.mark.parametrize("rating", [0, 11, "great"])
    def test_rating_out_of_range(self, rating: object) -> None:
        result = validate_record(_record(rating=rating))
        assert [e.field for e in result.errors] == ["rating"]

    @pytest.mark.parametrize(
        ("category", "field"),
        [("movie", "director"), ("book", "author"), ("game", "developer"), ("music", "artist")],
    )
    def test_missing_creator_warns(self, category: str, field: str) -> None:
        result = validate_record(_record(category=category, director=None))
        assert result.valid
        assert [w.field for w in result.warnings] == [field]

    def test_notes_silence_missing_creator(self) -> None:
        result = validate_record(_record(director=None, notes="Rewatched twice"))
        assert result.warnings == []

    def test_foreign_creator_field_warns(self) -> None:
        result = validate_record(_record(category="book", author="Tsutsui", director="Kon"))
        assert result.valid
        assert [w.field for w in result.warnings] == ["director"]


class TestParseRecord:
    def test_defaults(self) -> None:
        text = "---\ntitle: Paprika\ncategory: movie\ndate: 2024-01-01\ndirector: Kon\n"
        parsed = parse_document(RECORD_SPEC, text, "movie-00000001")
        fm = parsed.frontmatter
        assert fm.tags == []
        assert fm.rating is None
        assert fm.creator == "Kon"
        assert parsed.content == ""

    def test_rating_kept(self) -> None:
        text = "---\ntitle: A\ncategory: book\ndate: 2024\nauthor: B\nrating: 7.5\n"
        assert parse_document(RECORD_SPEC, text, "book-1").frontmatter.rating == 7.5

    def test_non_numeric_rating_becomes_none(self) -> None:
        text = "---\ntitle: A\ncategory: book\ndate: 2024\nauthor: B\nrating: great\n"
        parsed = parse_document(RECORD_SPEC, text, "book-1")
        assert parsed.frontmatter.rating is None
        assert [e.field for e in parsed.errors] == ["rating"]
