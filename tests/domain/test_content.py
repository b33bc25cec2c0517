"""Tests for the frontmatter extractor and content models."""

from __future__ import annotations

from datetime import date

import pytest
from pydantic import ValidationError

from folio.domain.content import ContentMetadata, ParsedContent, TocItem, parse_frontmatter
from folio.domain.frontmatter import (
    ProjectFrontmatter,
    RecordFrontmatter,
    Top10Frontmatter,
    WritingFrontmatter,
)


class TestParseFrontmatter:
    def test_basic_parse(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: Test\n---\nBody text here.")
        assert fm == {"title": "Test"}
        assert body == "Body text here."

    def test_no_frontmatter(self) -> None:
        fm, body = parse_frontmatter("Just plain text.")
        assert fm == {}
        assert body == "Just plain text."

    def test_empty_content(self) -> None:
        assert parse_frontmatter("") == ({}, "")

    def test_crlf_equivalent_to_lf(self) -> None:
        unix = parse_frontmatter("---\ntitle: A\ntags:\n  - x\n---\nBody\n")
        windows = parse_frontmatter("---\r\ntitle: A\r\ntags:\r\n  - x\r\n---\r\nBody\r\n")
        assert unix == windows

    def test_unclosed_header_is_all_header(self) -> None:
        fm, body = parse_frontmatter("---\nnum: 1\nname: Paprika")
        assert fm == {"num": 1, "name": "Paprika"}
        assert body == ""

    def test_blank_line_after_header_dropped(self) -> None:
        _fm, body = parse_frontmatter("---\ntitle: A\n---\n\nParagraph")
        assert body == "Paragraph"

    def test_timestamps_kept_as_text(self) -> None:
        fm, _body = parse_frontmatter(
            "---\ndate: 2024-06-01\nupdated: 2024-06-01 08:15:00\ntags: [a, b]\n---\n"
        )
        assert fm["date"] == "2024-06-01"
        assert fm["updated"] == "2024-06-01 08:15:00"
        assert fm["tags"] == ["a", "b"]

    @pytest.mark.parametrize("value", ["2024-02-30", "2024-13-45"])
    def test_impossible_date_keeps_other_keys(self, value: str) -> None:
        fm, _body = parse_frontmatter(f"---\ntitle: A\ndate: {value}\n---\n")
        assert fm == {"title": "A", "date": value}

    def test_invalid_yaml_treated_as_empty(self) -> None:
        fm, body = parse_frontmatter("---\ntitle: [unclosed\n---\nBody")
        assert fm == {}
        assert body == "Body"

    def test_non_mapping_header_treated_as_empty(self) -> None:
        fm, _body = parse_frontmatter("---\n- just\n- a list\n---\nBody")
        assert fm == {}


class TestFrontmatterModels:
    def test_camel_case_aliases(self) -> None:
        fm = WritingFrontmatter.model_validate(
            {"title": "T", "date": "2024", "showToc": True, "readTime": 4, "wordCount": 10}
        )
        assert fm.show_toc is True
        assert fm.read_time == 4
        assert fm.to_frontmatter()["showToc"] is True

    def test_date_object_normalized_to_text(self) -> None:
        fm = RecordFrontmatter.model_validate(
            {"title": "T", "category": "book", "date": date(2024, 1, 2)}
        )
        assert fm.date == "2024-01-02"

    def test_extra_fields_kept(self) -> None:
        fm = ProjectFrontmatter.model_validate(
            {
                "title": "T",
                "description": "D",
                "date": "2024",
                "tags": [],
                "status": "planned",
                "stars": 5,
            }
        )
        assert fm.to_frontmatter()["stars"] == 5

    @pytest.mark.parametrize(
        ("tags", "expected"),
        [(None, []), ("solo", ["solo"]), (["a", None, "b"], ["a", "b"]), (3, [])],
    )
    def test_tags_coerced(self, tags: object, expected: list[str]) -> None:
        fm = RecordFrontmatter.model_validate(
            {"title": "T", "category": "book", "date": "2024", "tags": tags}
        )
        assert fm.tags == expected

    def test_record_creator(self) -> None:
        fm = RecordFrontmatter.model_validate(
            {"title": "T", "category": "game", "date": "2024", "developer": "Mobius"}
        )
        assert fm.creator == "Mobius"

    def test_frozen(self) -> None:
        fm = Top10Frontmatter.model_validate({"num": 1, "name": "A"})
        with pytest.raises(ValidationError):
            fm.num = 2  # type: ignore[misc]


class TestParsedContent:
    def test_convenience_properties(self) -> None:
        parsed = ParsedContent(
            kind="record",
            frontmatter=RecordFrontmatter.model_validate(
                {"title": "Paprika", "category": "movie", "date": "2024-01-01"}
            ),
            content="",
            slug="movie-00000000",
        )
        assert parsed.title == "Paprika"
        assert parsed.category == "movie"
        assert parsed.date == "2024-01-01"
        assert parsed.metadata == ContentMetadata()

    def test_serializes_subclass_fields(self) -> None:
        parsed = ParsedContent(
            kind="top10-movie",
            frontmatter=Top10Frontmatter.model_validate({"num": 1, "name": "A"}),
            content="",
            slug="top10-movie-00000000",
        )
        assert parsed.model_dump()["frontmatter"]["name"] == "A"

    def test_toc_level_bounds(self) -> None:
        with pytest.raises(ValidationError):
            TocItem(id="x", title="X", level=7)
