"""Tests for Markdown rendering and heading anchors."""

from __future__ import annotations

from folio.infrastructure.markdown import get_renderer, heading_slug, render_markdown


class TestHeadingSlug:
    def test_lowercases_and_hyphenates(self) -> None:
        assert heading_slug("Hello World!") == "hello-world"

    def test_keeps_cjk(self) -> None:
        assert heading_slug("第一章 开始") == "第一章-开始"

    def test_punctuation_only_falls_back(self) -> None:
        assert heading_slug("???") == "section"


class TestRenderMarkdown:
    def test_blank_body(self) -> None:
        assert render_markdown("") == ""
        assert render_markdown("  \n ") == ""

    def test_heading_ids(self) -> None:
        html = render_markdown("# Title\n\n## Part One\n")
        assert '<h1 id="title">Title</h1>' in html
        assert '<h2 id="part-one">Part One</h2>' in html

    def test_duplicate_headings_get_suffixes(self) -> None:
        html = render_markdown("## Notes\n\n## Notes\n\n## Notes\n")
        assert 'id="notes"' in html
        assert 'id="notes-1"' in html
        assert 'id="notes-2"' in html

    def test_table(self) -> None:
        html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
        assert "<table>" in html
        assert "<td>1</td>" in html

    def test_strikethrough(self) -> None:
        assert "<s>gone</s>" in render_markdown("~~gone~~")

    def test_task_list(self) -> None:
        html = render_markdown("- [x] done\n- [ ] todo\n")
        assert "task-list-item" in html
        assert 'type="checkbox"' in html

    def test_raw_html_passes_through(self) -> None:
        html = render_markdown('<div class="note">kept</div>\n')
        assert '<div class="note">kept</div>' in html

    def test_renderer_is_shared(self) -> None:
        assert get_renderer() is get_renderer()
