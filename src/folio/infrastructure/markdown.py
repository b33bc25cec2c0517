"""Markdown to HTML rendering.

One shared ``MarkdownIt`` instance renders every document body:

- CommonMark with the GFM table and strikethrough rules enabled.
- Task list items (``- [x] done``) via ``mdit_py_plugins.tasklists``.
- Raw HTML in the body is passed through untouched (no sanitizing).
- Every heading h1-h6 carries an ``id`` derived from its text via
  ``mdit_py_plugins.anchors``. Ids are unique per document: repeats get
  ``-1``, ``-2``, ... suffixes.
"""

from __future__ import annotations

import re
from functools import lru_cache

from markdown_it import MarkdownIt
from mdit_py_plugins.anchors import anchors_plugin
from mdit_py_plugins.tasklists import tasklists_plugin

_NON_SLUG_CHARS = re.compile(r"[^\w\- ]")

FALLBACK_HEADING_ID = "section"


def heading_slug(title: str) -> str:
    """Turn heading text into a URL-safe anchor id.

    Lowercases, drops punctuation (word characters, including CJK
    ideographs, and ``-`` are kept) and turns spaces into hyphens.

    Examples:
        >>> heading_slug("Hello World!")
        'hello-world'
        >>> heading_slug("第一章 开始")
        '第一章-开始'
    """
    slug = _NON_SLUG_CHARS.sub("", title.strip().lower()).replace(" ", "-")
    return slug or FALLBACK_HEADING_ID


def build_renderer() -> MarkdownIt:
    """Create a configured renderer (GFM extras + heading anchors)."""
    md = MarkdownIt("commonmark", {"html": True})
    md.enable(["table", "strikethrough"])
    md.use(tasklists_plugin)
    md.use(anchors_plugin, min_level=1, max_level=6, slug_func=heading_slug)
    return md


@lru_cache(maxsize=1)
def get_renderer() -> MarkdownIt:
    """Return the process-wide shared renderer."""
    return build_renderer()


def render_markdown(text: str) -> str:
    """Render a Markdown body to HTML."""
    if not text.strip():
        return ""
    return get_renderer().render(text)
