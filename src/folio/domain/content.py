"""Parsed content models and the frontmatter extractor.

A :class:`ParsedContent` is the unit every page consumes: a typed
frontmatter model, the rendered HTML body, a slug unique within its
content type, and derived :class:`ContentMetadata`.

:func:`parse_frontmatter` is the pure splitting step shared by every
parser. It lives here so that the dependency direction stays clean:
parsers -> domain, never the reverse.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel, Field, SerializeAsAny
from ruamel.yaml import YAML
from ruamel.yaml.constructor import SafeConstructor
from ruamel.yaml.error import YAMLError

from folio.domain.frontmatter import BaseFrontmatter
from folio.domain.validation import FieldError, FieldWarning

logger = logging.getLogger(__name__)

FRONTMATTER_DELIMITER = "---"


# ---------------------------------------------------------------------------
# YAML parser
# ---------------------------------------------------------------------------


class TextTimestampConstructor(SafeConstructor):
    """Safe constructor that keeps YAML timestamps as the text written.

    ``date: 2024-02-30`` looks like a timestamp but is not a real day;
    left as text it reaches the date checks instead of failing the load.
    """


TextTimestampConstructor.add_constructor(
    "tag:yaml.org,2002:timestamp", SafeConstructor.construct_yaml_str
)


def _new_yaml() -> YAML:
    """Create a fresh safe-mode YAML loader (plain dicts, lists, text dates)."""
    yaml = YAML(typ="safe", pure=True)
    yaml.Constructor = TextTimestampConstructor
    return yaml


def normalize_newlines(text: str) -> str:
    """Convert ``\\r\\n`` and lone ``\\r`` line endings to ``\\n``."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def parse_frontmatter(content: str) -> tuple[dict[str, Any], str]:
    """Split raw Markdown into ``(frontmatter_dict, body_text)``.

    The header must start on the first line with ``---``. The next line
    consisting of ``---`` closes it and everything after is the body.
    When the opening delimiter is never closed, the remainder of the
    text is the header and the body is empty: every block produced by
    the multi-record splitter has that shape.

    Handles ``\\n``, ``\\r\\n`` and ``\\r`` line endings equivalently.

    Returns:
        ``({}, content)`` when the text has no header block. A header
        that is not valid YAML, or not a mapping, is logged and treated
        as empty.
    """
    normalized = normalize_newlines(content)
    lines = normalized.split("\n")
    if not lines or lines[0].strip() != FRONTMATTER_DELIMITER:
        return {}, content

    end_idx: int | None = None
    for i, line in enumerate(lines[1:], start=1):
        if line.strip() == FRONTMATTER_DELIMITER:
            end_idx = i
            break

    if end_idx is None:
        yaml_block = "\n".join(lines[1:])
        body = ""
    else:
        yaml_block = "\n".join(lines[1:end_idx])
        body = "\n".join(lines[end_idx + 1 :])
        if body.startswith("\n"):
            body = body[1:]

    try:
        loaded = _new_yaml().load(yaml_block)
    except YAMLError as exc:
        logger.warning("Unreadable frontmatter block: %s", exc)
        return {}, body

    if loaded is None:
        return {}, body
    if not isinstance(loaded, dict):
        logger.warning("Frontmatter is not a mapping (got %s)", type(loaded).__name__)
        return {}, body
    return {str(k): v for k, v in loaded.items()}, body


# ---------------------------------------------------------------------------
# Parsed content models
# ---------------------------------------------------------------------------


class TocItem(BaseModel):
    """One heading anchor of a rendered document."""

    model_config = {"frozen": True}

    id: str
    title: str
    level: int = Field(ge=1, le=6)


class ContentMetadata(BaseModel):
    """Metadata derived from a document body.

    The base fields are present for every document; the optional ones are
    filled by category-specific extractors (fiction chapters, poetry line
    and stanza counts, annual review year).
    """

    model_config = {"frozen": True}

    word_count: int = 0
    read_time: int = 0
    toc: list[TocItem] = Field(default_factory=list)
    excerpt: str = ""
    chapter_count: int | None = None
    line_count: int | None = None
    stanza_count: int | None = None
    year: int | None = None


class ParsedContent(BaseModel):
    """A fully parsed document, immutable once produced.

    Attributes:
        kind: Parser that produced the record (``project``, ``writing``, ...).
        frontmatter: Typed, defaulted frontmatter model for the content type.
        content: Markdown body rendered to HTML.
        slug: Identifier unique within the content type.
        metadata: Word count, read time, table of contents and extras.
        path: Logical source path, when known.
        errors: Non-critical validation errors recorded during parsing.
        warnings: Validation warnings recorded during parsing.
    """

    model_config = {"frozen": True}

    kind: str
    frontmatter: SerializeAsAny[BaseFrontmatter]
    content: str
    slug: str
    metadata: ContentMetadata = Field(default_factory=ContentMetadata)
    path: str | None = None
    errors: list[FieldError] = Field(default_factory=list)
    warnings: list[FieldWarning] = Field(default_factory=list)

    @property
    def date(self) -> Any:
        return getattr(self.frontmatter, "date", None)

    @property
    def category(self) -> str | None:
        return getattr(self.frontmatter, "category", None)

    @property
    def title(self) -> str | None:
        return getattr(self.frontmatter, "title", None)


class Top10Entry(BaseModel):
    """A ranked top-10 slot resolved to the full record it names."""

    model_config = {"frozen": True}

    num: int
    record: ParsedContent

    @property
    def name(self) -> str | None:
        return self.record.title
