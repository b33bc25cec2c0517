"""Metadata extraction — word counts, read time, TOC, poetry shape.

Every function here is pure and total: empty or malformed input yields
zero-valued metadata, never an exception.

Word counting is mixed-script aware. A run of Latin letters counts as
one word; every CJK Unified Ideograph counts as one word on its own,
since Chinese text has no spaces between words.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass

from bs4 import BeautifulSoup

from folio.domain.content import ContentMetadata, TocItem

LATIN_WORD = re.compile(r"[a-zA-Z]+")
CJK_CHAR = re.compile(r"[\u4e00-\u9fa5]")
_BLANK_LINE_SPLIT = re.compile(r"\n\s*\n")
_HEADINGS = ["h1", "h2", "h3", "h4", "h5", "h6"]


@dataclass(frozen=True)
class ReadingSpeed:
    """Reading speeds used to estimate read time, per minute."""

    latin_words: float = 300.0
    cjk_chars: float = 500.0
    mixed_words: float = 350.0


DEFAULT_SPEED = ReadingSpeed()


@dataclass(frozen=True)
class PoetryShape:
    line_count: int
    stanza_count: int


def count_words(text: str) -> int:
    """Count Latin letter runs plus individual CJK characters.

    Examples:
        >>> count_words("Hello 你好")
        3
        >>> count_words("")
        0
    """
    if not text:
        return 0
    return len(LATIN_WORD.findall(text)) + len(CJK_CHAR.findall(text))


def calculate_read_time(
    word_count: int,
    text: str | None = None,
    *,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> int:
    """Estimate reading time in whole minutes, rounded up.

    With *text*, Latin words and CJK characters are timed separately
    at their own speeds. Without it, *word_count* is divided by the
    mixed-content speed.
    """
    if word_count <= 0:
        return 0
    if not text:
        return math.ceil(word_count / speed.mixed_words)

    latin = len(LATIN_WORD.findall(text))
    cjk = len(CJK_CHAR.findall(text))
    return math.ceil(latin / speed.latin_words + cjk / speed.cjk_chars)


def extract_toc(html: str) -> list[TocItem]:
    """Collect every heading that carries an ``id``, in document order."""
    if not html or not html.strip():
        return []

    soup = BeautifulSoup(html, "html.parser")
    toc: list[TocItem] = []
    for heading in soup.find_all(_HEADINGS):
        heading_id = heading.get("id")
        if not heading_id:
            continue
        toc.append(
            TocItem(
                id=str(heading_id),
                title=heading.get_text().strip(),
                level=int(heading.name[1]),
            )
        )
    return toc


def analyze_poetry(text: str) -> PoetryShape:
    """Count non-blank lines and blank-line separated stanzas.

    Examples:
        >>> analyze_poetry("line1\\nline2\\n\\nline3")
        PoetryShape(line_count=3, stanza_count=2)
    """
    if not text:
        return PoetryShape(line_count=0, stanza_count=0)

    normalized = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = [line for line in normalized.split("\n") if line.strip()]
    stanzas = [block for block in _BLANK_LINE_SPLIT.split(normalized) if block.strip()]
    return PoetryShape(line_count=len(lines), stanza_count=len(stanzas))


_HEADING_MARK = re.compile(r"^#{1,6}\s+", re.MULTILINE)
_BOLD = re.compile(r"\*\*(.*?)\*\*")
_ITALIC = re.compile(r"\*(.*?)\*")
_CODE = re.compile(r"`(.*?)`")
_LINK = re.compile(r"\[(.*?)\]\(.*?\)")
_NEWLINES = re.compile(r"\n+")


def extract_excerpt(text: str, max_length: int = 150) -> str:
    """Plain-text lead of a Markdown body, truncated with ``...``."""
    if not text:
        return ""
    plain = _HEADING_MARK.sub("", text)
    plain = _BOLD.sub(r"\1", plain)
    plain = _ITALIC.sub(r"\1", plain)
    plain = _CODE.sub(r"\1", plain)
    plain = _LINK.sub(r"\1", plain)
    plain = _NEWLINES.sub(" ", plain).strip()
    if len(plain) <= max_length:
        return plain
    return plain[:max_length].strip() + "..."


def extract_all(
    raw: str,
    html: str,
    *,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> ContentMetadata:
    """Base metadata every parsed document gets."""
    word_count = count_words(raw)
    return ContentMetadata(
        word_count=word_count,
        read_time=calculate_read_time(word_count, raw, speed=speed),
        toc=extract_toc(html),
        excerpt=extract_excerpt(raw),
    )
