"""Multi-record files: many frontmatter blocks in one source file.

Record collections and top-10 lists are kept as one file per list::

    ---
    title: Paprika
    category: movie
    date: 2024-03-01
    ---
    title: Perfect Blue
    category: movie
    date: 2023-11-12

Blocks are separated by a ``---`` line. Every block is header-only, so
after splitting each one is re-prefixed with ``---`` and parsed as a
standalone document whose header runs to the end of the block.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from functools import partial
from pathlib import PurePosixPath

from folio.domain.content import FRONTMATTER_DELIMITER, ParsedContent, normalize_newlines
from folio.domain.ids import block_slug
from folio.domain.types import ContentKind
from folio.parsers.base import ParserSpec, parse_document
from folio.parsers.metadata import DEFAULT_SPEED, ReadingSpeed

BLOCK_SEPARATOR = f"\n{FRONTMATTER_DELIMITER}\n"

# Path segment -> record category used as the slug prefix.
RECORD_PATH_CATEGORIES: dict[str, str] = {
    "movie": "movie",
    "movies": "movie",
    "book": "book",
    "books": "book",
    "game": "game",
    "games": "game",
    "music": "music",
}


def split_blocks(text: str) -> list[str]:
    """Split a multi-record file into standalone ``---``-prefixed blocks.

    Examples:
        >>> split_blocks("---\\na: 1\\n---\\nb: 2\\n")
        ['---\\na: 1', '---\\nb: 2']
        >>> split_blocks("   ")
        []
    """
    normalized = normalize_newlines(text).strip()
    if normalized.startswith(FRONTMATTER_DELIMITER):
        normalized = normalized[len(FRONTMATTER_DELIMITER) :]

    blocks: list[str] = []
    for raw in normalized.split(BLOCK_SEPARATOR):
        block = raw.strip()
        if block.startswith(FRONTMATTER_DELIMITER):
            block = block[len(FRONTMATTER_DELIMITER) :].strip()
        if block:
            blocks.append(f"{FRONTMATTER_DELIMITER}\n{block}")
    return blocks


def iter_blocks(text: str, category: str) -> Iterator[tuple[str, str]]:
    """Yield ``(slug, block)`` for every block, slugged by position."""
    for index, block in enumerate(split_blocks(text)):
        yield block_slug(category, block, index), block


def record_category_from_path(path: str) -> str:
    """Slug prefix for a record file: a known category segment, else the stem.

    Examples:
        >>> record_category_from_path("records/movies.md")
        'movie'
        >>> record_category_from_path("records/2024/watchlist.md")
        'watchlist'
    """
    pure = PurePosixPath(path.replace("\\", "/").lower())
    for part in (*pure.parent.parts, pure.stem):
        category = RECORD_PATH_CATEGORIES.get(part)
        if category is not None:
            return category
    return pure.stem


def has_name(entry: ParsedContent) -> bool:
    """Whether a top-10 entry names something after trimming."""
    name = getattr(entry.frontmatter, "name", None)
    return bool(name and name.strip())


def keep_named(entries: Iterable[ParsedContent]) -> list[ParsedContent]:
    """Drop top-10 entries whose ``name`` is blank."""
    return [entry for entry in entries if has_name(entry)]


BlockParse = Callable[[], ParsedContent]


def iter_block_parsers(
    spec: ParserSpec,
    text: str,
    category: str,
    *,
    path: str | None = None,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> Iterator[tuple[str, BlockParse]]:
    """Yield ``(slug, parse)`` per block; ``parse()`` parses that block.

    Callers decide what a failing block means: :func:`parse_multi` lets
    the first :class:`ParserValidationError` escape, the content loader
    skips the block and carries on.
    """
    for slug, block in iter_blocks(text, category):
        yield slug, partial(parse_document, spec, block, slug, path=path, speed=speed)


def record_block_parsers(
    text: str,
    path: str,
    *,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> Iterator[tuple[str, BlockParse]]:
    from folio.parsers.registry import get_parser_spec

    spec = get_parser_spec(ContentKind.RECORD)
    category = record_category_from_path(path)
    return iter_block_parsers(spec, text, category, path=path, speed=speed)


def top10_block_parsers(
    text: str,
    kind: ContentKind,
    *,
    path: str | None = None,
) -> Iterator[tuple[str, BlockParse]]:
    from folio.parsers.registry import get_parser_spec

    return iter_block_parsers(get_parser_spec(kind), text, kind.value, path=path)


def parse_multi(
    spec: ParserSpec,
    text: str,
    category: str,
    *,
    path: str | None = None,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> list[ParsedContent]:
    """Parse every block of a multi-record file with *spec*.

    Raises:
        ParserValidationError: On the first block with a critical error.
    """
    parsers = iter_block_parsers(spec, text, category, path=path, speed=speed)
    return [parse() for _slug, parse in parsers]


def parse_records_file(
    text: str,
    path: str,
    *,
    speed: ReadingSpeed = DEFAULT_SPEED,
) -> list[ParsedContent]:
    return [parse() for _slug, parse in record_block_parsers(text, path, speed=speed)]


def parse_top10_file(
    text: str,
    kind: ContentKind,
    *,
    path: str | None = None,
) -> list[ParsedContent]:
    """Parse a top-10 list file, dropping entries with a blank ``name``."""
    return keep_named(parse() for _slug, parse in top10_block_parsers(text, kind, path=path))
