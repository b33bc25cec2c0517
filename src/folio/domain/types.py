"""Content kinds and classification enums.

A *kind* selects the parser for a source document. Projects, writing
and records are the three top-level collections; the two top-10 kinds
are single multi-record files joined against the record collection.
"""

from __future__ import annotations

from enum import StrEnum


class ContentKind(StrEnum):
    """Source document kinds understood by the loader."""

    PROJECT = "project"
    WRITING = "writing"
    RECORD = "record"
    TOP10_MOVIE = "top10-movie"
    TOP10_GAME = "top10-game"


# Top-level collections, in the order the loader processes them.
COLLECTION_KINDS: tuple[ContentKind, ...] = (
    ContentKind.PROJECT,
    ContentKind.WRITING,
    ContentKind.RECORD,
)

# Multi-record kinds: one file holds many frontmatter blocks.
MULTI_RECORD_KINDS: frozenset[ContentKind] = frozenset(
    {ContentKind.RECORD, ContentKind.TOP10_MOVIE, ContentKind.TOP10_GAME}
)

# Record category each top-10 list is joined against.
TOP10_RECORD_CATEGORY: dict[ContentKind, str] = {
    ContentKind.TOP10_MOVIE: "movie",
    ContentKind.TOP10_GAME: "game",
}
