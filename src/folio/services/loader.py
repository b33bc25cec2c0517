"""ContentLoader — parse every source document into a ContentSnapshot.

Pipeline per load:

1. Projects and writing: one document per file, slug from file name.
2. Records: multi-record files, one slug per block.
3. Top-10 lists: multi-record files joined against the loaded records.
4. Projects, writing and records sorted newest first.

Documents are parsed one after another; output order depends only on
the final sort, never on discovery or parse order.

Failure policy: by default a document (or block) that fails to read or
validate is skipped, logged, and reported as a :class:`LoadIssue` on
the snapshot. With ``strict=True`` the first failure propagates.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from functools import partial
from typing import TYPE_CHECKING

from folio.domain.content import ParsedContent
from folio.domain.dates import date_sort_key
from folio.domain.ids import extract_slug
from folio.domain.types import TOP10_RECORD_CATEGORY, ContentKind
from folio.domain.validation import ParserValidationError
from folio.infrastructure.filesystem import ContentSource, FileSystemSource, Loader
from folio.parsers.base import parse_document
from folio.parsers.metadata import DEFAULT_SPEED, ReadingSpeed
from folio.parsers.multi import keep_named, record_block_parsers, top10_block_parsers
from folio.parsers.registry import get_parser_spec
from folio.parsers.top10 import resolve_top10
from folio.parsers.writing import parse_writing
from folio.services.snapshot import ContentSnapshot, LoadIssue

if TYPE_CHECKING:
    from folio.config.settings import FolioSettings

logger = logging.getLogger(__name__)


def sort_by_date(items: Iterable[ParsedContent]) -> list[ParsedContent]:
    """Newest first; unparseable dates last, ties keep their order."""
    return sorted(items, key=lambda item: date_sort_key(item.date))


class ContentLoader:
    """Loads every content kind from a :class:`ContentSource`.

    Args:
        source: Where raw documents come from.
        strict: Propagate the first read or validation failure instead
            of skipping the document.
        speed: Reading speeds for read-time estimates.
    """

    def __init__(
        self,
        source: ContentSource,
        *,
        strict: bool = False,
        speed: ReadingSpeed = DEFAULT_SPEED,
    ) -> None:
        self._source = source
        self._strict = strict
        self._speed = speed

    @classmethod
    def from_settings(cls, settings: FolioSettings) -> ContentLoader:
        """Build a filesystem-backed loader from resolved settings."""
        content = settings.content
        source = FileSystemSource(settings.content_root, patterns=content.patterns)
        speed = ReadingSpeed(
            latin_words=settings.reading.latin_words_per_minute,
            cjk_chars=settings.reading.cjk_chars_per_minute,
            mixed_words=settings.reading.mixed_words_per_minute,
        )
        return cls(source, strict=content.strict, speed=speed)

    @property
    def strict(self) -> bool:
        return self._strict

    def load_all(self) -> ContentSnapshot:
        """Parse every document and assemble a snapshot."""
        issues: list[LoadIssue] = []

        projects = sort_by_date(self._load_documents(ContentKind.PROJECT, issues))
        writing = sort_by_date(self._load_documents(ContentKind.WRITING, issues))
        records = sort_by_date(self._load_records(issues))

        top10_movies = resolve_top10(
            self._load_top10(ContentKind.TOP10_MOVIE, issues),
            records,
            TOP10_RECORD_CATEGORY[ContentKind.TOP10_MOVIE],
        )
        top10_games = resolve_top10(
            self._load_top10(ContentKind.TOP10_GAME, issues),
            records,
            TOP10_RECORD_CATEGORY[ContentKind.TOP10_GAME],
        )

        logger.info(
            "Loaded %d projects, %d writing, %d records (%d skipped)",
            len(projects),
            len(writing),
            len(records),
            len(issues),
        )
        return ContentSnapshot(
            projects=projects,
            writing=writing,
            records=records,
            top10_movies=top10_movies,
            top10_games=top10_games,
            issues=issues,
        )

    # --- Per-kind loading ---

    def _load_documents(self, kind: ContentKind, issues: list[LoadIssue]) -> list[ParsedContent]:
        parsed: list[ParsedContent] = []
        seen: set[str] = set()
        for path, load in self._source.documents(kind).items():
            slug = extract_slug(path)
            if slug in seen:
                self._duplicate(kind, path, slug, issues)
                continue
            text = self._read(kind, path, load, issues)
            if text is None:
                continue
            parse = partial(self._parse, kind, text, slug, path)
            item = self._guard(kind, path, slug, issues, parse)
            if item is not None:
                seen.add(slug)
                parsed.append(item)
        return parsed

    def _parse(self, kind: ContentKind, text: str, slug: str, path: str) -> ParsedContent:
        if kind == ContentKind.WRITING:
            return parse_writing(text, slug, path, speed=self._speed)
        return parse_document(get_parser_spec(kind), text, slug, path=path, speed=self._speed)

    def _load_records(self, issues: list[LoadIssue]) -> list[ParsedContent]:
        kind = ContentKind.RECORD
        parsed: list[ParsedContent] = []
        seen: set[str] = set()
        for path, load in self._source.documents(kind).items():
            text = self._read(kind, path, load, issues)
            if text is None:
                continue
            for slug, parse in record_block_parsers(text, path, speed=self._speed):
                if slug in seen:
                    self._duplicate(kind, path, slug, issues)
                    continue
                item = self._guard(kind, path, slug, issues, parse)
                if item is not None:
                    seen.add(slug)
                    parsed.append(item)
        return parsed

    def _load_top10(self, kind: ContentKind, issues: list[LoadIssue]) -> list[ParsedContent]:
        entries: list[ParsedContent] = []
        for path, load in self._source.documents(kind).items():
            text = self._read(kind, path, load, issues)
            if text is None:
                continue
            for slug, parse in top10_block_parsers(text, kind, path=path):
                item = self._guard(kind, path, slug, issues, parse)
                if item is not None:
                    entries.append(item)
        return keep_named(entries)

    # --- Failure handling ---

    def _read(
        self,
        kind: ContentKind,
        path: str,
        load: Loader,
        issues: list[LoadIssue],
    ) -> str | None:
        try:
            return load()
        except (OSError, UnicodeDecodeError) as exc:
            if self._strict:
                raise
            logger.warning("Skipping unreadable %s file %s: %s", kind, path, exc)
            issues.append(
                LoadIssue(
                    code="READ_FAILED",
                    kind=kind.value,
                    path=path,
                    message=str(exc),
                )
            )
            return None

    def _guard(
        self,
        kind: ContentKind,
        path: str,
        slug: str,
        issues: list[LoadIssue],
        parse: Callable[[], ParsedContent],
    ) -> ParsedContent | None:
        try:
            return parse()
        except ParserValidationError as exc:
            if self._strict:
                raise
            logger.warning("Skipping %s %s (%s):\n%s", kind, slug, path, exc.format())
            issues.append(
                LoadIssue(
                    code="VALIDATION_FAILED",
                    kind=kind.value,
                    path=path,
                    slug=slug,
                    message=exc.message,
                    detail=exc.to_dict(),
                )
            )
            return None

    def _duplicate(
        self,
        kind: ContentKind,
        path: str,
        slug: str,
        issues: list[LoadIssue],
    ) -> None:
        logger.warning("Duplicate %s slug %r in %s; keeping the first", kind, slug, path)
        issues.append(
            LoadIssue(
                code="DUPLICATE_SLUG",
                kind=kind.value,
                path=path,
                slug=slug,
                message=f"Slug {slug!r} is already used by another {kind} document",
            )
        )
