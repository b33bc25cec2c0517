"""Content discovery — where raw Markdown documents come from.

The parse pipeline never touches the filesystem directly. It asks a
:class:`ContentSource` for, per content kind, a mapping from a logical
path to a zero-argument loader returning the raw text. How paths are
discovered (directory scan, manifest, in-memory fixtures) is up to the
source.

Logical paths are POSIX-style and relative to the content root, e.g.
``writing/poetry/rain.md``. Writing category inference matches on
directory names inside these paths.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from functools import partial
from pathlib import Path
from typing import Protocol

from folio.domain.types import ContentKind

Loader = Callable[[], str]

# Map content kind to a glob pattern relative to the content root.
CONTENT_PATTERNS: dict[str, str] = {
    ContentKind.PROJECT: "projects/*.md",
    ContentKind.WRITING: "writing/**/*.md",
    ContentKind.RECORD: "records/**/*.md",
    ContentKind.TOP10_MOVIE: "top10/movies.md",
    ContentKind.TOP10_GAME: "top10/games.md",
}

# Directories to skip when discovering content files.
_SKIP_DIRS = frozenset({".git", ".obsidian", "node_modules", "drafts"})


class ContentSource(Protocol):
    """Supplies raw documents per content kind."""

    def documents(self, kind: str) -> Mapping[str, Loader]:
        """Return ``{logical_path: loader}`` for every document of *kind*."""
        ...


def read_text_file(path: Path) -> str:
    """Read a UTF-8 source file (a leading BOM is dropped)."""
    return path.read_text(encoding="utf-8-sig")


def find_content_files(root: Path, pattern: str) -> list[Path]:
    """Discover files under *root* matching a glob *pattern*.

    Skips hidden directories and :data:`_SKIP_DIRS`. Results are sorted
    so discovery order is deterministic.
    """
    if not root.exists():
        return []

    results: list[Path] = []
    for path in root.glob(pattern):
        if not path.is_file():
            continue
        relative_parts = path.relative_to(root).parts[:-1]
        if any(part in _SKIP_DIRS or part.startswith(".") for part in relative_parts):
            continue
        results.append(path)
    return sorted(results)


class FileSystemSource:
    """Content source backed by a directory tree.

    Args:
        root: Content root directory.
        patterns: Per-kind glob overrides; kinds not listed use
            :data:`CONTENT_PATTERNS`.
    """

    def __init__(self, root: Path, patterns: Mapping[str, str] | None = None) -> None:
        self.root = root
        self.patterns: dict[str, str] = {**CONTENT_PATTERNS, **(patterns or {})}

    def documents(self, kind: str) -> dict[str, Loader]:
        pattern = self.patterns.get(kind)
        if pattern is None:
            msg = f"Unknown content kind: {kind!r}"
            raise ValueError(msg)
        return {
            path.relative_to(self.root).as_posix(): partial(read_text_file, path)
            for path in find_content_files(self.root, pattern)
        }


def _constant(text: str) -> str:
    return text


class MemorySource:
    """Content source over an in-memory ``{kind: {path: text}}`` mapping."""

    def __init__(self, documents: Mapping[str, Mapping[str, str]] | None = None) -> None:
        self._documents: dict[str, dict[str, str]] = {
            str(kind): dict(docs) for kind, docs in (documents or {}).items()
        }

    def add(self, kind: str, path: str, text: str) -> None:
        self._documents.setdefault(str(kind), {})[path] = text

    def documents(self, kind: str) -> dict[str, Loader]:
        docs = self._documents.get(str(kind), {})
        return {path: partial(_constant, text) for path, text in sorted(docs.items())}
