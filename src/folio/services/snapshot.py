"""ContentSnapshot — the immutable result of one full load.

A snapshot is what pages consume: ordered collections per content type,
slug and category lookups, and the resolved top-10 lists. It is never
mutated; a reload produces a new snapshot that replaces the old one
wholesale.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from folio.domain.content import ParsedContent, Top10Entry


class LoadIssue(BaseModel):
    """A document (or block) skipped during loading, with the reason.

    Attributes:
        code: Machine-readable reason (``VALIDATION_FAILED``,
            ``READ_FAILED``, ``DUPLICATE_SLUG``).
        kind: Content kind being loaded.
        path: Logical source path.
        slug: Slug of the skipped document, when it got that far.
        message: Human-readable summary.
        detail: Structured payload, e.g. the full list of field errors.
    """

    model_config = {"frozen": True}

    code: str
    kind: str
    path: str
    slug: str | None = None
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)


class ContentSnapshot(BaseModel):
    """Every parsed collection from one load.

    ``projects``, ``writing`` and ``records`` are sorted newest first.
    ``top10_movies`` and ``top10_games`` are sorted by rank.
    """

    model_config = {"frozen": True}

    projects: list[ParsedContent] = Field(default_factory=list)
    writing: list[ParsedContent] = Field(default_factory=list)
    records: list[ParsedContent] = Field(default_factory=list)
    top10_movies: list[Top10Entry] = Field(default_factory=list)
    top10_games: list[Top10Entry] = Field(default_factory=list)
    issues: list[LoadIssue] = Field(default_factory=list)

    # --- Lookups ---

    def project_by_slug(self, slug: str) -> ParsedContent | None:
        return _find_slug(self.projects, slug)

    def writing_by_slug(self, slug: str) -> ParsedContent | None:
        return _find_slug(self.writing, slug)

    def record_by_slug(self, slug: str) -> ParsedContent | None:
        return _find_slug(self.records, slug)

    def writing_by_category(self, category: str) -> list[ParsedContent]:
        return [item for item in self.writing if item.category == category]

    def records_by_category(self, category: str) -> list[ParsedContent]:
        return [item for item in self.records if item.category == category]

    @property
    def ok(self) -> bool:
        """True when nothing was skipped."""
        return not self.issues

    def as_dict(self) -> dict[str, list[ParsedContent]]:
        """The ``{projects, writing, records}`` aggregate."""
        return {
            "projects": list(self.projects),
            "writing": list(self.writing),
            "records": list(self.records),
        }


def _find_slug(items: list[ParsedContent], slug: str) -> ParsedContent | None:
    for item in items:
        if item.slug == slug:
            return item
    return None
