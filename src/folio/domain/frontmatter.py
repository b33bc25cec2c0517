"""Frontmatter schema models per content type.

Keys are written in camelCase in the Markdown sources (``statusColor``,
``showToc``, ``readTime``); the models expose snake_case attributes and
accept either spelling. Unknown keys are kept (``extra="allow"``) so
that site-specific fields survive parsing.

The models are deliberately lenient: enumerations are plain strings
because an unrecognised status or category is a recoverable validation
error, not a reason to drop the document. Validation lives in the
parser specs; these models only describe the normalised shape.

All models are frozen.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from folio.domain.dates import normalize_date

# --- Enumerations ---


class ProjectStatus(StrEnum):
    COMPLETED = "completed"
    IN_PROGRESS = "in-progress"
    PLANNED = "planned"


class StatusColor(StrEnum):
    RED = "red"
    WHITE = "white"
    GREEN = "green"
    BLUE = "blue"
    YELLOW = "yellow"
    PINK = "pink"


class WritingCategory(StrEnum):
    ESSAY = "essay"
    ANNUAL = "annual"
    FICTION = "fiction"
    POETRY = "poetry"


class RecordCategory(StrEnum):
    MOVIE = "movie"
    BOOK = "book"
    GAME = "game"
    MUSIC = "music"


# Localized project status labels accepted in frontmatter.
STATUS_ALIASES: dict[str, str] = {
    "已完成": ProjectStatus.COMPLETED.value,
    "进行中": ProjectStatus.IN_PROGRESS.value,
    "计划中": ProjectStatus.PLANNED.value,
}

# The creator field each record category is expected to carry.
RECORD_CREATOR_FIELDS: dict[str, str] = {
    RecordCategory.MOVIE.value: "director",
    RecordCategory.BOOK.value: "author",
    RecordCategory.GAME.value: "developer",
    RecordCategory.MUSIC.value: "artist",
}

DEFAULT_STATUS_COLOR = StatusColor.BLUE.value


# --- Models ---


class BaseFrontmatter(BaseModel):
    """Shared configuration for every frontmatter model."""

    model_config = ConfigDict(
        frozen=True,
        extra="allow",
        populate_by_name=True,
        alias_generator=to_camel,
        coerce_numbers_to_str=True,
    )

    @field_validator("date", mode="before", check_fields=False)
    @classmethod
    def date_as_text(cls, value: Any) -> Any:
        return normalize_date(value)

    @field_validator("tags", mode="before", check_fields=False)
    @classmethod
    def tags_as_list(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, str):
            return [value] if value.strip() else []
        if isinstance(value, (list, tuple)):
            return [item for item in value if item is not None]
        return []

    def to_frontmatter(self) -> dict[str, Any]:
        """Serialize back to a camelCase dict, omitting unset optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class ProjectFrontmatter(BaseFrontmatter):
    """Frontmatter for a portfolio project."""

    title: str
    description: str
    date: str
    tags: list[str] = Field(default_factory=list)
    status: str
    status_color: str = DEFAULT_STATUS_COLOR
    image: str | None = None
    link: str | None = None
    version: str | None = None
    english_title: str | None = None


class WritingFrontmatter(BaseFrontmatter):
    """Frontmatter for essays, annual reviews, fiction and poetry."""

    title: str
    description: str | None = None
    date: str
    category: str = WritingCategory.ESSAY.value
    tags: list[str] = Field(default_factory=list)
    years: str | list[str] | None = None
    word_count: int = 0
    read_time: int | float | None = None
    show_toc: bool = False
    status_color: str = DEFAULT_STATUS_COLOR


class RecordFrontmatter(BaseFrontmatter):
    """Frontmatter for a movie, book, game or album record."""

    title: str
    category: str
    date: str
    rating: float | None = None
    tags: list[str] = Field(default_factory=list)
    cover: str | None = None
    author: str | None = None
    director: str | None = None
    developer: str | None = None
    artist: str | None = None
    notes: str | None = None

    @property
    def creator(self) -> str | None:
        """The creator field matching this record's category, if set."""
        field_name = RECORD_CREATOR_FIELDS.get(self.category)
        return getattr(self, field_name) if field_name else None


class Top10Frontmatter(BaseFrontmatter):
    """One ranked entry of a top-10 list; ``name`` joins to a record title."""

    num: int
    name: str
