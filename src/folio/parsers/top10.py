"""Top-10 list parser and the join against the record collection.

A top-10 file holds up to ten frontmatter-only blocks, each naming a
record by title::

    ---
    num: 1
    name: Spirited Away
    ---
    num: 2
    name: Paprika

``num`` must be an integer rank in [1, 10]; anything else is critical.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from folio.domain.content import ContentMetadata, ParsedContent, Top10Entry
from folio.domain.frontmatter import Top10Frontmatter
from folio.domain.types import ContentKind
from folio.domain.validation import FieldError, ValidationResult, is_missing, require_fields
from folio.parsers.base import ParserSpec

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("num", "name")
RANK_RANGE = (1, 10)


def coerce_rank(value: Any) -> int | None:
    """Return *value* as an integer rank, or ``None`` if it is not integral.

    Examples:
        >>> coerce_rank(3), coerce_rank("7"), coerce_rank(2.0)
        (3, 7, 2)
        >>> coerce_rank(True) is None, coerce_rank(2.5) is None
        (True, True)
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_top10(data: Mapping[str, Any]) -> ValidationResult:
    errors = require_fields(data, REQUIRED_FIELDS)
    num = data.get("num")
    if not is_missing(num):
        rank = coerce_rank(num)
        low, high = RANK_RANGE
        if rank is None or not low <= rank <= high:
            errors.append(
                FieldError(
                    field="num",
                    message=f"'num' must be an integer between {low} and {high}",
                    severity="critical",
                    value=num,
                )
            )
    return ValidationResult.build(errors)


def top10_defaults(data: dict[str, Any], metadata: ContentMetadata) -> dict[str, Any]:
    data["num"] = coerce_rank(data.get("num"))
    return data


TOP10_MOVIE_SPEC = ParserSpec(
    name=ContentKind.TOP10_MOVIE.value,
    model=Top10Frontmatter,
    validate=validate_top10,
    apply_defaults=top10_defaults,
)

TOP10_GAME_SPEC = ParserSpec(
    name=ContentKind.TOP10_GAME.value,
    model=Top10Frontmatter,
    validate=validate_top10,
    apply_defaults=top10_defaults,
)


def resolve_top10(
    entries: Iterable[ParsedContent],
    records: Iterable[ParsedContent],
    category: str,
) -> list[Top10Entry]:
    """Join ranked entries to the records they name.

    A name matches a record of *category* whose title is exactly equal.
    Unmatched names are logged and left out. The result is sorted by
    ascending rank.
    """
    by_title: dict[str, ParsedContent] = {}
    for record in records:
        if record.category == category and record.title is not None:
            by_title.setdefault(record.title, record)

    resolved: list[Top10Entry] = []
    for entry in entries:
        name = getattr(entry.frontmatter, "name", None)
        num = getattr(entry.frontmatter, "num", None)
        record = by_title.get(name) if name is not None else None
        if record is None or num is None:
            logger.warning("Top-10 %s entry %r has no matching record", category, name)
            continue
        resolved.append(Top10Entry(num=num, record=record))

    resolved.sort(key=lambda item: item.num)
    return resolved
