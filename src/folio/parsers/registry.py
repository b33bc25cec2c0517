"""Parser spec registry keyed by content kind and optional category."""

from __future__ import annotations

from folio.domain.types import ContentKind
from folio.parsers.base import ParserSpec

PARSER_REGISTRY: dict[str, ParserSpec] = {}


def get_parser_spec(kind: str, category: str | None = None) -> ParserSpec:
    """Look up the spec for a content kind + optional category.

    Checks the ``{kind}/{category}`` registration first, then falls back
    to the kind itself.

    Raises:
        KeyError: If nothing is registered for the kind/category.
    """
    if category and f"{kind}/{category}" in PARSER_REGISTRY:
        return PARSER_REGISTRY[f"{kind}/{category}"]
    if kind in PARSER_REGISTRY:
        return PARSER_REGISTRY[kind]
    msg = f"No parser spec registered for kind={kind!r}, category={category!r}"
    raise KeyError(msg)


def register_parser_spec(key: str, spec: ParserSpec) -> None:
    """Register a parser spec under *key* (``kind`` or ``kind/category``).

    Re-registering the same spec is a no-op; replacing a different spec
    is refused.
    """
    normalized = key.strip()
    if not normalized:
        msg = "Parser spec key must not be empty"
        raise ValueError(msg)
    if not isinstance(spec, ParserSpec):
        msg = f"Parser spec {normalized!r} must be a ParserSpec"
        raise TypeError(msg)

    existing = PARSER_REGISTRY.get(normalized)
    if existing is not None and existing is not spec:
        msg = f"Parser spec {normalized!r} is already registered"
        raise ValueError(msg)
    PARSER_REGISTRY[normalized] = spec


# ---------------------------------------------------------------------------
# Registry population
# ---------------------------------------------------------------------------


def _builtin_specs() -> dict[str, ParserSpec]:
    from folio.parsers.project import PROJECT_SPEC
    from folio.parsers.record import RECORD_SPEC
    from folio.parsers.top10 import TOP10_GAME_SPEC, TOP10_MOVIE_SPEC
    from folio.parsers.writing import DEFAULT_CATEGORY, WRITING_SPECS

    specs: dict[str, ParserSpec] = {
        ContentKind.PROJECT.value: PROJECT_SPEC,
        ContentKind.RECORD.value: RECORD_SPEC,
        ContentKind.TOP10_MOVIE.value: TOP10_MOVIE_SPEC,
        ContentKind.TOP10_GAME.value: TOP10_GAME_SPEC,
        ContentKind.WRITING.value: WRITING_SPECS[DEFAULT_CATEGORY],
    }
    for category, spec in WRITING_SPECS.items():
        specs[f"{ContentKind.WRITING.value}/{category}"] = spec
    return specs


def _register_specs() -> None:
    PARSER_REGISTRY.update(_builtin_specs())


_register_specs()
