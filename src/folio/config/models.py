"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, folio.toml only contains
overrides. An empty (or missing) folio.toml loads ``./content``.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

# --- folio.toml sections ---


class ContentConfig(BaseModel):
    """[content] section.

    ``root`` is resolved against the directory holding folio.toml.
    ``patterns`` overrides the per-kind discovery globs, e.g.
    ``{"record" = "records/*.md"}``.
    """

    model_config = {"frozen": True}

    root: str = "content"
    patterns: dict[str, str] = Field(default_factory=dict)
    strict: bool = False


class ReadingConfig(BaseModel):
    """[reading] section."""

    model_config = {"frozen": True}

    latin_words_per_minute: float = Field(default=300.0, gt=0)
    cjk_chars_per_minute: float = Field(default=500.0, gt=0)
    mixed_words_per_minute: float = Field(default=350.0, gt=0)
