"""Locating and reading ``folio.toml``.

The file is found the way git finds ``.git``: by checking the starting
directory and then each parent. ``FOLIO_CONFIG`` overrides the search.
"""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_FILENAME = "folio.toml"
CONFIG_ENV_VAR = "FOLIO_CONFIG"


class ConfigError(Exception):
    """Raised when a configuration file cannot be read or parsed."""


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest ``folio.toml`` at or above *start* (default: cwd).

    A non-empty ``FOLIO_CONFIG`` takes precedence over the search; if it
    names a missing file the result is None.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def read_toml(path: Path) -> dict[str, Any]:
    """Parse *path* as TOML.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        msg = f"Cannot read {path}: {exc}"
        raise ConfigError(msg) from exc
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc
