"""FolioSettings: one frozen object built from every configuration layer.

Highest priority first:

1. keyword options passed by the embedding application,
2. ``FOLIO_*`` environment variables (``FOLIO_CONTENT__STRICT=1``),
3. ``folio.toml``, explicit or found by walking up,
4. the defaults in :mod:`folio.config.models`.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from folio.config.discovery import ConfigError, find_config, read_toml
from folio.config.models import ContentConfig, ReadingConfig

logger = logging.getLogger(__name__)

# Derived from where the config file lives, never read from it.
RESOLVED_FIELDS = frozenset({"project_root", "config_path"})


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings layer backed by the sections of a ``folio.toml`` file."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path is None:
            return
        known = set(settings_cls.model_fields) - RESOLVED_FIELDS
        for key, value in read_toml(toml_path).items():
            if key in known:
                self._data[key] = value
            else:
                logger.warning("Ignoring unknown key %r in %s", key, toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# The TOML path for the settings object currently being built.
_tls = threading.local()


@contextmanager
def _toml_layer(toml_path: Path | None) -> Iterator[None]:
    _tls.toml_path = toml_path
    try:
        yield
    finally:
        _tls.toml_path = None


def resolve_config_path(
    config_path: str | Path | None, project_root: Path | None
) -> Path | None:
    """Pick the TOML file to read.

    An explicit *config_path* must exist. Without one, ``folio.toml`` is
    searched for from *project_root* (or the working directory) upward.

    Raises:
        ConfigError: If an explicit *config_path* is not a file.
    """
    if config_path is None:
        return find_config(project_root)
    path = Path(config_path)
    if not path.is_file():
        msg = f"Config file not found: {path}"
        raise ConfigError(msg)
    return path


class FolioSettings(BaseSettings):
    """Settings for one content pipeline.

    Attributes:
        project_root: Base for a relative ``content.root``. Defaults to
            the directory holding the config file, else the working
            directory.
        config_path: The TOML file that was read, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FOLIO_",
        "env_nested_delimiter": "__",
    }

    project_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    verbose: bool = False
    log_json: bool = False

    content: ContentConfig = Field(default_factory=ContentConfig)
    reading: ReadingConfig = Field(default_factory=ReadingConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None))
        return init_settings, env_settings, toml

    @property
    def content_root(self) -> Path:
        """The content directory, absolute when ``content.root`` is."""
        root = Path(self.content.root)
        return root if root.is_absolute() else self.project_root / root

    @classmethod
    def from_options(
        cls,
        *,
        config_path: str | Path | None = None,
        project_root: Path | None = None,
        **options: Any,
    ) -> FolioSettings:
        """Build settings, with *options* overriding every other layer.

        Raises:
            ConfigError: If the config file is missing or not valid TOML.
        """
        toml_path = resolve_config_path(config_path, project_root)
        if project_root is None:
            project_root = toml_path.parent if toml_path else Path.cwd()

        with _toml_layer(toml_path):
            return cls(project_root=project_root, config_path=toml_path, **options)
