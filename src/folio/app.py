"""Composition root: settings -> logging -> loader -> cache."""

from __future__ import annotations

from typing import Any

from folio.config.logging import configure_logging
from folio.config.settings import FolioSettings
from folio.services.cache import ContentCache


def create_cache(
    settings: FolioSettings | None = None,
    *,
    setup_logging: bool = True,
    **options: Any,
) -> ContentCache:
    """Build a ready-to-use :class:`ContentCache`.

    Without *settings*, they are resolved with
    :meth:`FolioSettings.from_options` using *options*. Nothing is
    loaded until the cache is first read.
    """
    if settings is None:
        settings = FolioSettings.from_options(**options)
    if setup_logging:
        configure_logging(verbose=settings.verbose, log_json=settings.log_json)
    return ContentCache.from_settings(settings)
