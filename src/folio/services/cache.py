"""ContentCache — process-lifetime memoization of a ContentSnapshot.

INVARIANT: At most one load runs at a time. Callers that arrive while
the first load is in flight block on the same lock and receive its
snapshot instead of starting a second load.

The cache owns no global state; whoever composes the application
creates one and passes it to whatever needs content.
"""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Protocol

from folio.domain.content import Top10Entry
from folio.services.loader import ContentLoader
from folio.services.snapshot import ContentSnapshot

if TYPE_CHECKING:
    from folio.config.settings import FolioSettings

logger = logging.getLogger(__name__)


class SnapshotLoader(Protocol):
    def load_all(self) -> ContentSnapshot: ...


class ContentCache:
    """Loads content once and hands out the same snapshot afterwards.

    Usage::

        cache = ContentCache(ContentLoader(FileSystemSource(root)))
        snapshot = cache.get()      # first call loads
        snapshot = cache.get()      # memoized
        snapshot = cache.load()     # explicit full reload
    """

    def __init__(self, loader: SnapshotLoader) -> None:
        self._loader = loader
        self._snapshot: ContentSnapshot | None = None
        self._lock = threading.Lock()

    @classmethod
    def from_settings(cls, settings: FolioSettings) -> ContentCache:
        return cls(ContentLoader.from_settings(settings))

    @property
    def loaded(self) -> bool:
        return self._snapshot is not None

    def get(self) -> ContentSnapshot:
        """Return the memoized snapshot, loading it on first use."""
        snapshot = self._snapshot
        if snapshot is not None:
            return snapshot
        with self._lock:
            if self._snapshot is None:
                logger.debug("Content cache empty, loading")
                self._snapshot = self._loader.load_all()
            return self._snapshot

    def load(self) -> ContentSnapshot:
        """Reload everything and replace the snapshot wholesale."""
        with self._lock:
            snapshot = self._loader.load_all()
            self._snapshot = snapshot
            logger.debug("Content cache reloaded")
            return snapshot

    def get_top10_movies(self) -> list[Top10Entry]:
        return self.get().top10_movies

    def get_top10_games(self) -> list[Top10Entry]:
        return self.get().top10_games
