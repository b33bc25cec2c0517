"""Tests for ContentCache — memoization, reload, single-flight loading."""

from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor

from folio.infrastructure.filesystem import MemorySource
from folio.services.cache import ContentCache
from folio.services.loader import ContentLoader
from folio.services.snapshot import ContentSnapshot


class CountingLoader:
    """Loader stub that counts calls and can be slowed down."""

    def __init__(self, delay: float = 0.0) -> None:
        self.calls = 0
        self.delay = delay
        self._lock = threading.Lock()

    def load_all(self) -> ContentSnapshot:
        with self._lock:
            self.calls += 1
        time.sleep(self.delay)
        return ContentSnapshot()


class TestContentCache:
    def test_lazy(self) -> None:
        loader = CountingLoader()
        cache = ContentCache(loader)
        assert cache.loaded is False
        assert loader.calls == 0

    def test_get_memoizes(self) -> None:
        loader = CountingLoader()
        cache = ContentCache(loader)
        first = cache.get()
        second = cache.get()
        assert first is second
        assert loader.calls == 1
        assert cache.loaded is True

    def test_load_replaces_snapshot(self) -> None:
        loader = CountingLoader()
        cache = ContentCache(loader)
        first = cache.get()
        reloaded = cache.load()
        assert reloaded is not first
        assert cache.get() is reloaded
        assert loader.calls == 2

    def test_concurrent_first_callers_share_one_load(self) -> None:
        loader = CountingLoader(delay=0.05)
        cache = ContentCache(loader)
        with ThreadPoolExecutor(max_workers=8) as pool:
            snapshots = list(pool.map(lambda _: cache.get(), range(8)))
        assert loader.calls == 1
        assert all(snapshot is snapshots[0] for snapshot in snapshots)


class TestTop10Accessors:
    def test_top10_from_snapshot(self, memory_source: MemorySource) -> None:
        cache = ContentCache(ContentLoader(memory_source))
        movies = cache.get_top10_movies()
        games = cache.get_top10_games()
        assert [entry.num for entry in movies] == [1, 2]
        assert movies[0].record.title == "Spirited Away"
        assert [entry.name for entry in games] == ["Outer Wilds"]
