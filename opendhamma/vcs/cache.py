"""Time-bounded in-memory cache in front of a ContentSource."""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict

from opendhamma.vcs.base import ContentSource
from opendhamma.vcs.models import RemoteDirectoryEntry, RemoteFile
from opendhamma.vcs.paths import join_paths

logger = logging.getLogger(__name__)

_CacheKey = tuple[str, str, str, str | None]


class CachedContentSource(ContentSource):
    """Caches lookups by (operation, repo, path, revision) for ttl_seconds.

    Not-found results are cached like any other; errors are not.
    """

    def __init__(
        self,
        source: ContentSource,
        ttl_seconds: int = 300,
        max_entries: int = 512,
        clock=time.monotonic,
    ) -> None:
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: OrderedDict[_CacheKey, tuple[float, object]] = OrderedDict()

    async def get_file(
        self,
        repo: str,
        path: str,
        base_path: str | None = None,
        revision: str | None = None,
    ) -> RemoteFile | None:
        key = ("file", repo, join_paths(base_path, path), revision)
        hit, value = self._lookup(key)
        if hit:
            return value  # type: ignore[return-value]
        value = await self.source.get_file(repo, path, base_path, revision)
        self._store(key, value)
        return value

    async def get_directory(
        self,
        repo: str,
        path: str = "",
        base_path: str | None = None,
        revision: str | None = None,
    ) -> list[RemoteDirectoryEntry] | None:
        key = ("dir", repo, join_paths(base_path, path), revision)
        hit, value = self._lookup(key)
        if hit:
            return list(value) if value is not None else None  # type: ignore[arg-type]
        value = await self.source.get_directory(repo, path, base_path, revision)
        self._store(key, value)
        return list(value) if value is not None else None

    def invalidate(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _lookup(self, key: _CacheKey) -> tuple[bool, object]:
        if self.ttl_seconds <= 0:
            return False, None
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return False, None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                return False, None
            logger.debug("Cache hit: %s %s/%s", key[0], key[1], key[2])
            return True, value

    def _store(self, key: _CacheKey, value: object) -> None:
        if self.ttl_seconds <= 0:
            return
        with self._lock:
            self._entries[key] = (self._clock(), value)
            self._entries.move_to_end(key)
            while len(self._entries) > self.max_entries:
                self._entries.popitem(last=False)
