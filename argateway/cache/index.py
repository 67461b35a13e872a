from __future__ import annotations

import logging
import time
from typing import Iterable

from argateway.cache.file_cache import ContentCache
from argateway.models.cache import CacheEntry

logger = logging.getLogger(__name__)


class CacheIndex:
    """In-memory listing of the content cache, used by the status page.

    The listing is a display snapshot: it is rebuilt by ``refresh()`` and
    extended by ``add()`` after uploads, and may briefly lag the directory.
    """

    def __init__(self, cache: ContentCache):
        self._cache = cache
        self._entries: dict[str, CacheEntry] = {}
        self._total_size = 0

    def refresh(self) -> int:
        return self.replace(self._cache.iter_entries())

    def replace(self, entries: Iterable[CacheEntry]) -> int:
        """Swap in a fresh directory listing. Must run on the event loop thread."""
        listing = {entry.name: entry for entry in entries}
        self._entries = listing
        self._total_size = sum(e.size for e in listing.values())
        logger.debug("Cache index refreshed: %d entries, %d bytes", len(listing), self._total_size)
        return len(listing)

    def add(self, tx_id: str, size: int) -> None:
        previous = self._entries.get(tx_id)
        if previous is not None:
            self._total_size -= previous.size
        self._entries[tx_id] = CacheEntry.from_stat(tx_id, size, time.time())
        self._total_size += size

    @property
    def entries(self) -> list[CacheEntry]:
        return [self._entries[name] for name in sorted(self._entries)]

    @property
    def count(self) -> int:
        return len(self._entries)

    @property
    def total_size(self) -> int:
        return self._total_size

    def __contains__(self, tx_id: str) -> bool:
        return tx_id in self._entries
