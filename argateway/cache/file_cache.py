from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

from argateway.models.cache import CacheEntry

logger = logging.getLogger(__name__)

DEFAULT_CACHE_DIR = Path("cache")


class ContentCache:
    """Directory-backed map from transaction id to raw transaction data.

    Entries are never evicted: data behind a transaction id is immutable, so a
    cached blob stays valid forever.
    """

    def __init__(self, cache_dir: Path | str | None = None):
        self._dir = Path(cache_dir) if cache_dir else DEFAULT_CACHE_DIR
        self._dir.mkdir(parents=True, exist_ok=True)

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, tx_id: str) -> Path:
        return self._dir / tx_id

    def has(self, tx_id: str) -> bool:
        return self._path(tx_id).is_file()

    def read(self, tx_id: str) -> bytes | None:
        path = self._path(tx_id)
        if not path.is_file():
            return None
        return path.read_bytes()

    def write(self, tx_id: str, data: bytes) -> Path:
        path = self._path(tx_id)
        path.write_bytes(data)
        return path

    def iter_entries(self) -> Iterator[CacheEntry]:
        for f in sorted(self._dir.iterdir()):
            if not f.is_file():
                continue
            try:
                st = f.stat()
            except FileNotFoundError:
                # removed between listing and stat
                continue
            yield CacheEntry.from_stat(f.name, st.st_size, st.st_mtime)
