from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel

UPDATE_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class CacheEntry(BaseModel):
    name: str
    size: int
    update_time: str

    @classmethod
    def from_stat(cls, name: str, size: int, mtime: float) -> CacheEntry:
        return cls(
            name=name,
            size=size,
            update_time=datetime.fromtimestamp(mtime).strftime(UPDATE_TIME_FORMAT),
        )
