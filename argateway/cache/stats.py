from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from argateway.models.wallet import WalletStats

logger = logging.getLogger(__name__)

DEFAULT_STATS_FILE = Path("stats-cache.json")


class StatsStore:
    """Single-file snapshot of the wallet address and balance."""

    def __init__(self, path: Path | str | None = None):
        self._path = Path(path) if path else DEFAULT_STATS_FILE

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> WalletStats:
        if not self._path.exists():
            return WalletStats()
        try:
            return WalletStats.model_validate(json.loads(self._path.read_text()))
        except (json.JSONDecodeError, UnicodeDecodeError, ValidationError, OSError) as exc:
            logger.warning("Corrupt stats snapshot %s, using defaults: %s", self._path, exc)
            return WalletStats()

    def save(self, stats: WalletStats) -> Path:
        self._path.write_text(stats.model_dump_json())
        return self._path
