from __future__ import annotations

import logging
from dataclasses import dataclass

from argateway.cache.file_cache import ContentCache
from argateway.cache.index import CacheIndex
from argateway.cache.stats import StatsStore
from argateway.config import Settings
from argateway.storage import ArweaveClient, load_wallet
from argateway.tasks import TaskRunner

logger = logging.getLogger(__name__)


@dataclass
class GatewayState:
    client: ArweaveClient
    cache: ContentCache
    index: CacheIndex
    stats: StatsStore
    runner: TaskRunner


def build_state(config: Settings) -> GatewayState:
    """Wire up the gateway. Raises KeyMissing/KeyInvalid without a usable key."""
    wallet = load_wallet(config.key_file)

    cache = ContentCache(config.cache_dir)
    index = CacheIndex(cache)
    count = index.refresh()
    logger.info("Cache %s holds %d entries (%d bytes)", cache.directory, count, index.total_size)

    runner = TaskRunner()
    client = ArweaveClient(wallet, cache, runner, config)
    return GatewayState(
        client=client,
        cache=cache,
        index=index,
        stats=StatsStore(config.stats_file),
        runner=runner,
    )
