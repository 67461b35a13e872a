"""
Storage client adapter for the Arweave network.

Reads (balance, status, data) go straight to the gateway HTTP API with httpx.
Transaction construction and signing are left to arweave-python-client,
which is synchronous, so that work runs in the default thread executor. The
signed transaction is posted to the gateway with httpx.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, Callable

import arweave
import httpx
import requests

from argateway.cache.file_cache import ContentCache
from argateway.config import Settings, settings
from argateway.errors import NetworkError, NotFound, SigningError
from argateway.tasks import TaskRunner

logger = logging.getLogger(__name__)

# Gateway answers that mean "no data here (yet)" rather than a failure.
_EMPTY_DATA_STATUSES = {202, 204, 404}


class ArweaveClient:
    def __init__(
        self,
        wallet: Any,
        cache: ContentCache,
        runner: TaskRunner,
        config: Settings | None = None,
        transaction_factory: Callable[..., Any] | None = None,
    ):
        self._wallet = wallet
        self._cache = cache
        self._runner = runner
        self._config = config or settings
        self._transaction_factory = transaction_factory or arweave.Transaction

    @property
    def cache(self) -> ContentCache:
        return self._cache

    async def _get(self, url: str) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._config.request_timeout, follow_redirects=True) as client:
            try:
                return await client.get(url)
            except httpx.TimeoutException:
                logger.error("GATEWAY TIMEOUT: %s", url)
                raise NetworkError("Arweave gateway request timed out.")
            except httpx.HTTPError as exc:
                logger.error("GATEWAY ERROR: %s: %s", url, exc)
                raise NetworkError(f"Arweave gateway unreachable: {exc}") from exc

    async def _post_json(self, url: str, payload: dict) -> httpx.Response:
        async with httpx.AsyncClient(timeout=self._config.request_timeout) as client:
            try:
                return await client.post(url, json=payload)
            except httpx.TimeoutException:
                logger.error("GATEWAY TIMEOUT: %s", url)
                raise NetworkError("Arweave gateway request timed out.")
            except httpx.HTTPError as exc:
                logger.error("GATEWAY ERROR: %s: %s", url, exc)
                raise NetworkError(f"Arweave gateway unreachable: {exc}") from exc

    async def get_network_info(self) -> dict:
        resp = await self._get(f"{self._config.primary_url}/info")
        if resp.status_code != 200:
            raise NetworkError(f"Network info request failed with HTTP {resp.status_code}.")
        return resp.json()

    async def get_wallet_address(self) -> str:
        return self._wallet.address

    async def get_balance(self) -> int:
        address = await self.get_wallet_address()
        resp = await self._get(f"{self._config.primary_url}/wallet/{address}/balance")
        if resp.status_code != 200:
            raise NetworkError(f"Balance request failed with HTTP {resp.status_code}.")
        try:
            return int(resp.text.strip())
        except ValueError:
            raise NetworkError(f"Unexpected balance response: {resp.text[:64]!r}")

    async def get_status(self, tx_id: str) -> dict:
        resp = await self._get(f"{self._config.primary_url}/tx/{tx_id}/status")
        if resp.status_code == 200:
            try:
                confirmed = resp.json()
            except ValueError:
                raise NetworkError(f"Unexpected status response: {resp.text[:64]!r}")
            return {"status": 200, "confirmed": confirmed}
        if resp.status_code == 202:
            return {"status": 202, "confirmed": None}
        if resp.status_code == 404:
            raise NotFound()
        raise NetworkError(f"Status request failed with HTTP {resp.status_code}.")

    async def _fetch_data(self, base_url: str, tx_id: str) -> bytes:
        resp = await self._get(f"{base_url}/{tx_id}")
        if resp.status_code in _EMPTY_DATA_STATUSES:
            return b""
        if resp.status_code != 200:
            raise NetworkError(f"Data request failed with HTTP {resp.status_code}.")
        return resp.content

    async def get_data(self, tx_id: str) -> bytes:
        loop = asyncio.get_running_loop()
        cached = await loop.run_in_executor(None, self._cache.read, tx_id)
        if cached is not None:
            logger.info("CACHE HIT for %s", tx_id)
            return cached

        logger.info("CACHE MISS: fetching %s from %s", tx_id, self._config.primary_url)
        started = time.monotonic()
        data = await self._fetch_data(self._config.primary_url, tx_id)
        if not data:
            logger.info("Primary gateway returned no data for %s, trying %s", tx_id, self._config.backup_url)
            data = await self._fetch_data(self._config.backup_url, tx_id)
        if not data:
            raise NotFound()

        logger.info("Fetched %s (%d bytes) in %dms", tx_id, len(data), (time.monotonic() - started) * 1000)
        self._runner.spawn(self._write_through(tx_id, data), name=f"write-through:{tx_id}")
        return data

    async def _write_through(self, tx_id: str, data: bytes) -> None:
        loop = asyncio.get_running_loop()
        await loop.run_in_executor(None, self._cache.write, tx_id, data)
        logger.info("Wrote %s to cache (%d bytes)", tx_id, len(data))

    def _create_signed(self, data: bytes, mime: str) -> Any:
        try:
            tx = self._transaction_factory(self._wallet, data=data)
            tx.api_url = self._config.primary_url
            tx.add_tag("Content-Type", mime)
            tx.sign()
        except requests.RequestException as exc:
            raise NetworkError(f"Arweave network request failed while signing: {exc}") from exc
        except Exception as exc:
            raise SigningError(f"Failed to sign transaction: {exc}") from exc
        return tx

    async def _upload(self, tx: Any) -> None:
        # Transaction.send() only logs a refused transaction, so the reply is checked here.
        resp = await self._post_json(f"{self._config.primary_url}/tx", tx.json_data)
        if resp.status_code != 200:
            logger.warning("Gateway refused %s: HTTP %s %s", tx.id, resp.status_code, resp.text[:200])
            raise NetworkError(f"Failed to upload transaction: HTTP {resp.status_code} {resp.text[:200]}".rstrip())

    async def post(self, data: bytes, mime: str) -> str:
        logger.info("Posting %d bytes (%s)", len(data), mime)
        loop = asyncio.get_running_loop()
        started = time.monotonic()

        tx = await loop.run_in_executor(None, self._create_signed, data, mime)
        await self._upload(tx)

        tx_id = tx.id
        logger.info("Posted %s in %dms", tx_id, (time.monotonic() - started) * 1000)
        self._runner.spawn(self._write_through(tx_id, data), name=f"write-through:{tx_id}")
        return tx_id
