import base64
import hashlib

import pytest
import respx
from fastapi.testclient import TestClient

from argateway.cache.file_cache import ContentCache
from argateway.cache.index import CacheIndex
from argateway.cache.stats import StatsStore
from argateway.config import Settings
from argateway.main import app
from argateway.state import GatewayState
from argateway.storage.client import ArweaveClient
from argateway.tasks import TaskRunner

PRIMARY = "https://primary.arweave.test"
BACKUP = "https://backup.arweave.test"

WALLET_ADDRESS = "vLRHFqCw1uHu75xqB4fCDW-QxpkpJxBtFD9g4QYUbfw"
TX_ID = "bNbA3TEQVL60xlgCcqdz4ZPHFZ711cZ3hmkpGttDt_U"
MISSING_TX_ID = "x" * 43

PNG_HEADER = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR"

MOCK_STATUS_CONFIRMED = {
    "block_height": 1000000,
    "block_indep_hash": "Bq3D0gtnD7Tjz4VWFYuMzj6T7qvV7wbnNzgWwlTXJq6mCnHUjyErEXWfANqmxtr1",
    "number_of_confirmations": 42,
}


def png_bytes(size: int = 10 * 1024) -> bytes:
    return PNG_HEADER + b"\x00" * (size - len(PNG_HEADER))


class FakeWallet:
    address = WALLET_ADDRESS


class FakeTransaction:
    """Stands in for arweave.Transaction: records tags, derives an id on sign."""

    created: list["FakeTransaction"] = []

    def __init__(self, wallet, data=b""):
        self.wallet = wallet
        self.data = data
        self.tags = []
        self.id = None
        self.api_url = None
        FakeTransaction.created.append(self)

    def add_tag(self, name, value):
        self.tags.append((name, value))

    def sign(self):
        digest = hashlib.sha256(self.data).digest()
        self.id = base64.urlsafe_b64encode(digest).rstrip(b"=").decode()

    @property
    def json_data(self):
        return {
            "id": self.id,
            "data": base64.urlsafe_b64encode(self.data).rstrip(b"=").decode(),
            "tags": [{"name": n, "value": v} for n, v in self.tags],
        }


@pytest.fixture(autouse=True)
def reset_fake_transactions():
    FakeTransaction.created.clear()
    yield
    FakeTransaction.created.clear()


@pytest.fixture
def test_settings(tmp_path):
    return Settings(
        cache_dir=str(tmp_path / "cache"),
        key_file=str(tmp_path / "key.store"),
        stats_file=str(tmp_path / "stats-cache.json"),
        gateway_url=PRIMARY,
        backup_gateway_url=BACKUP,
        request_timeout=5.0,
    )


@pytest.fixture
def content_cache(test_settings):
    return ContentCache(test_settings.cache_dir)


@pytest.fixture
def runner():
    return TaskRunner()


@pytest.fixture
def arweave_client(test_settings, content_cache, runner):
    return ArweaveClient(
        FakeWallet(),
        content_cache,
        runner,
        test_settings,
        transaction_factory=FakeTransaction,
    )


@pytest.fixture
def gateway_state(test_settings, content_cache, runner, arweave_client):
    index = CacheIndex(content_cache)
    index.refresh()
    return GatewayState(
        client=arweave_client,
        cache=content_cache,
        index=index,
        stats=StatsStore(test_settings.stats_file),
        runner=runner,
    )


@pytest.fixture
def gateway_mock():
    """Arweave gateway HTTP API; /info and transaction posts are answered by default."""
    with respx.mock(assert_all_called=False) as mock:
        mock.get(f"{PRIMARY}/info").respond(json={"network": "arweave.N.1", "height": 1000000})
        mock.post(f"{PRIMARY}/tx").respond(200, text="OK")
        yield mock


@pytest.fixture
def api(gateway_state, gateway_mock):
    app.state.gateway = gateway_state
    with TestClient(app) as client:
        yield client
    app.state.gateway = None


@pytest.fixture
def drain(api, gateway_state):
    """Wait for background tasks spawned by the previous request."""

    def _drain():
        api.portal.call(gateway_state.runner.drain)

    return _drain
