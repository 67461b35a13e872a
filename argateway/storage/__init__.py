from argateway.storage.client import ArweaveClient
from argateway.storage.wallet import load_wallet

__all__ = ["ArweaveClient", "load_wallet"]
