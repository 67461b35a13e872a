from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Callable

import arweave

from argateway.errors import KeyInvalid, KeyMissing

logger = logging.getLogger(__name__)


def load_wallet(key_file: Path | str, wallet_factory: Callable[[str], Any] | None = None) -> Any:
    """Load the JWK keystore and build an SDK wallet from it.

    Read once at startup; the gateway must not serve without a usable key.
    """
    path = Path(key_file)
    if not path.is_file():
        raise KeyMissing(f"Arweave keystore not found: {path}")

    try:
        jwk = json.loads(path.read_text())
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise KeyInvalid(f"Arweave keystore {path} is not valid JSON.") from exc
    if not isinstance(jwk, dict) or "n" not in jwk:
        raise KeyInvalid(f"Arweave keystore {path} is not an RSA JWK.")

    factory = wallet_factory or arweave.Wallet
    try:
        wallet = factory(str(path))
    except Exception as exc:
        raise KeyInvalid(f"Arweave keystore {path} was rejected: {exc}") from exc

    logger.info("Loaded wallet %s from %s", wallet.address, path)
    return wallet
