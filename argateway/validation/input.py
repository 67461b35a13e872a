from __future__ import annotations

import re

from argateway.errors import PayloadTooLarge, ValidationError

TX_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{43}$")

VALID_MIME = (
    "image/png",
    "image/jpeg",
    "image/jpg",
    "image/gif",
    "image/bmp",
)


def validate_tx_id(tx_id: str) -> str:
    tx_id = tx_id.strip()
    if not TX_ID_RE.match(tx_id):
        raise ValidationError("Invalid transaction id.")
    return tx_id


def validate_mime(mime: str | None) -> str:
    if mime not in VALID_MIME:
        raise ValidationError("File type invalid.")
    return mime


def validate_size(size: int, limit: int) -> int:
    if size > limit:
        raise PayloadTooLarge()
    return size
